from __future__ import annotations

"""Presentation helpers for simulation results.

Nothing here feeds back into the engine; these functions only read
``SimulationResult`` values and turn them into summaries or text lines.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence

from freedom import FREEDOM_THRESHOLD, FreedomStatus
from simulator import HistoryEntry, PeriodResult, SimulationResult

CENT = Decimal("0.01")
SCHEDULE_ROWS = 60


def format_money(value: Optional[Decimal]) -> str:
    value = Decimal(value or 0).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


@dataclass(frozen=True)
class DebtSummary:
    starting_balance: Decimal
    total_interest: Decimal
    total_paid: Decimal
    payoff_index: Optional[int]
    payoff_label: Optional[str]

    @property
    def periods_to_payoff(self) -> Optional[int]:
        if self.payoff_index is None:
            return None
        return self.payoff_index + 1


def debt_summary(history: Sequence[HistoryEntry]) -> Optional[DebtSummary]:
    """Summarise one debt's schedule; ``None`` when it was never simulated."""

    if not history:
        return None
    payoff_index = next(
        (i for i, h in enumerate(history) if h.ending_balance <= FREEDOM_THRESHOLD),
        None,
    )
    return DebtSummary(
        starting_balance=history[0].starting_balance,
        total_interest=sum((h.total_charges for h in history), Decimal("0")),
        total_paid=sum((h.total_paid for h in history), Decimal("0")),
        payoff_index=payoff_index,
        payoff_label=history[payoff_index].label if payoff_index is not None else None,
    )


def freedom_lines(result: SimulationResult) -> List[str]:
    freedom = result.freedom
    if freedom.status is FreedomStatus.FREE:
        row = result.periods[freedom.index]
        when = f"Debt-free on {row.label} ({freedom.periods_to_freedom} periods)"
    elif freedom.status is FreedomStatus.NO_DATA:
        when = "No data to simulate"
    else:
        when = "Never: interest exceeds payments"
    target = result.current_target or "Free!"
    return [
        when,
        f"Current target: {target}",
        f"Total interest + VAT: {format_money(result.total_interest)}",
    ]


def period_line(row: PeriodResult) -> str:
    target = row.target_name
    if not target:
        if row.saving_details:
            target = ", ".join(s.name for s in row.saving_details)
        elif row.end_balance < 10:
            target = "FREE"
    extra = f"-{format_money(row.extra_paid)}" if row.strategy_details else "-"
    return (
        f"{row.index:>3} {row.label:>10} cash={format_money(row.initial_cash)} "
        f"min=-{format_money(row.min_paid)} extra={extra} "
        f"target={target} balance={format_money(row.end_balance)}"
        + (f"  [{row.notes}]" if row.notes else "")
    )


def action_plan_lines(row: PeriodResult) -> List[str]:
    """Detailed receipt for one period, including the minimum breakdown."""

    lines = [
        f"Period {row.index} ({row.label})",
        f"  Income:    {format_money(row.income)}",
        f"  Expenses: -{format_money(row.expenses)}",
        f"  Available: {format_money(row.initial_cash)}",
        "  Minimums:",
    ]
    if not row.min_details:
        lines.append("    No minimum payments.")
    for m in row.min_details:
        flag = "" if m.on_track else "  <<< AT RISK"
        lines.append(f"    {m.name}: -{format_money(m.paid)}{flag}")
        lines.append(
            f"      monthly minimum {format_money(m.monthly_min)}"
            f" (regulatory reference {format_money(m.floor)})"
        )
        next_due = m.next_due_date.isoformat() if m.next_due_date else "-"
        lines.append(
            f"      first due {m.first_due_date.isoformat()}, next unpaid due {next_due}"
        )
        lines.append(
            f"      required so far {format_money(m.required_before)},"
            f" overdue {format_money(m.remaining_after)}"
        )
    lines.append("  Strategy:")
    if not row.strategy_details:
        lines.append("    No surplus for the strategy.")
    for s in row.strategy_details:
        lines.append(f"    {s.name} (accelerator): -{format_money(s.amount)}")
    lines.append("  Savings:")
    if not row.saving_details:
        lines.append("    No goal contributions this period.")
    for s in row.saving_details:
        lines.append(f"    {s.name}: -{format_money(s.amount)}")
    lines.append(f"  Ending debt: {format_money(row.end_balance)}")
    lines.append(f"  Pocket:      {format_money(row.pocket)}")
    return lines


def debt_schedule_lines(name: str, history: Sequence[HistoryEntry]) -> List[str]:
    summary = debt_summary(history)
    if summary is None:
        return [f"{name}: no simulation yet."]
    if summary.periods_to_payoff:
        payoff = f"paid off in about {summary.periods_to_payoff} periods ({summary.payoff_label})"
    else:
        payoff = "not paid off with the current setup"
    lines = [
        f"{name}: starting {format_money(summary.starting_balance)}, "
        f"interest + VAT {format_money(summary.total_interest)}, "
        f"paid {format_money(summary.total_paid)}, {payoff}",
    ]
    for i, h in enumerate(history[:SCHEDULE_ROWS], 1):
        lines.append(
            f"{i:>3} {h.label:>10} min={format_money(h.min_paid)} "
            f"extra={format_money(h.extra_paid)} total={format_money(h.total_paid)} "
            f"charges={format_money(h.total_charges)} end={format_money(h.ending_balance)}"
        )
    return lines
