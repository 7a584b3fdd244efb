"""Cash available for one semi-monthly period.

Every period receives the same net salary and pays the same fixed expenses
and discretionary allowance. One-off events are added to the single period
whose window contains their date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from dates import in_window
from snapshot import EventType, Snapshot


@dataclass
class PeriodCash:
    """Income and expense totals for one period."""

    income: Decimal
    expenses: Decimal
    event_log: List[str] = field(default_factory=list)

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


def period_cash(snapshot: Snapshot, previous_end: Optional[date], period_end: date) -> PeriodCash:
    """Return the period's income and expenses including dated events.

    Parameters
    ----------
    snapshot:
        The run's input snapshot.
    previous_end:
        End date of the previous period, or ``None`` for the first period.
    period_end:
        End date of this period (inclusive).
    """

    cash = PeriodCash(
        income=snapshot.net_income,
        expenses=snapshot.fixed_total + snapshot.discretionary,
    )
    for ev in snapshot.events:
        if not in_window(ev.date, previous_end, period_end, snapshot.start_date):
            continue
        if ev.type is EventType.INCOME:
            cash.income += ev.amount
            cash.event_log.append(f"+{ev.name}")
        else:
            cash.expenses += ev.amount
            cash.event_log.append(f"-{ev.name}")
    return cash
