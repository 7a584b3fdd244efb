from __future__ import annotations

"""Project debt payoff and savings quincena by quincena.

The simulation starts on the snapshot's start date, which closes the first
period, and then advances to the end of each half month (the last day of
the month, then the 15th of the next one). In every period:

1. net salary, fixed expenses, the discretionary allowance and any dated
   events in the period's window are netted together with last period's
   leftover cash;
2. semi-monthly interest plus VAT is capitalised on every open balance;
3. new monthly obligations are rolled forward for due dates that passed;
4. minimum payments are settled by due date (``obligations``);
5. whatever is left is applied according to the selected strategy
   (``strategies``);
6. balances under one unit are snapped to zero;
7. once the portfolio is clear, leftover cash funds savings goals
   (``goals``) and the remainder is carried into the next period.

The run stops when both debts and goal shortfalls are effectively zero, or
after 120 periods. Hitting the cap without clearing the debts is reported as
``FreedomStatus.NEVER``, not as an error.
"""

import copy
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from cash_flow import period_cash
from dates import format_short, next_period_end
from freedom import FREEDOM_THRESHOLD, FreedomProjection, FreedomStatus, FreedomTracker
from goals import GoalProgress, fund_goals, goal_shortfall
from interest import accrue
from obligations import MinimumDetail, ObligationQueue, seed_queues, settle_minimums
from snapshot import Debt, Snapshot
from strategies import Allocation, allocate_extra, current_target

logger = logging.getLogger(__name__)

MAX_PERIODS = 120
SNAP_EPSILON = Decimal("1")

ZERO = Decimal("0")


@dataclass(frozen=True)
class HistoryEntry:
    """One period of a single debt's schedule."""

    period_end: date
    label: str
    starting_balance: Decimal
    interest: Decimal
    surcharge: Decimal
    min_paid: Decimal
    extra_paid: Decimal
    ending_balance: Decimal

    @property
    def total_paid(self) -> Decimal:
        return self.min_paid + self.extra_paid

    @property
    def total_charges(self) -> Decimal:
        return self.interest + self.surcharge


@dataclass(frozen=True)
class PeriodResult:
    index: int
    period_end: date
    label: str
    income: Decimal
    expenses: Decimal
    initial_cash: Decimal
    min_details: Tuple[MinimumDetail, ...]
    min_paid: Decimal
    strategy_details: Tuple[Allocation, ...]
    target_name: str
    saving_details: Tuple[Allocation, ...]
    end_balance: Decimal
    pocket: Decimal
    notes: str

    @property
    def extra_paid(self) -> Decimal:
        return sum((a.amount for a in self.strategy_details), ZERO)


@dataclass(frozen=True)
class SimulationResult:
    periods: Tuple[PeriodResult, ...]
    histories: Dict[object, Tuple[HistoryEntry, ...]]
    total_interest: Decimal
    freedom: FreedomProjection
    current_target: Optional[str]


@dataclass
class _Activity:
    starting_balance: Decimal
    interest: Decimal = ZERO
    surcharge: Decimal = ZERO
    min_paid: Decimal = ZERO
    extra_paid: Decimal = ZERO


@dataclass
class _RunState:
    """Mutable working set for one run; never shared between runs."""

    snapshot: Snapshot
    debts: List[Debt]
    goals: List[GoalProgress]
    queues: Dict[object, ObligationQueue]
    period_end: date
    previous_end: Optional[date] = None
    carry_over: Decimal = ZERO
    total_interest: Decimal = ZERO
    periods: List[PeriodResult] = field(default_factory=list)
    histories: Dict[object, List[HistoryEntry]] = field(default_factory=dict)
    freedom: FreedomTracker = field(default_factory=FreedomTracker)

    @classmethod
    def start(cls, snapshot: Snapshot) -> "_RunState":
        debts = copy.deepcopy(list(snapshot.debts))
        return cls(
            snapshot=snapshot,
            debts=debts,
            goals=[GoalProgress.from_goal(g) for g in snapshot.goals],
            queues=seed_queues(debts, snapshot.start_date),
            period_end=snapshot.start_date,
            histories={d.id: [] for d in debts},
        )

    def debt_total(self) -> Decimal:
        return sum((d.balance for d in self.debts), ZERO)


def _simulate_period(state: _RunState) -> PeriodResult:
    snapshot = state.snapshot
    index = len(state.periods)
    period_end = state.period_end

    flows = period_cash(snapshot, state.previous_end, period_end)
    cash = flows.net + state.carry_over
    initial_cash = cash

    activity: Dict[object, _Activity] = {}
    for debt in state.debts:
        charge = accrue(debt)
        if charge is None:
            continue
        state.total_interest += charge.total
        activity[debt.id] = _Activity(
            starting_balance=charge.starting_balance,
            interest=charge.interest,
            surcharge=charge.surcharge,
        )

    for debt in state.debts:
        queue = state.queues.get(debt.id)
        if queue is not None:
            queue.roll_forward(debt, period_end)

    before = {d.id: d.balance for d in state.debts}
    cash, min_paid = settle_minimums(state.debts, state.queues, cash)
    for debt_id, paid in min_paid.items():
        if paid > 0:
            activity.setdefault(debt_id, _Activity(before[debt_id])).min_paid += paid

    min_details = tuple(
        state.queues[d.id].breakdown(d, min_paid.get(d.id, ZERO), period_end)
        for d in state.debts
        if d.id in state.queues
    )

    before = {d.id: d.balance for d in state.debts}
    cash, strategy_log, target_name = allocate_extra(state.debts, snapshot.strategy, cash)
    for alloc in strategy_log:
        activity.setdefault(alloc.id, _Activity(before[alloc.id])).extra_paid += alloc.amount

    for debt in state.debts:
        if debt.balance < SNAP_EPSILON:
            debt.balance = ZERO

    debt_remaining = state.debt_total()
    if state.freedom.observe(index, period_end, debt_remaining):
        logger.info("Debt-free in period %d (%s)", index + 1, period_end.isoformat())

    saving_log: List[Allocation] = []
    if debt_remaining <= FREEDOM_THRESHOLD:
        cash, saving_log = fund_goals(state.goals, cash)

    pocket = max(ZERO, cash)
    state.carry_over = pocket

    notes_parts = []
    if flows.event_log:
        notes_parts.append(", ".join(flows.event_log))
    if saving_log:
        notes_parts.append("Savings: " + ", ".join(s.name for s in saving_log))

    label = format_short(period_end)
    row = PeriodResult(
        index=index + 1,
        period_end=period_end,
        label=label,
        income=flows.income,
        expenses=flows.expenses,
        initial_cash=initial_cash,
        min_details=min_details,
        min_paid=sum(min_paid.values(), ZERO),
        strategy_details=tuple(strategy_log),
        target_name=target_name,
        saving_details=tuple(saving_log),
        end_balance=debt_remaining,
        pocket=pocket,
        notes=" / ".join(notes_parts),
    )
    state.periods.append(row)

    for debt in state.debts:
        history = state.histories[debt.id]
        rec = activity.get(debt.id)
        if rec is None:
            rec = _Activity(history[-1].ending_balance if history else debt.balance)
        history.append(
            HistoryEntry(
                period_end=period_end,
                label=label,
                starting_balance=rec.starting_balance,
                interest=rec.interest,
                surcharge=rec.surcharge,
                min_paid=rec.min_paid,
                extra_paid=rec.extra_paid,
                ending_balance=debt.balance,
            )
        )

    logger.debug(
        "Period %d ending %s: cash=%s minimums=%s extra=%s balance=%s pocket=%s",
        row.index,
        period_end.isoformat(),
        initial_cash,
        row.min_paid,
        row.extra_paid,
        debt_remaining,
        pocket,
    )
    return row


def run_simulation(snapshot: Snapshot) -> SimulationResult:
    """Run the payoff projection for ``snapshot``.

    Parameters
    ----------
    snapshot:
        Normalized input (see ``snapshot.normalize_snapshot``). It is not
        mutated; debts and goals are deep copied for the run.

    Returns
    -------
    SimulationResult
        Ordered period rows, per-debt histories keyed by debt id, interest
        plus VAT charged over the run, the freedom projection and the name of
        the debt the strategy targets first given the unsimulated balances.
    """

    state = _RunState.start(snapshot)
    debt_remaining = state.debt_total()
    goal_remaining = goal_shortfall(state.goals)

    while (
        debt_remaining > FREEDOM_THRESHOLD or goal_remaining > FREEDOM_THRESHOLD
    ) and len(state.periods) < MAX_PERIODS:
        row = _simulate_period(state)
        debt_remaining = row.end_balance
        goal_remaining = goal_shortfall(state.goals)
        state.previous_end = state.period_end
        state.period_end = next_period_end(state.period_end)

    freedom = state.freedom.projection(len(state.periods))
    if freedom.status is FreedomStatus.NEVER:
        logger.warning(
            "Not debt-free within %d periods; %s still owed",
            len(state.periods),
            debt_remaining,
        )

    return SimulationResult(
        periods=tuple(state.periods),
        histories={k: tuple(v) for k, v in state.histories.items()},
        total_interest=state.total_interest,
        freedom=freedom,
        current_target=current_target(snapshot.debts, snapshot.strategy),
    )
