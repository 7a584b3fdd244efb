from __future__ import annotations

"""Monthly minimum-payment obligations per debt.

Each debt with a balance owns a queue of obligations, one per statement
cycle, ordered by due date. A new obligation is appended every time the
simulated clock passes the latest due date while the debt still carries a
balance, so unpaid minimums pile up as arrears instead of disappearing.

Minimums are settled strictly by due date: debts are visited by their most
urgent unresolved obligation, and each debt retires its own obligations
oldest first.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from dates import add_month_on_day, day_key, first_due_on_or_after
from minimum_payments import OBLIGATION_EPSILON, binding_minimum, regulatory_components
from snapshot import Debt, due_day_or_default

logger = logging.getLogger(__name__)

MAX_OBLIGATIONS = 240

ZERO = Decimal("0")


@dataclass
class Obligation:
    due_date: date
    monthly_min: Decimal
    amount_remaining: Decimal
    floor: Decimal = ZERO  # regulatory reference, reporting only

    @property
    def open(self) -> bool:
        return self.amount_remaining > OBLIGATION_EPSILON


@dataclass(frozen=True)
class MinimumDetail:
    """Per-debt picture of minimum payments at the end of one period."""

    debt_id: object
    name: str
    paid: Decimal
    required_before: Decimal
    remaining_after: Decimal
    first_due_date: date
    next_due_date: Optional[date]
    monthly_min: Decimal
    floor: Decimal

    @property
    def on_track(self) -> bool:
        return self.remaining_after < OBLIGATION_EPSILON or self.required_before == 0


def _new_obligation(debt: Debt, due: date) -> Obligation:
    components = regulatory_components(debt.balance, debt.rate, debt.credit_limit)
    monthly_min = binding_minimum(debt.monthly_min, components.floor)
    return Obligation(
        due_date=due,
        monthly_min=monthly_min,
        amount_remaining=monthly_min,
        floor=components.floor,
    )


class ObligationQueue:
    """Due-date ordered obligations for a single debt."""

    def __init__(self, debt_id, items: Optional[List[Obligation]] = None):
        self.debt_id = debt_id
        self.items: List[Obligation] = list(items or [])

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @classmethod
    def seed(cls, debt: Debt, start: date) -> Optional["ObligationQueue"]:
        """Create the first obligation from the debt's initial balance.

        Returns ``None`` for debts that are already settled.
        """

        if debt.balance <= OBLIGATION_EPSILON:
            return None
        due = first_due_on_or_after(start, due_day_or_default(debt))
        return cls(debt.id, [_new_obligation(debt, due)])

    def roll_forward(self, debt: Debt, period_end: date) -> int:
        """Append one obligation per due date passed by ``period_end``.

        Each new minimum is computed from the debt's current balance. Returns
        the number of obligations added.
        """

        if not self.items:
            return 0
        due_day = due_day_or_default(debt)
        added = 0
        while (
            day_key(period_end) > day_key(self.items[-1].due_date)
            and len(self.items) < MAX_OBLIGATIONS
            and debt.balance > OBLIGATION_EPSILON
        ):
            due = add_month_on_day(self.items[-1].due_date, due_day)
            self.items.append(_new_obligation(debt, due))
            added += 1
        if added and len(self.items) >= MAX_OBLIGATIONS:
            logger.warning(
                "Obligation queue for debt %s reached %d entries", self.debt_id, MAX_OBLIGATIONS
            )
        return added

    def open_items(self) -> List[Obligation]:
        return [ob for ob in self.items if ob.open]

    def earliest_open_due(self) -> Optional[date]:
        open_items = self.open_items()
        if not open_items:
            return None
        return min((ob.due_date for ob in open_items), key=day_key)

    def outstanding(self) -> Decimal:
        return sum((ob.amount_remaining for ob in self.open_items()), ZERO)

    def settle(self, debt: Debt, cash: Decimal) -> Decimal:
        """Pay this debt's obligations oldest first out of ``cash``.

        Returns the amount paid. The debt balance and each obligation are
        reduced by the same amount; neither drops below zero.
        """

        paid = ZERO
        for ob in sorted(self.items, key=lambda o: day_key(o.due_date)):
            if cash - paid <= 0:
                break
            if not ob.open:
                continue
            pay = min(cash - paid, ob.amount_remaining, debt.balance)
            if pay <= 0:
                continue
            ob.amount_remaining -= pay
            debt.balance -= pay
            paid += pay
        return paid

    def breakdown(self, debt: Debt, paid: Decimal, period_end: date) -> MinimumDetail:
        required = ZERO
        remaining = ZERO
        next_due: Optional[date] = None
        for ob in self.items:
            if ob.open and (next_due is None or day_key(ob.due_date) < day_key(next_due)):
                next_due = ob.due_date
            if day_key(ob.due_date) <= day_key(period_end):
                required += ob.monthly_min
                remaining += ob.amount_remaining
        return MinimumDetail(
            debt_id=debt.id,
            name=debt.name,
            paid=paid,
            required_before=required,
            remaining_after=remaining,
            first_due_date=min((ob.due_date for ob in self.items), key=day_key),
            next_due_date=next_due,
            monthly_min=self.items[0].monthly_min,
            floor=self.items[0].floor,
        )


def seed_queues(debts: Iterable[Debt], start: date) -> Dict[object, ObligationQueue]:
    queues = {}
    for debt in debts:
        queue = ObligationQueue.seed(debt, start)
        if queue is not None:
            queues[debt.id] = queue
    return queues


def settle_minimums(
    debts: Iterable[Debt], queues: Dict[object, ObligationQueue], cash: Decimal
) -> Tuple[Decimal, Dict[object, Decimal]]:
    """Settle open obligations across all debts in due-date order.

    Debts are visited by earliest unresolved due date, ties going to the
    larger outstanding minimum. Returns the cash left and the amount paid per
    debt id.
    """

    pending = []
    for debt in debts:
        queue = queues.get(debt.id)
        if queue is None or debt.balance <= OBLIGATION_EPSILON:
            continue
        earliest = queue.earliest_open_due()
        if earliest is None:
            continue
        pending.append((debt, queue, earliest, queue.outstanding()))

    pending.sort(key=lambda p: (day_key(p[2]), -p[3]))

    paid_by_debt: Dict[object, Decimal] = {}
    for debt, queue, _, _ in pending:
        paid = queue.settle(debt, cash)
        cash -= paid
        paid_by_debt[debt.id] = paid
    return cash, paid_by_debt
