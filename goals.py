from __future__ import annotations

"""Savings goal funding waterfall.

Goals only receive money once the whole portfolio is effectively paid off.
They are filled in priority order (lower first, ties in declaration order),
each up to its remaining shortfall.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Tuple

from snapshot import Goal
from strategies import POOL_EPSILON, Allocation

ZERO = Decimal("0")


@dataclass
class GoalProgress:
    """Working copy of a goal with a running saved total."""

    id: object
    name: str
    target_amount: Decimal
    saved: Decimal
    priority: int

    @classmethod
    def from_goal(cls, goal: Goal) -> "GoalProgress":
        return cls(
            id=goal.id,
            name=goal.name,
            target_amount=goal.target_amount,
            saved=goal.starting_saved,
            priority=goal.priority,
        )

    @property
    def need(self) -> Decimal:
        return self.target_amount - self.saved


def goal_shortfall(goals: Iterable[GoalProgress]) -> Decimal:
    return sum((max(ZERO, g.need) for g in goals), ZERO)


def fund_goals(goals: List[GoalProgress], cash: Decimal) -> Tuple[Decimal, List[Allocation]]:
    """Distribute ``cash`` across ``goals`` and return what is left.

    Callers are responsible for only invoking this once debts are cleared.
    """

    log: List[Allocation] = []
    if cash <= POOL_EPSILON or not goals:
        return cash, log
    ordered = sorted((g for g in goals if g.need > POOL_EPSILON), key=lambda g: g.priority)
    for goal in ordered:
        if cash <= POOL_EPSILON:
            break
        pay = min(goal.need, cash)
        goal.saved += pay
        cash -= pay
        log.append(Allocation(goal.id, goal.name, pay))
    return cash, log
