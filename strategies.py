from __future__ import annotations

"""Surplus allocation strategies.

After minimums are settled, whatever cash is left is pushed into active
debts according to the selected strategy. Sequential strategies order the
debts and pay each one off in turn; ``flat`` spreads the cash pro-rata by
balance. Strategies are registered in ``STRATEGIES``; unknown selectors fall
back to avalanche ordering.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from minimum_payments import OBLIGATION_EPSILON
from snapshot import Debt

POOL_EPSILON = Decimal("1")
FLAT_TARGET_NAME = "Diversified"


class Strategy(Enum):
    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"
    HIGH_MIN = "highMin"
    REVERSE_SNOWBALL = "reverseSnowball"
    FLAT = "flat"


@dataclass(frozen=True)
class Allocation:
    """Cash applied to one debt or goal during a period."""

    id: object
    name: str
    amount: Decimal


# Sort keys; Python's sort is stable so ties keep declaration order.
ORDERINGS: Dict[Strategy, Callable[[Debt], object]] = {
    Strategy.SNOWBALL: lambda d: d.balance,
    Strategy.AVALANCHE: lambda d: -d.rate,
    Strategy.HIGH_MIN: lambda d: -d.monthly_min,
    Strategy.REVERSE_SNOWBALL: lambda d: -d.balance,  # deliberately sub-optimal
}


def resolve(selector: str | Strategy) -> Strategy:
    if isinstance(selector, Strategy):
        return selector
    try:
        return Strategy(selector)
    except ValueError:
        return Strategy.AVALANCHE


def order_debts(debts: Iterable[Debt], selector: str | Strategy) -> List[Debt]:
    """Return ``debts`` in payoff order; flat and unknown use avalanche."""

    key = ORDERINGS.get(resolve(selector), ORDERINGS[Strategy.AVALANCHE])
    return sorted(debts, key=key)


def _pay_sequential(active: List[Debt], strategy: Strategy, cash: Decimal) -> Tuple[Decimal, List[Allocation]]:
    log: List[Allocation] = []
    for debt in order_debts(active, strategy):
        if cash <= POOL_EPSILON:
            break
        pay = min(cash, debt.balance)
        if pay <= 0:
            continue
        debt.balance -= pay
        cash -= pay
        log.append(Allocation(debt.id, debt.name, pay))
    return cash, log


def _pay_flat(active: List[Debt], strategy: Strategy, cash: Decimal) -> Tuple[Decimal, List[Allocation]]:
    log: List[Allocation] = []
    total = sum((d.balance for d in active), Decimal("0"))
    if total <= 0:
        return cash, log
    for debt in active:
        if cash <= POOL_EPSILON:
            continue
        # share of the pool still left, not of the period's opening pool
        pay = min(cash * (debt.balance / total), debt.balance)
        if pay <= 0:
            continue
        debt.balance -= pay
        cash -= pay
        log.append(Allocation(debt.id, debt.name, pay))
    return cash, log


STRATEGIES: Dict[Strategy, Callable[[List[Debt], Strategy, Decimal], Tuple[Decimal, List[Allocation]]]] = {
    Strategy.SNOWBALL: _pay_sequential,
    Strategy.AVALANCHE: _pay_sequential,
    Strategy.HIGH_MIN: _pay_sequential,
    Strategy.REVERSE_SNOWBALL: _pay_sequential,
    Strategy.FLAT: _pay_flat,
}


def allocate_extra(
    debts: Iterable[Debt], selector: str | Strategy, cash: Decimal
) -> Tuple[Decimal, List[Allocation], str]:
    """Apply surplus ``cash`` to active debts.

    Returns the unspent cash, the payments made and the period's target name
    (first payee, or ``Diversified`` for the flat strategy).
    """

    if cash <= POOL_EPSILON:
        return cash, [], ""
    strategy = resolve(selector)
    active = [d for d in debts if d.balance > OBLIGATION_EPSILON]
    cash, log = STRATEGIES[strategy](active, strategy, cash)
    if not log:
        return cash, log, ""
    target = FLAT_TARGET_NAME if strategy is Strategy.FLAT else log[0].name
    return cash, log, target


def current_target(debts: Iterable[Debt], selector: str | Strategy) -> Optional[str]:
    """Return the debt the strategy would attack first, or ``None`` if debt-free."""

    for debt in order_debts(debts, selector):
        if debt.balance > 0:
            return debt.name
    return None
