from __future__ import annotations

"""Semi-monthly interest accrual for revolving balances.

Interest for one quincena is the annual rate divided by 24, applied to the
balance carried into the period. VAT is charged on top of the interest and
both are capitalised before any payment of the period is applied.
"""

from dataclasses import dataclass
from decimal import Decimal

from minimum_payments import OBLIGATION_EPSILON, SURCHARGE_RATE

PERIODS_PER_YEAR = Decimal("24")


@dataclass(frozen=True)
class InterestCharge:
    starting_balance: Decimal
    interest: Decimal
    surcharge: Decimal

    @property
    def total(self) -> Decimal:
        return self.interest + self.surcharge


def period_interest(balance: Decimal, annual_rate: Decimal) -> InterestCharge:
    interest = balance * (annual_rate / Decimal("100")) / PERIODS_PER_YEAR
    return InterestCharge(
        starting_balance=balance,
        interest=interest,
        surcharge=interest * SURCHARGE_RATE,
    )


def accrue(debt) -> InterestCharge | None:
    """Capitalise one period of interest and VAT on ``debt``.

    Balances at or below the obligation epsilon are pinned to zero and no
    charge is returned.
    """

    if debt.balance <= OBLIGATION_EPSILON:
        debt.balance = Decimal("0")
        return None
    charge = period_interest(debt.balance, debt.rate)
    debt.balance += charge.total
    return charge
