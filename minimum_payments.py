from __future__ import annotations

"""Regulatory minimum payment approximation for revolving credit.

The floor mirrors the published reference for Mexican credit cards: the
larger of 1.5% of the balance plus one month of interest and VAT, or 1.25% of
the credit limit, never more than what is actually owed. It is used as a
floor under the contractual minimum the cardholder reports.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

SURCHARGE_RATE = Decimal("0.16")
BALANCE_PCT = Decimal("0.015")
LIMIT_PCT = Decimal("0.0125")

OBLIGATION_EPSILON = Decimal("0.5")

ZERO = Decimal("0")


@dataclass(frozen=True)
class MinimumComponents:
    previous_balance: Decimal
    monthly_interest: Decimal = ZERO
    monthly_surcharge: Decimal = ZERO
    base_pct: Decimal = ZERO
    option_a: Decimal = ZERO
    option_b: Decimal = ZERO
    floor: Decimal = ZERO


def regulatory_components(
    previous_balance: Decimal,
    annual_rate: Decimal,
    credit_limit: Optional[Decimal] = None,
) -> MinimumComponents:
    """Return the monthly reference minimum and its components.

    Parameters
    ----------
    previous_balance:
        Balance the minimum is computed against.
    annual_rate:
        Annual interest rate in percent.
    credit_limit:
        Credit limit if known. ``None`` or a non-positive value disables the
        limit-based option.

    Returns
    -------
    MinimumComponents
        All components are zero when the balance or the rate is not positive.
    """

    if previous_balance <= 0 or annual_rate <= 0:
        return MinimumComponents(previous_balance=max(previous_balance, ZERO))

    monthly_interest = previous_balance * (annual_rate / Decimal("100")) / Decimal("12")
    monthly_surcharge = monthly_interest * SURCHARGE_RATE
    base_pct = BALANCE_PCT * previous_balance
    option_a = base_pct + monthly_interest + monthly_surcharge

    option_b = ZERO
    if credit_limit is not None and credit_limit > 0:
        option_b = LIMIT_PCT * credit_limit

    floor = max(option_a, option_b)
    # never ask for more than the balance plus the month's charges
    floor = min(floor, previous_balance + monthly_interest + monthly_surcharge)

    return MinimumComponents(
        previous_balance=previous_balance,
        monthly_interest=monthly_interest,
        monthly_surcharge=monthly_surcharge,
        base_pct=base_pct,
        option_a=option_a,
        option_b=option_b,
        floor=floor,
    )


def binding_minimum(user_min: Decimal, floor: Decimal) -> Decimal:
    """Return the minimum an obligation must retire.

    A reported contractual minimum is raised to the regulatory floor when it
    falls short. Without a reported minimum the floor alone applies.
    """

    if user_min > 0:
        return max(user_min, floor)
    return floor
