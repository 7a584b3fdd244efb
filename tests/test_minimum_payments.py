import os
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from minimum_payments import binding_minimum, regulatory_components


def test_zero_balance_or_rate_gives_zero_floor():
    assert regulatory_components(Decimal("0"), Decimal("50")).floor == 0
    assert regulatory_components(Decimal("1000"), Decimal("0")).floor == 0
    assert regulatory_components(Decimal("-10"), Decimal("50")).floor == 0


def test_balance_option_includes_interest_and_vat():
    comp = regulatory_components(Decimal("2500"), Decimal("99"))
    assert comp.monthly_interest == Decimal("206.25")
    assert comp.monthly_surcharge == Decimal("33.0000")
    assert comp.base_pct == Decimal("37.500")
    assert comp.floor == Decimal("276.75")


def test_credit_limit_option_wins_when_larger():
    comp = regulatory_components(Decimal("100"), Decimal("12"), Decimal("100000"))
    assert comp.option_b == Decimal("1250")
    # capped at balance plus the month's charges
    assert comp.floor == Decimal("100") + comp.monthly_interest + comp.monthly_surcharge


def test_missing_credit_limit_disables_limit_option():
    comp = regulatory_components(Decimal("1000"), Decimal("24"), None)
    assert comp.option_b == 0
    assert comp.floor == comp.option_a


def test_binding_minimum_uses_floor_under_user_minimum():
    assert binding_minimum(Decimal("400"), Decimal("276.75")) == Decimal("400")
    assert binding_minimum(Decimal("100"), Decimal("276.75")) == Decimal("276.75")
    assert binding_minimum(Decimal("0"), Decimal("276.75")) == Decimal("276.75")
    assert binding_minimum(Decimal("0"), Decimal("0")) == 0
