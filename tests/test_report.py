import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from report import debt_summary, debt_schedule_lines, format_money
from simulator import HistoryEntry


def _entry(day, start, interest, minimum, extra, end):
    return HistoryEntry(
        period_end=date(2025, 1, day),
        label=f"{day} Jan 25",
        starting_balance=Decimal(start),
        interest=Decimal(interest),
        surcharge=Decimal(interest) * Decimal("0.16"),
        min_paid=Decimal(minimum),
        extra_paid=Decimal(extra),
        ending_balance=Decimal(end),
    )


def test_format_money():
    assert format_money(Decimal("1234.565")) == "$1,234.57"
    assert format_money(Decimal("-3")) == "-$3.00"
    assert format_money(None) == "$0.00"


def test_debt_summary_finds_payoff():
    history = [
        _entry(1, "1000", "10", "100", "0", "921.6"),
        _entry(15, "921.6", "10", "100", "900", "0"),
        _entry(31, "0", "0", "0", "0", "0"),
    ]
    summary = debt_summary(history)
    assert summary.starting_balance == Decimal("1000")
    assert summary.total_interest == Decimal("23.2")
    assert summary.total_paid == Decimal("1100")
    assert summary.periods_to_payoff == 2
    assert summary.payoff_label == "15 Jan 25"


def test_unpaid_debt_reported():
    lines = debt_schedule_lines("Card", [_entry(1, "1000", "10", "0", "0", "1011.6")])
    assert "not paid off" in lines[0]
    assert debt_schedule_lines("Card", []) == ["Card: no simulation yet."]
