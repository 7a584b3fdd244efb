import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from simulator import run_simulation
from snapshot import (
    COERCERS,
    DEFAULT_PROFILE,
    EntityKind,
    EventType,
    due_day_or_default,
    normalize_snapshot,
    to_decimal,
)

TODAY = date(2025, 11, 15)


def test_invalid_numbers_become_zero():
    assert to_decimal("abc") == 0
    assert to_decimal(None) == 0
    assert to_decimal("nan") == 0
    assert to_decimal("Infinity") == 0
    assert to_decimal(" 12.5 ") == Decimal("12.5")
    assert to_decimal(86.5) == Decimal("86.5")


def test_empty_profile_defaults():
    snap = normalize_snapshot({}, today=TODAY)
    assert snap.start_date == TODAY
    assert snap.strategy == "snowball"
    assert snap.debts == ()
    assert snap.net_income == 0


def test_debt_defaults_and_due_day():
    snap = normalize_snapshot(
        {
            "debts": [
                {"balance": "1200", "rate": "bad", "creditLimit": 0, "dueDay": ""},
                {"name": "Card", "balance": 50, "dueDay": "40", "monthlyMin": None},
            ]
        },
        today=TODAY,
    )
    first, second = snap.debts
    assert first.id == 1 and first.name == "Debt 1"
    assert first.rate == 0
    assert first.credit_limit is None
    assert due_day_or_default(first) == 25
    assert second.id == 2
    assert second.monthly_min == 0
    assert due_day_or_default(second) == 31


def test_events_and_goals_coerced():
    snap = normalize_snapshot(
        {
            "startDate": "2025-12-01",
            "events": [
                {"name": "Bonus", "amount": "100", "type": "income", "date": "2025-12-15"},
                {"amount": 10, "type": "weird"},
                {"name": "Gift", "amount": 5, "type": "expense", "date": "not a date"},
            ],
            "goals": [{"targetAmount": 500, "saved": 20}, {"name": "Car", "priority": "3"}],
        },
        today=TODAY,
    )
    assert snap.start_date == date(2025, 12, 1)
    bonus, unnamed, gift = snap.events
    assert bonus.date == date(2025, 12, 15)
    assert unnamed.name == "Event 2"
    assert unnamed.type is EventType.INCOME
    assert unnamed.date == TODAY
    assert gift.type is EventType.EXPENSE
    assert gift.date == TODAY
    goal, car = snap.goals
    assert goal.starting_saved == Decimal("20")
    assert goal.priority == 1
    assert car.priority == 3


def test_every_entity_kind_has_a_coercer():
    assert set(COERCERS) == set(EntityKind)


def test_seed_profile_totals():
    snap = normalize_snapshot(DEFAULT_PROFILE, today=TODAY)
    assert snap.net_income == Decimal("4450")
    assert snap.fixed_total + snap.discretionary == Decimal("972")
    assert [d.name for d in snap.debts] == ["Didi", "Visa 40", "Plata"]


def test_input_not_mutated():
    raw = {"debts": [{"balance": "10"}]}
    normalize_snapshot(raw, today=TODAY)
    assert raw == {"debts": [{"balance": "10"}]}


def test_out_of_range_amounts_become_zero():
    assert to_decimal("1e999999") == 0
    assert to_decimal("1e16") == 0
    assert to_decimal("999999999999999") == Decimal("999999999999999")


def test_huge_balance_does_not_break_the_run():
    snap = normalize_snapshot(
        {
            "startDate": "2025-01-01",
            "grossIncome": 1000,
            "debts": [{"name": "Card", "balance": "1e999999", "rate": 50}],
        },
        today=TODAY,
    )
    assert snap.debts[0].balance == 0
    result = run_simulation(snap)
    assert result.periods == ()
