from __future__ import annotations

"""Input snapshot for the simulation and coercion of raw profile data.

Profiles are stored by the surrounding application as camelCase
dictionaries. ``normalize_snapshot`` turns one into an immutable
``Snapshot`` with every amount as ``Decimal`` and every missing or invalid
field replaced by its default, so the engine itself never has to validate.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from dates import DEFAULT_DUE_DAY, parse_date

# exponent cap; amounts of 1e16 or more are treated as input errors
MAX_MAGNITUDE = 15


class EntityKind(Enum):
    DEDUCTION = "deductions"
    FIXED_EXPENSE = "fixedExpenses"
    DEBT = "debts"
    GOAL = "goals"
    EVENT = "events"


class EventType(Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class LineItem:
    """A named recurring amount (payroll deduction or fixed expense)."""

    name: str
    amount: Decimal


@dataclass
class Debt:
    """A revolving credit balance as entered by the user."""

    id: object
    name: str
    balance: Decimal
    rate: Decimal  # annual, percent
    credit_limit: Optional[Decimal] = None
    monthly_min: Decimal = Decimal("0")
    due_day: Optional[int] = None


@dataclass
class Goal:
    id: object
    name: str
    target_amount: Decimal
    starting_saved: Decimal = Decimal("0")
    priority: int = 1


@dataclass
class CashEvent:
    """A one-off income or expense on a calendar date."""

    id: object
    name: str
    date: date
    amount: Decimal
    type: EventType = EventType.INCOME


@dataclass(frozen=True)
class Snapshot:
    start_date: date
    gross_income: Decimal = Decimal("0")
    deductions: Tuple[LineItem, ...] = ()
    fixed_expenses: Tuple[LineItem, ...] = ()
    discretionary: Decimal = Decimal("0")
    strategy: str = "snowball"
    debts: Tuple[Debt, ...] = ()
    goals: Tuple[Goal, ...] = ()
    events: Tuple[CashEvent, ...] = ()

    @property
    def net_income(self) -> Decimal:
        return self.gross_income - sum((d.amount for d in self.deductions), Decimal("0"))

    @property
    def fixed_total(self) -> Decimal:
        return sum((e.amount for e in self.fixed_expenses), Decimal("0"))


def due_day_or_default(debt: Debt) -> int:
    """Return the debt's due day clamped to 31, or 25 when unusable."""

    if debt.due_day is not None and debt.due_day > 0:
        return min(debt.due_day, 31)
    return DEFAULT_DUE_DAY


# ---------------------------------------------------------------------------
# Coercion helpers


def to_decimal(value) -> Decimal:
    """Convert ``value`` to ``Decimal``; anything unusable becomes zero."""

    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not result.is_finite() or result.adjusted() > MAX_MAGNITUDE:
        return Decimal("0")
    return result


def _to_int(value) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        return None


def _to_date(value, fallback: date) -> date:
    if not value:
        return fallback
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        return fallback


def _entity_id(raw: dict, idx: int):
    value = raw.get("id")
    return value if value is not None else idx + 1


def coerce_line_item(raw: dict, idx: int, today: date) -> LineItem:
    return LineItem(name=raw.get("name") or "", amount=to_decimal(raw.get("amount")))


def coerce_debt(raw: dict, idx: int, today: date) -> Debt:
    limit = to_decimal(raw.get("creditLimit"))
    return Debt(
        id=_entity_id(raw, idx),
        name=raw.get("name") or f"Debt {idx + 1}",
        balance=to_decimal(raw.get("balance")),
        rate=to_decimal(raw.get("rate")),
        credit_limit=limit if limit != 0 else None,
        monthly_min=to_decimal(raw.get("monthlyMin")),
        due_day=_to_int(raw.get("dueDay")) or None,
    )


def coerce_goal(raw: dict, idx: int, today: date) -> Goal:
    saved = raw.get("startingSaved")
    if saved is None:
        saved = raw.get("saved", 0)
    return Goal(
        id=_entity_id(raw, idx),
        name=raw.get("name") or f"Goal {idx + 1}",
        target_amount=to_decimal(raw.get("targetAmount")),
        starting_saved=to_decimal(saved),
        priority=_to_int(raw.get("priority", idx + 1)) or idx + 1,
    )


def coerce_event(raw: dict, idx: int, today: date) -> CashEvent:
    return CashEvent(
        id=_entity_id(raw, idx),
        name=raw.get("name") or f"Event {idx + 1}",
        date=_to_date(raw.get("date"), today),
        amount=to_decimal(raw.get("amount")),
        type=EventType.EXPENSE if raw.get("type") == "expense" else EventType.INCOME,
    )


COERCERS: Dict[EntityKind, Callable[[dict, int, date], object]] = {
    EntityKind.DEDUCTION: coerce_line_item,
    EntityKind.FIXED_EXPENSE: coerce_line_item,
    EntityKind.DEBT: coerce_debt,
    EntityKind.GOAL: coerce_goal,
    EntityKind.EVENT: coerce_event,
}


def _coerce_all(data: dict, kind: EntityKind, today: date) -> tuple:
    items = data.get(kind.value)
    if not isinstance(items, list):
        return ()
    coerce = COERCERS[kind]
    return tuple(coerce(raw or {}, idx, today) for idx, raw in enumerate(items))


def normalize_snapshot(data: Optional[dict], today: Optional[date] = None) -> Snapshot:
    """Return a ``Snapshot`` built from a raw profile dictionary.

    The input is never mutated. Missing lists are treated as empty and every
    numeric field that cannot be parsed becomes zero.
    """

    data = data or {}
    today = today or date.today()
    return Snapshot(
        start_date=_to_date(data.get("startDate"), today),
        gross_income=to_decimal(data.get("grossIncome")),
        deductions=_coerce_all(data, EntityKind.DEDUCTION, today),
        fixed_expenses=_coerce_all(data, EntityKind.FIXED_EXPENSE, today),
        discretionary=to_decimal(data.get("discretionary")),
        strategy=data.get("strategy") or "snowball",
        debts=_coerce_all(data, EntityKind.DEBT, today),
        goals=_coerce_all(data, EntityKind.GOAL, today),
        events=_coerce_all(data, EntityKind.EVENT, today),
    )


DEFAULT_PROFILE: dict = {
    "grossIncome": 9250,
    "deductions": [
        {"name": "Child support", "amount": 2000},
        {"name": "Employer loan", "amount": 2000},
        {"name": "Payroll credit", "amount": 800},
    ],
    "fixedExpenses": [{"name": "Transport", "amount": 672}],
    "discretionary": 300,
    "strategy": "snowball",
    "debts": [
        {
            "id": 1,
            "name": "Didi",
            "balance": 11334.59,
            "rate": 86.5,
            "creditLimit": None,
            "monthlyMin": 1671,
            "dueDay": 24,
        },
        {
            "id": 2,
            "name": "Visa 40",
            "balance": 14326.18,
            "rate": 72.0,
            "creditLimit": None,
            "monthlyMin": 1500,
            "dueDay": 18,
        },
        {
            "id": 3,
            "name": "Plata",
            "balance": 2500,
            "rate": 99.0,
            "creditLimit": None,
            "monthlyMin": 400,
            "dueDay": 12,
        },
    ],
    "goals": [
        {"id": 1, "name": "Car", "targetAmount": 60000, "startingSaved": 0, "priority": 1}
    ],
    "events": [
        {"id": 1, "name": "Year-end bonus", "date": "2025-12-15", "amount": 9250, "type": "income"},
        {"id": 2, "name": "Cream", "date": "2025-12-15", "amount": 1526, "type": "expense"},
        {"id": 3, "name": "XS", "date": "2025-12-15", "amount": 1700, "type": "expense"},
    ],
}
