from __future__ import annotations

"""Calendar helpers for the semi-monthly simulation.

All control flow compares dates through integer day keys
(``year * 10000 + month * 100 + day``) so ordering never depends on locale or
timezone. ``format_short`` is the only display helper and is not used for
comparisons.
"""

from datetime import date, datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

DEFAULT_DUE_DAY = 25

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_date(value: date | str) -> date:
    """Parse a ``date`` object or an ISO ``YYYY-MM-DD`` string."""

    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def day_key(d: date) -> int:
    return d.year * 10000 + d.month * 100 + d.day


def compare_ymd(a: date | str, b: date | str) -> int:
    """Return a negative, zero or positive number like a classic comparator."""

    return day_key(parse_date(a)) - day_key(parse_date(b))


def due_date_in_month(year: int, month: int, desired_day: int) -> date:
    """Return ``desired_day`` in the given month, clamped to the last day."""

    return date(year, month, 1) + relativedelta(day=desired_day)


def first_due_on_or_after(start: date, due_day: int) -> date:
    """Return the earliest date on or after ``start`` falling on ``due_day``.

    The start month is checked first; otherwise the due day of the following
    month is used.
    """

    candidate = due_date_in_month(start.year, start.month, due_day)
    if day_key(candidate) >= day_key(start):
        return candidate
    return start.replace(day=1) + relativedelta(months=1, day=due_day)


def add_month_on_day(d: date, due_day: int) -> date:
    """Return ``due_day`` in the month after ``d`` (clamped to month length)."""

    return d + relativedelta(months=1, day=due_day)


def next_period_end(current: date) -> date:
    """Return the end of the quincena that follows ``current``.

    A date in the first half of the month advances to the month's last day;
    anything later advances to the 15th of the next month.
    """

    if current.day <= 15:
        return current + relativedelta(day=31)
    return current + relativedelta(months=1, day=15)


def in_window(d: date, lower: Optional[date], upper: date, start: date) -> bool:
    """Return whether ``d`` falls in the period ending on ``upper``.

    ``lower`` is the previous period end (exclusive). For the first period
    ``lower`` is ``None`` and the window starts at ``start`` inclusive.
    """

    if lower is None:
        return day_key(start) <= day_key(d) <= day_key(upper)
    return day_key(lower) < day_key(d) <= day_key(upper)


def format_short(d: date) -> str:
    return f"{d.day} {_MONTH_ABBR[d.month - 1]} {d.year % 100:02d}"
