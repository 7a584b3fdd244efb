import os
import sys
from datetime import date
from pathlib import Path

# Ensure project root on path for direct module imports
sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from dates import (
    add_month_on_day,
    compare_ymd,
    day_key,
    due_date_in_month,
    first_due_on_or_after,
    format_short,
    in_window,
    next_period_end,
)


def test_due_date_clamped_to_month_end():
    assert due_date_in_month(2025, 2, 31) == date(2025, 2, 28)
    assert due_date_in_month(2024, 2, 30) == date(2024, 2, 29)
    assert due_date_in_month(2025, 4, 31) == date(2025, 4, 30)
    assert due_date_in_month(2025, 1, 12) == date(2025, 1, 12)


def test_first_due_in_start_month_when_not_passed():
    assert first_due_on_or_after(date(2025, 12, 1), 12) == date(2025, 12, 12)
    assert first_due_on_or_after(date(2025, 12, 12), 12) == date(2025, 12, 12)


def test_first_due_rolls_to_next_month():
    assert first_due_on_or_after(date(2025, 11, 15), 12) == date(2025, 12, 12)
    assert first_due_on_or_after(date(2025, 12, 20), 5) == date(2026, 1, 5)
    assert first_due_on_or_after(date(2025, 1, 31), 31) == date(2025, 1, 31)


def test_add_month_keeps_desired_day_after_short_month():
    feb = add_month_on_day(date(2025, 1, 31), 31)
    assert feb == date(2025, 2, 28)
    assert add_month_on_day(feb, 31) == date(2025, 3, 31)
    assert add_month_on_day(date(2025, 12, 18), 18) == date(2026, 1, 18)


def test_next_period_end_alternates_halves():
    assert next_period_end(date(2025, 12, 1)) == date(2025, 12, 31)
    assert next_period_end(date(2025, 12, 15)) == date(2025, 12, 31)
    assert next_period_end(date(2025, 12, 31)) == date(2026, 1, 15)
    assert next_period_end(date(2026, 1, 15)) == date(2026, 1, 31)
    assert next_period_end(date(2026, 1, 31)) == date(2026, 2, 15)
    assert next_period_end(date(2026, 2, 15)) == date(2026, 2, 28)


def test_day_keys_order_numerically():
    assert day_key(date(2025, 12, 31)) == 20251231
    assert compare_ymd("2025-12-31", "2026-01-01") < 0
    assert compare_ymd(date(2026, 1, 2), "2026-01-01") > 0
    assert compare_ymd("2026-01-01", date(2026, 1, 1)) == 0


def test_event_window_bounds():
    start = date(2025, 12, 1)
    assert in_window(date(2025, 12, 1), None, date(2025, 12, 1), start)
    assert not in_window(date(2025, 11, 30), None, date(2025, 12, 1), start)
    assert not in_window(date(2025, 12, 1), date(2025, 12, 1), date(2025, 12, 31), start)
    assert in_window(date(2025, 12, 31), date(2025, 12, 1), date(2025, 12, 31), start)


def test_format_short_is_locale_free():
    assert format_short(date(2025, 11, 5)) == "5 Nov 25"
