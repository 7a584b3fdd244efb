import os
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from goals import GoalProgress, fund_goals, goal_shortfall
from snapshot import Goal


def _progress(*specs):
    return [
        GoalProgress.from_goal(
            Goal(id=i, name=name, target_amount=Decimal(target), starting_saved=Decimal(saved), priority=prio)
        )
        for i, (name, target, saved, prio) in enumerate(specs, 1)
    ]


def test_goals_filled_by_priority_then_declaration_order():
    goals = _progress(("Trip", "500", "0", 2), ("Car", "1000", "200", 1), ("Fund", "300", "0", 2))
    cash, log = fund_goals(goals, Decimal("1200"))
    assert [(a.name, a.amount) for a in log] == [
        ("Car", Decimal("800")),
        ("Trip", Decimal("400")),
    ]
    assert cash == 0
    assert goals[1].saved == Decimal("1000")
    assert goal_shortfall(goals) == Decimal("400")


def test_leftover_returned_when_goals_full():
    goals = _progress(("Car", "100", "0", 1))
    cash, log = fund_goals(goals, Decimal("250"))
    assert cash == Decimal("150")
    assert goal_shortfall(goals) == 0


def test_small_shortfalls_and_pools_are_ignored():
    goals = _progress(("Nearly", "100", "99.5", 1))
    cash, log = fund_goals(goals, Decimal("50"))
    assert log == []
    assert cash == Decimal("50")
    cash, log = fund_goals(_progress(("Car", "100", "0", 1)), Decimal("0.9"))
    assert log == []
