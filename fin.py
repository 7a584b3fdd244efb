"""Command-line interface for running the debt freedom projection."""

from pathlib import Path
import json
import logging
from typing import Dict, Optional

from report import action_plan_lines, debt_schedule_lines, freedom_lines, period_line
from simulator import SimulationResult, run_simulation
from snapshot import DEFAULT_PROFILE, normalize_snapshot


DATA_FILE = Path(__file__).with_name("freedom_profile.json")


def load_data() -> Dict:
    """Load the profile from ``freedom_profile.json`` or the seed profile."""
    if DATA_FILE.exists():
        with DATA_FILE.open() as f:
            return json.load(f)
    return json.loads(json.dumps(DEFAULT_PROFILE))


# ---------------------------------------------------------------------------
# Simulation


def run_projection(data: Dict) -> SimulationResult:
    """Run the projection and print the period table."""
    print("---  Freedom Simulator ---")
    result = run_simulation(normalize_snapshot(data))
    for row in result.periods:
        print(period_line(row))
    print()
    for line in freedom_lines(result):
        print(line)
    return result


def show_period(result: Optional[SimulationResult]) -> None:
    """Print the action plan for one period."""
    if not result or not result.periods:
        print("Run the simulation first.")
        return
    idx = input(f"Period number (1-{len(result.periods)}): ").strip()
    if not (idx.isdigit() and 1 <= int(idx) <= len(result.periods)):
        print("Invalid period.")
        return
    for line in action_plan_lines(result.periods[int(idx) - 1]):
        print(line)


def show_debt(data: Dict, result: Optional[SimulationResult]) -> None:
    """Print one debt's schedule."""
    if not result:
        print("Run the simulation first.")
        return
    snapshot = normalize_snapshot(data)
    for i, d in enumerate(snapshot.debts, 1):
        print(f"{i}. {d.name}")
    idx = input("Debt number: ").strip()
    if not (idx.isdigit() and 1 <= int(idx) <= len(snapshot.debts)):
        print("Invalid debt.")
        return
    debt = snapshot.debts[int(idx) - 1]
    for line in debt_schedule_lines(debt.name, result.histories.get(debt.id, ())):
        print(line)


# ---------------------------------------------------------------------------
# Menu


def main() -> None:
    """Display the main menu and handle user selections."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    data = load_data()
    result: Optional[SimulationResult] = None
    while True:
        print("\n--- Freedom Menu ---")
        print("1. Run simulation")
        print("2. Period action plan")
        print("3. Debt schedule")
        print("4. Quit")
        choice = input("Select an option: ").strip()
        if choice == "1":
            result = run_projection(data)
        elif choice == "2":
            show_period(result)
        elif choice == "3":
            show_debt(data, result)
        elif choice == "4":
            break
        else:
            print("Invalid option.")


if __name__ == "__main__":
    main()
