from __future__ import annotations

"""Debt-freedom horizon detection."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

FREEDOM_THRESHOLD = Decimal("5")


class FreedomStatus(Enum):
    FREE = "free"
    NEVER = "never"  # interest outpaces payment capacity within the horizon
    NO_DATA = "no_data"


@dataclass(frozen=True)
class FreedomProjection:
    status: FreedomStatus
    index: Optional[int] = None
    period_end: Optional[date] = None

    @property
    def periods_to_freedom(self) -> Optional[int]:
        if self.index is None:
            return None
        return self.index + 1


class FreedomTracker:
    """Records the first period whose aggregate debt is effectively zero."""

    def __init__(self):
        self.index: Optional[int] = None
        self.period_end: Optional[date] = None

    def observe(self, index: int, period_end: date, total_debt: Decimal) -> bool:
        """Record ``index`` if this is the first debt-free period.

        Returns True only on the call that records the freedom period.
        """

        if self.index is None and total_debt <= FREEDOM_THRESHOLD:
            self.index = index
            self.period_end = period_end
            return True
        return False

    def projection(self, periods_run: int) -> FreedomProjection:
        if self.index is not None:
            return FreedomProjection(FreedomStatus.FREE, self.index, self.period_end)
        if periods_run == 0:
            return FreedomProjection(FreedomStatus.NO_DATA)
        return FreedomProjection(FreedomStatus.NEVER)
