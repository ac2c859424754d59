from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class HalfDayStrategy(CheckOutStrategy):
    """Checkout after less than half of the standard work hours."""

    def decide_checkout(self, *, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
