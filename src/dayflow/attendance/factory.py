from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .model import AttendancePolicy
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, today: date, policy: AttendancePolicy) -> CheckInStrategy:
        start = datetime.combine(today, policy.start_time)
        if now <= start + timedelta(minutes=policy.grace_minutes):
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, worked_hours: float, policy: AttendancePolicy) -> CheckOutStrategy:
        if worked_hours < policy.work_hours / 2:
            return HalfDayStrategy()
        return NormalStrategy()
