from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class CheckInStrategy(ABC):
    """Strategy Pattern: status recorded when an employee checks in."""

    @abstractmethod
    def decide_checkin(self) -> StatusDecision:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Strategy Pattern: status kept or replaced when an employee checks out."""

    @abstractmethod
    def decide_checkout(self, *, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
