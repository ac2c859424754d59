from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Any

from ..common.datetime_utils import parse_hhmm
from ..core import constants
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Company:
    """Domain entity: a company and its attendance policy."""

    company_id: int
    name: str
    initials: str
    start_time: time = parse_hhmm(constants.DEFAULT_START_TIME)
    work_hours: float = constants.DEFAULT_WORK_HOURS
    grace_period: int = constants.DEFAULT_GRACE_MINUTES

    def settings_dict(self) -> dict:
        return {
            "name": self.name,
            "initials": self.initials,
            "startTime": self.start_time.strftime("%H:%M"),
            "workHours": self.work_hours,
            "gracePeriod": self.grace_period,
        }


@dataclass(frozen=True)
class CompanySettings:
    """Validated body of a settings update."""

    start_time: time
    work_hours: float
    grace_period: int

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CompanySettings":
        start = payload.get("startTime")
        hours = payload.get("workHours")
        grace = payload.get("gracePeriod")
        if not start or hours in (None, "") or grace in (None, ""):
            raise ValidationError("startTime, workHours and gracePeriod are required")

        try:
            work_hours = float(hours)
            grace_period = int(grace)
        except (TypeError, ValueError):
            raise ValidationError("workHours and gracePeriod must be numbers")

        if not 0 < work_hours <= 24:
            raise ValidationError("workHours must be between 0 and 24")
        if not 0 <= grace_period <= 240:
            raise ValidationError("gracePeriod must be between 0 and 240 minutes")

        return cls(start_time=parse_hhmm(start), work_hours=work_hours, grace_period=grace_period)
