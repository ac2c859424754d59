from __future__ import annotations

import re
from datetime import date, datetime, time

from ..core.exceptions import ValidationError

_PAY_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: str) -> time:
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time {value!r} (expected HH:MM)")


def parse_pay_period(value: str) -> str:
    """Validate a pay period key such as ``2026-01``."""
    value = (value or "").strip()
    if not _PAY_PERIOD_RE.match(value):
        raise ValidationError(f"Invalid pay period {value!r} (expected YYYY-MM)")
    return value


def pay_period_of(day: date) -> str:
    return day.strftime("%Y-%m")
