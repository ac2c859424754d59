from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

from ..core.exceptions import ValidationError

CENT = Decimal("0.01")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def to_amount(value: Any, field_name: str, *, maximum: Optional[Decimal] = None) -> Decimal:
    """Convert a JSON/form number into a finite Decimal.

    Booleans are rejected even though they are ints in Python. With
    ``maximum`` set, larger amounts are rejected too.
    """

    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{field_name} must be a finite number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    if maximum is not None and amount > maximum:
        raise ValidationError(f"{field_name} cannot exceed {maximum}")
    return amount


def require_non_negative_amount(value: Any, field_name: str, *, maximum: Optional[Decimal] = None) -> Decimal:
    amount = to_amount(value, field_name, maximum=maximum)
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount


def round_cents(amount: Decimal) -> Decimal:
    """Round half-up to the cent, widening the precision for huge amounts."""

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def optional_non_negative_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def require_cent_amount(value: Any, field_name: str, *, maximum: Decimal) -> Decimal:
    """Non-negative amount rounded to the cent and no larger than ``maximum``."""

    amount = round_cents(require_non_negative_amount(value, field_name, maximum=maximum))
    if amount > maximum:
        raise ValidationError(f"{field_name} cannot exceed {maximum}")
    return amount


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """Stripped string, or None for a missing or blank value."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip() or None
