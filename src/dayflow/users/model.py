from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.validators import optional_text, require_non_empty
from ..company.model import Company
from ..core.enums import Role
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class User:
    """Domain entity: an employee account.

    Plain data object, no DB access code here.
    """

    user_id: int
    company_id: int
    login_id: str
    full_name: str
    email: str
    password_hash: str
    role: Role
    department: Optional[str]
    job_title: Optional[str]
    date_joined: date
    is_active: bool = True
    is_first_login: bool = False
    phone: Optional[str] = None
    address: Optional[str] = None

    def public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "loginId": self.login_id,
            "name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
            "jobTitle": self.job_title,
            "dateJoined": self.date_joined.isoformat(),
            "isActive": self.is_active,
            "phone": self.phone,
            "address": self.address,
        }


# payload key -> (column, max length)
_PROFILE_FIELDS = {
    "name": ("full_name", 150),
    "phone": ("phone", 30),
    "address": ("address", 255),
    "department": ("department", 100),
    "jobTitle": ("job_title", 100),
}
SELF_SERVICE_FIELDS = frozenset({"name", "phone", "address"})
MANAGED_FIELDS = frozenset(_PROFILE_FIELDS)


@dataclass(frozen=True)
class ProfileUpdate:
    """Profile columns to change. Keys outside ``allowed`` are ignored."""

    changes: dict[str, Optional[str]]

    @classmethod
    def from_payload(cls, payload: dict[str, Any], *, allowed: frozenset[str]) -> "ProfileUpdate":
        changes: dict[str, Optional[str]] = {}
        for key in sorted(allowed.intersection(payload)):
            column, max_len = _PROFILE_FIELDS[key]
            value = optional_text(payload[key], key)
            if key == "name":
                value = require_non_empty(value, "Name")
            if value is not None and len(value) > max_len:
                raise ValidationError(f"{key} must be at most {max_len} characters")
            changes[column] = value

        if not changes:
            raise ValidationError("No editable profile fields provided")
        return cls(changes=changes)


@dataclass(frozen=True)
class Profile:
    user: User
    company: Optional[Company]

    def to_dict(self) -> dict:
        out = self.user.public_dict()
        out["company"] = (
            {"id": self.company.company_id, "name": self.company.name, "initials": self.company.initials}
            if self.company
            else None
        )
        return out
