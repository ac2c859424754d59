from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, require_email, require_min_length, require_non_empty
from ..company.repository import CompanyRepository
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .id_generator import build_login_id
from .model import MANAGED_FIELDS, SELF_SERVICE_FIELDS, Profile, ProfileUpdate, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

PROFILE_MANAGERS = {Role.ADMIN, Role.HR}


def password_matches(password_hash: str, password: Any) -> bool:
    if not password or not isinstance(password, str):
        return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder or corrupted hashes
        return False


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    company_id: int
    full_name: str
    role: Role
    login_id: str
    is_first_login: bool = False


@dataclass(frozen=True)
class NewEmployee:
    full_name: str
    email: str
    role: Role
    department: Optional[str]
    job_title: Optional[str]
    date_joined: date

    @classmethod
    def from_payload(cls, payload: dict[str, Any], *, today: date) -> "NewEmployee":
        role_s = optional_text(payload.get("role"), "Role") or Role.EMPLOYEE.value
        try:
            role = Role(role_s.lower())
        except ValueError:
            raise ValidationError("Invalid role")

        joined = payload.get("dateJoined")
        if joined:
            date_joined = parse_iso_date(joined)
        else:
            date_joined = today

        return cls(
            full_name=require_non_empty(payload.get("name", ""), "Name"),
            email=require_email(payload.get("email", "")),
            role=role,
            department=optional_text(payload.get("department"), "Department"),
            job_title=optional_text(payload.get("jobTitle"), "Job title"),
            date_joined=date_joined,
        )


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, login: str, password: str) -> SessionUser:
        login = (login or "").strip()
        user = self._users.get_by_login(login) if login else None
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        if not password_matches(user.password_hash, password):
            raise AuthenticationError("Invalid credentials")

        return SessionUser(
            user_id=user.user_id,
            company_id=user.company_id,
            full_name=user.full_name,
            role=user.role,
            login_id=user.login_id,
            is_first_login=user.is_first_login,
        )


class EmployeeService:
    """Use case: manage employee accounts (admin)."""

    def __init__(self, users: UserRepository, companies: CompanyRepository):
        self._users = users
        self._companies = companies

    @staticmethod
    def _temporary_password() -> str:
        return secrets.token_hex(4)

    def get_in_company(self, *, company_id: int, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user or user.company_id != int(company_id):
            raise NotFoundError("User not found or unauthorized")
        return user

    def create_employee(self, *, current_role: Role, company_id: int, data: NewEmployee) -> tuple[User, str]:
        """Create an account and return it with its temporary password."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        if data.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created from here")

        company = self._companies.get_by_id(int(company_id))
        if not company:
            raise NotFoundError("Company not found")
        if self._users.email_exists(data.email):
            raise ValidationError("Email is already registered")

        serial = self._users.next_serial(company_id=company.company_id, year=data.date_joined.year)
        login_id = build_login_id(
            company_initials=company.initials,
            full_name=data.full_name,
            joining_year=data.date_joined.year,
            serial=serial,
        )
        password = self._temporary_password()
        user_id = self._users.create_user(
            company_id=company.company_id,
            login_id=login_id,
            full_name=data.full_name,
            email=data.email,
            password_hash=generate_password_hash(password),
            role=data.role,
            department=data.department,
            job_title=data.job_title,
            date_joined=data.date_joined,
        )
        logger.info("Created employee %s (%s) in company %s", login_id, user_id, company.company_id)
        return self.get_in_company(company_id=company.company_id, user_id=user_id), password

    def reset_password(self, *, current_role: Role, company_id: int, user_id: int) -> str:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        user = self.get_in_company(company_id=company_id, user_id=user_id)
        password = self._temporary_password()
        if not self._users.update_password(user.user_id, password_hash=generate_password_hash(password), is_first_login=True):
            raise ValidationError("Password reset failed")
        logger.info("Password reset for user %s", user.user_id)
        return password

    def change_password(self, *, user_id: int, current_password: str, new_password: str) -> None:
        user = self._users.get_by_id(int(user_id))
        if not user or not password_matches(user.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")
        require_min_length(new_password, "New password", 8)
        self._users.update_password(user.user_id, password_hash=generate_password_hash(new_password), is_first_login=False)

    def list_employees(self, *, company_id: int) -> list[User]:
        return list(self._users.list_for_company(int(company_id)))

    def _profile_target(self, *, current_user_id: int, current_role: Role, company_id: int, employee_id: Optional[int]) -> User:
        # Only admin and HR may open someone else's profile
        if employee_id is not None and current_role in PROFILE_MANAGERS:
            return self.get_in_company(company_id=company_id, user_id=employee_id)
        return self.get_in_company(company_id=company_id, user_id=current_user_id)

    def get_profile(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        company_id: int,
        employee_id: Optional[int] = None,
    ) -> Profile:
        user = self._profile_target(
            current_user_id=current_user_id, current_role=current_role, company_id=company_id, employee_id=employee_id
        )
        return Profile(user=user, company=self._companies.get_by_id(user.company_id))

    def update_profile(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        company_id: int,
        payload: dict[str, Any],
        employee_id: Optional[int] = None,
    ) -> Profile:
        """Employees edit their own contact details; admin and HR may also set department and job title."""

        user = self._profile_target(
            current_user_id=current_user_id, current_role=current_role, company_id=company_id, employee_id=employee_id
        )
        allowed = MANAGED_FIELDS if current_role in PROFILE_MANAGERS else SELF_SERVICE_FIELDS
        update = ProfileUpdate.from_payload(payload, allowed=allowed)

        self._users.update_profile(user.user_id, changes=update.changes)
        logger.info("Profile of user %s updated: %s", user.user_id, ", ".join(update.changes))
        return self.get_profile(
            current_user_id=current_user_id, current_role=current_role, company_id=company_id, employee_id=user.user_id
        )
