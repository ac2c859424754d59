from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_login(self, login: str) -> Optional[User]:
        """Look a user up by login id or email."""

        raise NotImplementedError

    def email_exists(self, email: str) -> bool:
        raise NotImplementedError

    def next_serial(self, *, company_id: int, year: int) -> int:
        """Atomically increment and return the employee counter of a company/year."""

        raise NotImplementedError

    def create_user(
        self,
        *,
        company_id: int,
        login_id: str,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
        job_title: Optional[str],
        date_joined: date,
    ) -> int:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str, is_first_login: bool) -> bool:
        raise NotImplementedError

    def list_for_company(self, company_id: int) -> Sequence[User]:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, changes: dict[str, Optional[str]]) -> bool:
        """Columns: full_name, phone, address, department, job_title."""

        raise NotImplementedError
