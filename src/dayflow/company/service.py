from __future__ import annotations

import logging

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Company, CompanySettings
from .repository import CompanyRepository

logger = logging.getLogger(__name__)


class CompanyService:
    def __init__(self, companies: CompanyRepository):
        self._companies = companies

    def get(self, company_id: int) -> Company:
        company = self._companies.get_by_id(int(company_id))
        if not company:
            raise NotFoundError("Company not found")
        return company

    def update_settings(self, *, current_role: Role, company_id: int, settings: CompanySettings) -> Company:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        self.get(company_id)
        self._companies.update_settings(int(company_id), settings)
        logger.info(
            "Company %s policy updated: start=%s hours=%s grace=%s",
            company_id,
            settings.start_time.strftime("%H:%M"),
            settings.work_hours,
            settings.grace_period,
        )
        return self.get(company_id)
