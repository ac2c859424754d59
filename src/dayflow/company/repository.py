from __future__ import annotations

from typing import Optional, Protocol

from .model import Company, CompanySettings


class CompanyRepository(Protocol):
    def get_by_id(self, company_id: int) -> Optional[Company]:
        raise NotImplementedError

    def update_settings(self, company_id: int, settings: CompanySettings) -> bool:
        raise NotImplementedError
