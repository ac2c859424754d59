"""Create a company with its first admin account.

Reads SEED_COMPANY_NAME, SEED_COMPANY_INITIALS, SEED_ADMIN_NAME,
SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD from the environment.
"""

from __future__ import annotations

import importlib
import os
from datetime import date

from dotenv import load_dotenv

from dayflow.config import get_settings_module
from dayflow.database.bootstrap import ensure_company_admin


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    login_id = ensure_company_admin(
        db_config,
        company_name=os.getenv("SEED_COMPANY_NAME", "Odoo India"),
        initials=os.getenv("SEED_COMPANY_INITIALS", "OI"),
        admin_name=os.getenv("SEED_ADMIN_NAME", "Admin User"),
        email=os.getenv("SEED_ADMIN_EMAIL", "admin@example.com"),
        password=os.getenv("SEED_ADMIN_PASSWORD", "admin123"),
        joining_year=date.today().year,
    )

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(admin login: {login_id})"
    )


if __name__ == "__main__":
    main()
