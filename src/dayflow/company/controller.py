from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_company_id, current_role, json_body
from ..container import Container
from .model import CompanySettings


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/settings/company", methods=["GET"], endpoint="api_company_settings")
    @admin_required
    def get_settings():
        company = container.company_service.get(current_company_id())
        return jsonify({"company": company.settings_dict()})

    @app.route("/api/admin/settings/company", methods=["PATCH"], endpoint="api_update_company_settings")
    @admin_required
    def update_settings():
        settings = CompanySettings.from_payload(json_body())
        company = container.company_service.update_settings(
            current_role=current_role(),
            company_id=current_company_id(),
            settings=settings,
        )
        return jsonify({"company": company.settings_dict()})
