from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, current_company_id, current_role, current_user_id, json_body, login_required
from ..container import Container
from .model import NewNotification


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/notifications", methods=["GET"], endpoint="api_admin_notifications")
    @admin_required
    def admin_list():
        feed = container.notification_service.list_for_admin(
            current_role=current_role(),
            company_id=current_company_id(),
            type=request.args.get("type"),
            unread_only=request.args.get("unreadOnly") == "true",
        )
        return jsonify(
            {
                "notifications": [n.to_dict() for n in feed.notifications],
                "summary": {
                    "total": feed.summary.total,
                    "unread": feed.summary.unread,
                    "byType": feed.summary.by_type,
                },
            }
        )

    @app.route("/api/admin/notifications", methods=["POST"], endpoint="api_send_notification")
    @admin_required
    def send():
        data = NewNotification.from_payload(json_body())
        count = container.notification_service.send(
            current_role=current_role(),
            company_id=current_company_id(),
            data=data,
        )
        return jsonify(
            {
                "message": f"Notification sent to {count} users",
                "count": count,
                "type": data.type.value,
                "title": data.title,
            }
        ), 201

    @app.route("/api/admin/notifications/<int:notification_id>", methods=["DELETE"], endpoint="api_delete_notification")
    @admin_required
    def delete(notification_id: int):
        container.notification_service.delete(
            current_role=current_role(),
            company_id=current_company_id(),
            notification_id=notification_id,
        )
        return jsonify({"message": "Notification deleted"})

    @app.route("/api/notifications", methods=["GET"], endpoint="api_my_notifications")
    @login_required
    def mine():
        user_id = current_user_id()
        rows = container.notification_service.list_mine(user_id)
        return jsonify(
            {
                "notifications": [n.to_dict() for n in rows],
                "unread": container.notification_service.unread_count(user_id=user_id),
            }
        )

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="api_read_notification")
    @login_required
    def mark_read(notification_id: int):
        container.notification_service.mark_read(user_id=current_user_id(), notification_id=notification_id)
        return jsonify({"message": "Marked as read"})
