from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_employee_id
from ..container import Container
from ..core.constants import DEFAULT_NOTIFICATION_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="list_notifications")
    def list_notifications():
        try:
            limit = int(request.args.get("limit", DEFAULT_NOTIFICATION_LIMIT))
        except ValueError:
            limit = DEFAULT_NOTIFICATION_LIMIT
        limit = max(1, min(limit, DEFAULT_NOTIFICATION_LIMIT))

        items = container.notifications_repo.list_for_user(current_employee_id(), limit=limit)
        return jsonify({"items": [n.to_dict() for n in items]})
