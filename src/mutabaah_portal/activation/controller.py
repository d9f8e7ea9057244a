from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_employee_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/activated-months", methods=["GET"], endpoint="list_activated_months")
    def list_activated_months():
        months = container.activation_service.list_activated_months(employee_id=current_employee_id())
        return jsonify({"months": list(months)})

    @app.route("/api/activated-months", methods=["POST"], endpoint="activate_month")
    def activate_month():
        payload = request.get_json(silent=True) or {}
        employee_id = current_employee_id()
        created = container.activation_service.activate_month(
            employee_id=employee_id,
            month_key=str(payload.get("month_key") or ""),
        )
        months = container.activation_service.list_activated_months(employee_id=employee_id)
        return jsonify({"created": created, "months": list(months)}), (201 if created else 200)
