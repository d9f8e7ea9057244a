from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_key_of, parse_iso_date
from ..common.http import current_employee_id
from ..common.validators import require_bool
from ..container import Container
from ..sources.model import ReadingReport


def register(app: Flask, container: Container) -> None:
    def _month_arg() -> str:
        return request.args.get("month") or month_key_of(container.clock.now().date())

    @app.route("/api/monthly-activities", methods=["GET"], endpoint="get_monthly_activities")
    def get_monthly_activities():
        month_key = _month_arg()
        days = container.progress_service.get_month(employee_id=current_employee_id(), month_key=month_key)
        return jsonify({"month_key": month_key, "days": days})

    @app.route("/api/monthly-activities", methods=["POST"], endpoint="mark_monthly_activity")
    def mark_monthly_activity():
        payload = request.get_json(silent=True) or {}
        month_key = str(payload.get("month_key") or "")
        days = container.progress_service.mark_activity(
            employee_id=current_employee_id(),
            month_key=month_key,
            day_key=str(payload.get("day_key") or ""),
            activity_id=str(payload.get("activity_id") or ""),
            value=require_bool(payload.get("value", True), "value"),
        )
        return jsonify({"month_key": month_key, "days": days})

    @app.route("/api/monthly-activities/months", methods=["GET"], endpoint="list_activity_months")
    def list_activity_months():
        return jsonify({"months": container.progress_service.list_months(employee_id=current_employee_id())})

    @app.route("/api/monthly-activities/sync", methods=["POST"], endpoint="sync_monthly_activities")
    def sync_monthly_activities():
        payload = request.get_json(silent=True) or {}
        month_key = str(payload.get("month_key") or _month_arg())
        days = container.progress_service.sync_evidence(employee_id=current_employee_id(), month_key=month_key)
        return jsonify({"month_key": month_key, "days": days})

    @app.route("/api/prayer-checkins", methods=["POST"], endpoint="record_prayer_checkin")
    def record_prayer_checkin():
        payload = request.get_json(silent=True) or {}
        on = parse_iso_date(str(payload.get("date") or ""))
        days = container.progress_service.record_prayer(
            employee_id=current_employee_id(),
            prayer_id=str(payload.get("prayer_id") or ""),
            on=on,
        )
        return jsonify({"month_key": month_key_of(on), "days": days}), 201

    @app.route("/api/reading-reports", methods=["POST"], endpoint="record_reading_report")
    def record_reading_report():
        payload = request.get_json(silent=True) or {}
        on = parse_iso_date(str(payload.get("date") or ""))
        report = ReadingReport(
            employee_id=current_employee_id(),
            date=on,
            title=(str(payload.get("title") or "").strip() or None),
        )
        days = container.progress_service.record_reading_report(report)
        return jsonify({"month_key": month_key_of(on), "days": days}), 201
