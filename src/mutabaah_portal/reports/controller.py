from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_key_of
from ..common.http import current_employee_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/monthly-reports", methods=["GET"], endpoint="list_monthly_reports")
    def list_monthly_reports():
        viewer_id = current_employee_id()
        if request.args.get("scope") == "review":
            items = container.report_service.list_reviewable(viewer_id=viewer_id)
        else:
            items = container.report_service.list_for_mentee(mentee_id=viewer_id, month_key=request.args.get("month"))
        return jsonify({"items": [s.to_dict() for s in items]})

    @app.route("/api/monthly-reports", methods=["POST"], endpoint="submit_monthly_report")
    def submit_monthly_report():
        payload = request.get_json(silent=True) or {}
        submission = container.report_service.submit(
            mentee_id=current_employee_id(),
            month_key=str(payload.get("month_key") or ""),
        )
        return jsonify(submission.to_dict()), 201

    @app.route("/api/monthly-reports/<submission_id>", methods=["PATCH"], endpoint="review_monthly_report")
    def review_monthly_report(submission_id: str):
        payload = request.get_json(silent=True) or {}
        submission = container.report_service.review(
            submission_id=submission_id,
            viewer_id=current_employee_id(),
            decision=str(payload.get("decision") or ""),
            notes=payload.get("notes"),
        )
        return jsonify(submission.to_dict())

    @app.route("/api/monthly-reports/summary", methods=["GET"], endpoint="monthly_report_summary")
    def monthly_report_summary():
        month_key = request.args.get("month") or month_key_of(container.clock.now().date())
        summary = container.summary_service.summarize_month(employee_id=current_employee_id(), month_key=month_key)
        return jsonify(summary)
