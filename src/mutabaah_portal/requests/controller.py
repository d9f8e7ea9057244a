from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_employee_id
from ..container import Container
from ..core.enums import RequestKind
from .service import parse_kind, request_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/manual-requests/<kind>", methods=["GET"], endpoint="list_manual_requests")
    def list_manual_requests(kind: str):
        viewer_id = current_employee_id()
        if request.args.get("scope") == "review":
            items = container.manual_request_service.list_reviewable(kind=kind, viewer_id=viewer_id)
        else:
            items = container.manual_request_service.list_for_mentee(kind=kind, mentee_id=viewer_id)
        return jsonify({"items": [request_to_dict(r) for r in items]})

    @app.route("/api/manual-requests/<kind>", methods=["POST"], endpoint="create_manual_request")
    def create_manual_request(kind: str):
        payload = request.get_json(silent=True) or {}
        mentee_id = current_employee_id()
        on = parse_iso_date(str(payload.get("date") or ""))

        if parse_kind(kind) == RequestKind.TADARUS:
            created = container.manual_request_service.create_tadarus_request(
                mentee_id=mentee_id,
                on=on,
                category=str(payload.get("category") or ""),
                notes=payload.get("notes"),
            )
        else:
            created = container.manual_request_service.create_missed_prayer_request(
                mentee_id=mentee_id,
                on=on,
                prayer_id=str(payload.get("prayer_id") or ""),
                reason=str(payload.get("reason") or ""),
            )
        return jsonify(request_to_dict(created)), 201

    @app.route("/api/manual-requests/<kind>/<request_id>", methods=["PATCH"], endpoint="review_manual_request")
    def review_manual_request(kind: str, request_id: str):
        payload = request.get_json(silent=True) or {}
        reviewed = container.manual_request_service.review_request(
            kind=kind,
            request_id=request_id,
            viewer_id=current_employee_id(),
            decision=str(payload.get("decision") or ""),
            notes=payload.get("notes"),
        )
        return jsonify(request_to_dict(reviewed))
