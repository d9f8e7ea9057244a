from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    PeriodClosedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (PeriodClosedError, 423),
)


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to user-facing JSON messages."""

    @app.errorhandler(DomainError)
    def _handle_domain_error(err: DomainError):
        status = 400
        for err_type, code in _STATUS_BY_ERROR:
            if isinstance(err, err_type):
                status = code
                break
        logger.info("Rejected request: %s (%s)", err, type(err).__name__)
        return jsonify({"error": str(err), "code": type(err).__name__}), status


def current_employee_id() -> str:
    """Viewer identity placed in the session by the (external) login flow."""

    employee_id = session.get("employee_id")
    if not employee_id:
        raise AuthorizationError("Silakan login terlebih dahulu")
    return str(employee_id)
