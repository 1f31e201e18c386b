from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    ConfigUnavailable,
    DomainError,
    NotFoundError,
    StatsUnavailable,
    ValidationError,
    WriteConflict,
)

logger = logging.getLogger(__name__)


def ok(payload: dict | None = None, *, message: str = "OK", status: int = 200):
    body = {"success": True, "message": message}
    if payload:
        body.update(payload)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(exc: DomainError):
    """Translate a domain error into the JSON error envelope."""
    if isinstance(exc, ValidationError):
        return fail(str(exc), 400)
    if isinstance(exc, NotFoundError):
        return fail(str(exc), 404)
    if isinstance(exc, WriteConflict):
        return fail(str(exc), 409)
    if isinstance(exc, StatsUnavailable):
        return fail("Stats unavailable", 503)
    if isinstance(exc, ConfigUnavailable):
        return fail("Work hours policy unavailable", 503)
    logger.warning("Request failed: %s", exc)
    return fail(str(exc), 503)
