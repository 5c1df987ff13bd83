from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, OTPError, StoreError

logger = logging.getLogger(__name__)


def ok(data: Optional[Mapping[str, Any]] = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = dict(data)
    return jsonify(body), status


def fail(message: str, status: int, *, error: Optional[str] = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return jsonify(body), status


def json_body() -> dict[str, Any]:
    """Request JSON as a dict; anything else (form posts, bad JSON) is treated as empty."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def register_error_handlers(app: Flask, *, debug: bool) -> None:
    """Map the domain taxonomy onto JSON responses.

    Internal detail (exception text, store errors) is only exposed when ``debug`` is on.
    """

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        if isinstance(exc, OTPError):
            logger.info("OTP rejected: %s", type(exc).__name__)
            return fail(exc.public_message, exc.status_code)
        if isinstance(exc, StoreError):
            logger.exception("Store failure on %s %s", request.method, request.path)
            return fail("Internal server error", 500, error=str(exc) if debug else None)
        if exc.status_code >= 500:
            logger.exception("Unhandled domain failure on %s %s", request.method, request.path)
            return fail("Internal server error", exc.status_code, error=str(exc) if debug else None)
        return fail(str(exc), exc.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if exc.code == 404:
            return fail("Route not found", 404)
        return fail(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500, error=repr(exc) if debug else None)
