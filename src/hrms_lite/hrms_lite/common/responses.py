"""Uniform JSON envelope: ``{success, data?, message?, error?}``."""

from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import DomainError, NotFoundError, ValidationError


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(message: str, *, status: int, error: Any = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return jsonify(body), status


def domain_error(e: DomainError):
    """Map a business rule violation to its envelope and HTTP status."""
    if isinstance(e, NotFoundError):
        return fail(str(e), status=404)
    if isinstance(e, ValidationError):
        return fail(str(e), status=400, error=e.messages)
    # ConflictError and any other rule violation are caller-correctable.
    return fail(str(e), status=400)


def unexpected_error(message: str, e: Exception):
    return fail(message, status=500, error=str(e))


def json_body() -> dict:
    """Request JSON object; malformed or non-object bodies read as empty so validation reports every field."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}
