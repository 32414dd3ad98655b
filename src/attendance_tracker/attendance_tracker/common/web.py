"""Helpers shared by the JSON controllers."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..employees.model import Actor
from .validators import require_iso_date

logger = logging.getLogger(__name__)

_STATUS = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


def current_actor() -> Actor:
    """Actor from the Flask session; the session itself is issued elsewhere."""
    role = session.get("role")
    if role not in {r.value for r in Role}:
        raise AuthenticationError("login required")
    employee_id = session.get("employee_id")
    return Actor(employee_id=str(employee_id) if employee_id else None, role=Role(role))


def query_date(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    return require_iso_date(value, name)


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def json_errors(view):
    """Translate domain errors into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            status = next((code for exc, code in _STATUS.items() if isinstance(e, exc)), 400)
            logger.info("%s %s -> %s: %s", request.method, request.path, status, e)
            return jsonify({"error": str(e)}), status

    return wrapper
