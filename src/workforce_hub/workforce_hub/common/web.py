from __future__ import annotations

import io
import logging
from datetime import date, datetime
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, send_file, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateAttendanceError,
    DuplicateInspectionError,
    NotFoundError,
    ValidationError,
)
from .validators import to_int

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "You do not have permission"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.STAFF


def error_status(exc: DomainError) -> int:
    if isinstance(exc, (DuplicateInspectionError, DuplicateAttendanceError)):
        return 409
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, ValidationError):
        return 400
    return 400


def api_errors(action: str):
    """Translate domain errors into JSON responses.

    Anything that is not a DomainError is logged and answered with 500.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                logger.info("%s rejected: %s", action, e)
                return jsonify({"success": False, "message": str(e)}), error_status(e)
            except Exception:
                logger.exception("System error while %s", action)
                return jsonify({"success": False, "message": f"System error while {action}"}), 500

        return wrapper

    return decorator


def payload() -> dict:
    """JSON body or form fields of the current request."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def optional_int_arg(name: str) -> Optional[int]:
    """Whole-number query argument; None only when it is absent or blank."""

    value = request.args.get(name, "")
    if not value.strip():
        return None
    return to_int(value, name)


def to_json(value: Any) -> Any:
    """Render dataclass fields for jsonify (dates as ISO strings)."""

    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        return value.value
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        return {k: to_json(getattr(value, k)) for k in value.__dataclass_fields__}
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def send_xlsx(content: bytes, filename: str):
    return send_file(io.BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)
