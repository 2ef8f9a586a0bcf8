from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AttendanceRejected,
    AuthorizationError,
    DeviceConflict,
    DuplicateEvent,
    LocationUnavailable,
    NotAuthenticated,
    OfficeNotConfigured,
    OutOfGeofence,
    ValidationError,
)

REJECTION_STATUS = {
    NotAuthenticated: 401,
    LocationUnavailable: 400,
    OfficeNotConfigured: 503,
    DeviceConflict: 403,
    OutOfGeofence: 403,
    DuplicateEvent: 409,
}


def current_user_id() -> Optional[str]:
    user_id = session.get("user_id")
    return str(user_id) if user_id else None


def current_role() -> Role:
    try:
        return Role(session.get("role") or Role.EMPLOYEE.value)
    except ValueError:
        return Role.EMPLOYEE


def error_response(message: str, status: int, **extra):
    return jsonify({"success": False, "message": message, **extra}), status


def rejection_response(e: AttendanceRejected):
    status = REJECTION_STATUS.get(type(e), 400)
    return jsonify({"success": False, **e.to_dict()}), status


def domain_error_response(e: Exception):
    if isinstance(e, AttendanceRejected):
        return rejection_response(e)
    if isinstance(e, AuthorizationError):
        return error_response(str(e), 403)
    if isinstance(e, ValidationError):
        return error_response(str(e), 400)
    raise e


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_user_id():
            return rejection_response(NotAuthenticated())
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_user_id():
            return rejection_response(NotAuthenticated())
        if current_role() != Role.ADMIN:
            return error_response("Administrator access required", 403)
        return view(*args, **kwargs)

    return wrapper


def month_year_args() -> tuple[int, int]:
    """``?month=&year=`` with the current month as default."""

    today = date.today()
    try:
        month = int(request.args.get("month") or today.month)
        year = int(request.args.get("year") or today.year)
    except ValueError:
        raise ValidationError("month and year must be integers") from None
    if not 1 <= month <= 12:
        raise ValidationError("month must be within 1..12")
    if not MINYEAR < year < MAXYEAR:
        raise ValidationError(f"year must be within {MINYEAR + 1}..{MAXYEAR - 1}")
    return month, year
