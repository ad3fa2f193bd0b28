from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> str:
    return str(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.STUDENT


def parse_date_arg(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Invalid date (YYYY-MM-DD)")
