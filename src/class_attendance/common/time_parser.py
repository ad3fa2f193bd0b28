from __future__ import annotations

import re
from typing import Optional

_EMPTY_MARKERS = {"", "-", "/"}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_MERIDIEM = re.compile(r"(AM|PM)$")


def _leading_int(token: Optional[str]) -> int:
    """Digit prefix of ``token`` as int, 0 when there is none ("05x" -> 5, "x" -> 0)."""

    if not token:
        return 0
    m = _LEADING_INT.match(token)
    return int(m.group(1)) if m else 0


def _split_hours_minutes(text: str) -> tuple[int, int]:
    parts = text.split(":")
    hours = _leading_int(parts[0])
    minutes = _leading_int(parts[1]) if len(parts) > 1 else 0
    return hours, minutes


def parse_time(text: Optional[str]) -> tuple[int, int]:
    """Parse a free-form wall-clock time into ``(hours, minutes)``.

    Accepts "H:mm", "HH:mm:ss" and "hh:mm AM/PM". Empty values and the "-" / "/"
    placeholders give ``(0, 0)``. Never raises: unparseable tokens count as 0.
    """

    if text is None:
        return 0, 0
    trimmed = str(text).strip().upper()
    if trimmed in _EMPTY_MARKERS:
        return 0, 0

    meridiem = _MERIDIEM.search(trimmed)
    if not meridiem:
        return _split_hours_minutes(trimmed)

    hours, minutes = _split_hours_minutes(trimmed[: meridiem.start()].strip())
    if meridiem.group(1) == "PM" and hours < 12:
        hours += 12
    elif meridiem.group(1) == "AM" and hours == 12:
        hours = 0
    return hours, minutes


def to_minutes(text: Optional[str]) -> int:
    """Minute-of-day for a time string (see :func:`parse_time`)."""

    hours, minutes = parse_time(text)
    return hours * 60 + minutes


def is_blank(text: Optional[str]) -> bool:
    return text is None or not str(text).strip()
