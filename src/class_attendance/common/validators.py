from __future__ import annotations

from typing import Iterable

from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_weekdays(days: Iterable[str]) -> frozenset[str]:
    normalized = frozenset(d.strip().capitalize() for d in days if d and d.strip())
    if not normalized:
        raise ValidationError("At least one scheduled day is required")
    unknown = sorted(normalized - set(WEEKDAY_NAMES))
    if unknown:
        raise ValidationError(f"Unknown weekday(s): {', '.join(unknown)}")
    return normalized
