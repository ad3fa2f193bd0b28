from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import WEEKDAY_NAMES
from .time_parser import parse_time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current wall-clock time in the school's timezone (naive).

    Note: Wrapped so tests can patch/mocked easier.
    """
    if not tz_name:
        return datetime.now()
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def weekday_name(value: date) -> str:
    """English weekday name, independent of the process locale."""
    return WEEKDAY_NAMES[value.weekday()]


def combine_time(day: date, text: Optional[str]) -> datetime:
    """Timestamp of a free-form time string on ``day``.

    Hours past 23 roll over into the next day instead of raising.
    """
    hours, minutes = parse_time(text)
    return datetime.combine(day, time()) + timedelta(hours=hours, minutes=minutes)
