from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.time_parser import is_blank
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceLogEntry:
    """Domain entity: one scan (or synthesized absence) for a student in a class.

    Times are kept as the raw wall-clock strings the scanners wrote; status is
    derived on read, except for ``status_marker`` which tags synthesized records.
    """

    log_id: str
    class_id: str
    user_id: str
    log_date: date
    time_in: str = ""
    time_out: str = ""
    scanner_in: Optional[str] = None
    scanner_out: Optional[str] = None
    excused: bool = False
    status_marker: Optional[AttendanceStatus] = None

    @property
    def has_time_in(self) -> bool:
        return not is_blank(self.time_in)

    @property
    def has_time_out(self) -> bool:
        return not is_blank(self.time_out)

    @classmethod
    def from_raw(cls, *, log_id: str, class_id: str, user_id: str, raw: Mapping[str, Any]) -> "AttendanceLogEntry":
        """Normalize a loosely shaped stored log (missing keys, "absent" markers)."""

        log_date = raw.get("date")
        if isinstance(log_date, datetime):
            log_date = log_date.date()
        elif not isinstance(log_date, date):
            log_date = parse_iso_date(str(log_date))

        return cls(
            log_id=str(log_id),
            class_id=str(class_id),
            user_id=str(user_id),
            log_date=log_date,
            time_in=str(raw.get("time_in") or ""),
            time_out=str(raw.get("time_out") or ""),
            scanner_in=raw.get("scanner_in") or None,
            scanner_out=raw.get("scanner_out") or None,
            excused=bool(raw.get("excused") or False),
            status_marker=AttendanceStatus.from_marker(raw.get("status")),
        )


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for the dashboard table and exports (one classified log)."""

    log_id: str
    user_id: str
    user_name: str
    log_date: date
    time_in: str
    time_out: str
    scanner_in: Optional[str]
    scanner_out: Optional[str]
    status: AttendanceStatus
    excused: bool


@dataclass(frozen=True)
class EnrollmentTally:
    absent: int = 0
    late: int = 0
    early: int = 0
    effective: int = 0

    @property
    def extra(self) -> int:
        return self.effective - self.absent


@dataclass(frozen=True)
class TodaySummary:
    late: int = 0
    on_time: int = 0
    absent: int = 0
