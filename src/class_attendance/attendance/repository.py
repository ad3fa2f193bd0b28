from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from .model import AttendanceLogEntry


class AttendanceLogRepository(Protocol):
    def list_for_enrollment(self, *, class_id: str, user_id: str) -> Sequence[AttendanceLogEntry]:
        raise NotImplementedError

    def list_for_class(self, class_id: str) -> Mapping[str, Sequence[AttendanceLogEntry]]:
        """Logs of every enrolled student keyed by user_id."""

        raise NotImplementedError

    def get(self, *, class_id: str, user_id: str, log_id: str) -> Optional[AttendanceLogEntry]:
        raise NotImplementedError

    def add(self, entry: AttendanceLogEntry) -> str:
        """Append a log. Returns the stored log_id."""

        raise NotImplementedError

    def set_excused(self, *, class_id: str, user_id: str, log_id: str, excused: bool) -> bool:
        raise NotImplementedError

    def delete_range(self, *, class_id: str, start: date, end: date) -> int:
        """Remove logs dated within [start, end]. Returns the number removed."""

        raise NotImplementedError
