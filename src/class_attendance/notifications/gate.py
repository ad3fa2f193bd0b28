from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_FAILED_THRESHOLD, DEFAULT_WARNING_THRESHOLD
from ..core.enums import NotificationKind
from .model import GateDecision, NotificationRecord


class NotificationGate:
    """Decide which email, if any, an effective-absence count should trigger.

    Each warning level is sent at most once per record and the failed-attendance
    email at most once. Lower counts later on never retract what was sent.
    """

    def __init__(self, *, warning_threshold: int = DEFAULT_WARNING_THRESHOLD, failed_threshold: int = DEFAULT_FAILED_THRESHOLD):
        if warning_threshold >= failed_threshold:
            raise ValueError("warning_threshold must be below failed_threshold")
        self._warning_threshold = int(warning_threshold)
        self._failed_threshold = int(failed_threshold)

    def evaluate(self, effective: int, record: NotificationRecord) -> Optional[GateDecision]:
        if effective >= self._failed_threshold:
            if record.failed_attendance_sent:
                return None
            return GateDecision(
                kind=NotificationKind.FAILED_ATTENDANCE,
                level=effective,
                record=record.with_failed_attendance(),
            )

        if effective >= self._warning_threshold:
            if effective in record.warning_levels_sent:
                return None
            return GateDecision(
                kind=NotificationKind.WARNING,
                level=effective,
                record=record.with_warning(effective),
            )

        return None
