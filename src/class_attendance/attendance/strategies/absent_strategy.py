from __future__ import annotations

from ...classes.model import TimeRange
from ...core.enums import AttendanceStatus
from ..model import AttendanceLogEntry
from ..rules import ClassificationRules
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No clock-in, or a clock-in that was never completed by a clock-out."""

    def decide(self, *, log: AttendanceLogEntry, time_range: TimeRange, rules: ClassificationRules) -> StatusDecision:
        note = None if not log.has_time_in else "missing time out"
        return StatusDecision(status=AttendanceStatus.ABSENT, note=note)
