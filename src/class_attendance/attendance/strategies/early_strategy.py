from __future__ import annotations

from ...classes.model import TimeRange
from ...core.enums import AttendanceStatus
from ..model import AttendanceLogEntry
from ..rules import ClassificationRules
from .base import AttendanceStrategy, StatusDecision


class EarlyTimeoutStrategy(AttendanceStrategy):
    """Checked out before the end-of-class margin."""

    def decide(self, *, log: AttendanceLogEntry, time_range: TimeRange, rules: ClassificationRules) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY_TIMEOUT)
