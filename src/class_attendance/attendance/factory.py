from __future__ import annotations

from dataclasses import dataclass

from ..classes.model import TimeRange
from ..common.time_parser import to_minutes
from .model import AttendanceLogEntry
from .rules import ClassificationRules
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyTimeoutStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Order matters: an early time-out wins over a late time-in.
    """

    def for_log(self, *, log: AttendanceLogEntry, time_range: TimeRange, rules: ClassificationRules) -> AttendanceStrategy:
        if not log.has_time_in or not log.has_time_out:
            return AbsentStrategy()

        if time_range.end_minutes - to_minutes(log.time_out) > rules.early_leave_margin_minutes:
            return EarlyTimeoutStrategy()

        if to_minutes(log.time_in) > time_range.start_minutes + rules.late_grace_minutes:
            return LateStrategy()
        return NormalStrategy()
