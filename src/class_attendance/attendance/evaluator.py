from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..classes.model import TimeRange
from ..common.datetime_utils import combine_time
from ..common.time_parser import to_minutes
from ..core.enums import AttendanceStatus
from .factory import AttendanceStrategyFactory
from .model import AttendanceLogEntry, EnrollmentTally, TodaySummary
from .rules import ClassificationRules
from .strategies.base import StatusDecision


def display_sort_key(log: AttendanceLogEntry) -> tuple[int, datetime]:
    """Rank complete records above clock-in-only ones, and both above no-shows.

    Within a rank the governing timestamp (time out, else time in) breaks ties.
    Sort with ``reverse=True`` to surface the most complete, most recent first.
    """

    if not log.has_time_in:
        return 0, datetime.min
    if log.has_time_out:
        return 2, combine_time(log.log_date, log.time_out)
    return 1, combine_time(log.log_date, log.time_in)


class AttendanceEvaluator:
    """Single home of the attendance rules.

    Used by both the dashboard (live path) and the scheduled jobs (batch path)
    so what teachers see is exactly what triggers notification emails.
    """

    def __init__(
        self,
        rules: ClassificationRules | None = None,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._rules = rules or ClassificationRules()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    @property
    def rules(self) -> ClassificationRules:
        return self._rules

    def decide(self, log: AttendanceLogEntry, time_range: TimeRange) -> StatusDecision:
        strategy = self._factory.for_log(log=log, time_range=time_range, rules=self._rules)
        return strategy.decide(log=log, time_range=time_range, rules=self._rules)

    def classify(self, log: AttendanceLogEntry, time_range: TimeRange) -> AttendanceStatus:
        return self.decide(log, time_range).status

    def tally(self, logs: Iterable[AttendanceLogEntry], time_range: Optional[TimeRange]) -> EnrollmentTally:
        """Fold a student's logs for one class into absence counters.

        Excused logs are ignored entirely. Every ``incidents_per_absence`` late or
        early-timeout incidents add one absence, rounding down.
        """

        if time_range is None:
            return EnrollmentTally()

        absent = late = early = 0
        for log in logs:
            if log.excused:
                continue
            status = self.classify(log, time_range)
            if status == AttendanceStatus.ABSENT:
                absent += 1
            elif status == AttendanceStatus.LATE:
                late += 1
            elif status == AttendanceStatus.EARLY_TIMEOUT:
                early += 1

        extra = (late + early) // self._rules.incidents_per_absence
        return EnrollmentTally(absent=absent, late=late, early=early, effective=absent + extra)

    def sort_for_display(self, logs: Iterable[AttendanceLogEntry]) -> list[AttendanceLogEntry]:
        return sorted(logs, key=display_sort_key, reverse=True)

    def today_summary(
        self,
        logs_by_user: Mapping[str, Sequence[AttendanceLogEntry]],
        time_range: Optional[TimeRange],
        today: date,
    ) -> TodaySummary:
        """Late / on-time / absent head count for one class on ``today``.

        Only students with a non-excused log dated today are counted. A log is
        valid when its time out falls within the early-leave margin of the
        scheduled end; the earliest valid time in decides late vs on time.
        """

        if time_range is None:
            return TodaySummary()

        earliest_valid_out = time_range.end_minutes - self._rules.early_leave_margin_minutes
        late_after = time_range.start_minutes + self._rules.late_grace_minutes

        late = on_time = absent = 0
        for logs in logs_by_user.values():
            todays = [log for log in logs if log.log_date == today and not log.excused]
            if not todays:
                continue

            valid = [log for log in todays if log.has_time_out and to_minutes(log.time_out) >= earliest_valid_out]
            if not valid:
                absent += 1
                continue

            first_in = min(to_minutes(log.time_in) for log in valid)
            if first_in > late_after:
                late += 1
            else:
                on_time += 1

        return TodaySummary(late=late, on_time=on_time, absent=absent)
