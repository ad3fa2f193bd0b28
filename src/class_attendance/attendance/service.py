from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence

from ..classes.model import ClassSchedule
from ..classes.repository import ClassRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .evaluator import AttendanceEvaluator
from .model import AttendanceLogEntry, AttendanceRow, EnrollmentTally, TodaySummary
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown User"


@dataclass(frozen=True)
class StudentTally:
    user_id: str
    user_name: str
    tally: EnrollmentTally


class AttendanceService:
    def __init__(
        self,
        classes: ClassRepository,
        logs: AttendanceLogRepository,
        users: UserRepository,
        *,
        evaluator: AttendanceEvaluator | None = None,
    ):
        self._classes = classes
        self._logs = logs
        self._users = users
        self._evaluator = evaluator or AttendanceEvaluator()

    def _get_class(self, class_id: str) -> ClassSchedule:
        schedule = self._classes.get_by_id(class_id)
        if not schedule:
            raise ValidationError("Class not found")
        if schedule.time_range is None:
            logger.warning("Class %s has a malformed time range %r", class_id, schedule.time)
        return schedule

    def _names(self, class_id: str) -> dict[str, str]:
        return {u.user_id: u.name for u in self._users.list_enrolled(class_id)}

    def _visible_logs(self, class_id: str, *, viewer_id: str, viewer_role: Role) -> Mapping[str, Sequence[AttendanceLogEntry]]:
        logs_by_user = self._logs.list_for_class(class_id)
        if viewer_role == Role.STUDENT:
            return {viewer_id: logs_by_user.get(viewer_id, [])}
        return logs_by_user

    def get_rows(
        self,
        class_id: str,
        *,
        viewer_id: str,
        viewer_role: Role,
        on_date: Optional[date] = None,
        name_query: str = "",
    ) -> list[AttendanceRow]:
        """Classified logs for the dashboard table, most complete and recent first.

        Students only ever see their own logs.
        """

        schedule = self._get_class(class_id)
        time_range = schedule.time_range
        if time_range is None:
            return []

        names = self._names(class_id)
        needle = (name_query or "").strip().lower()

        selected: list[AttendanceLogEntry] = []
        for user_id, logs in self._visible_logs(class_id, viewer_id=viewer_id, viewer_role=viewer_role).items():
            if needle and needle not in names.get(user_id, UNKNOWN_USER_NAME).lower():
                continue
            selected.extend(log for log in logs if not on_date or log.log_date == on_date)

        return [
            AttendanceRow(
                log_id=log.log_id,
                user_id=log.user_id,
                user_name=names.get(log.user_id, UNKNOWN_USER_NAME),
                log_date=log.log_date,
                time_in=log.time_in,
                time_out=log.time_out,
                scanner_in=log.scanner_in,
                scanner_out=log.scanner_out,
                status=self._evaluator.classify(log, time_range),
                excused=log.excused,
            )
            for log in self._evaluator.sort_for_display(selected)
        ]

    def get_today_summary(self, class_id: str, today: date, *, viewer_id: str, viewer_role: Role) -> TodaySummary:
        """Late / on-time / absent counts for ``today``; students only count their own logs."""

        schedule = self._get_class(class_id)
        logs_by_user = self._visible_logs(class_id, viewer_id=viewer_id, viewer_role=viewer_role)
        return self._evaluator.today_summary(logs_by_user, schedule.time_range, today)

    def get_tally(self, class_id: str, user_id: str) -> EnrollmentTally:
        schedule = self._classes.get_by_id(class_id)
        if not schedule:
            return EnrollmentTally()
        logs = self._logs.list_for_enrollment(class_id=class_id, user_id=user_id)
        return self._evaluator.tally(logs, schedule.time_range)

    def get_class_tallies(self, class_id: str) -> list[StudentTally]:
        """Absence tally of every enrolled student, worst first."""

        schedule = self._classes.get_by_id(class_id)
        if not schedule:
            return []

        logs_by_user = self._logs.list_for_class(class_id)
        out = [
            StudentTally(
                user_id=student.user_id,
                user_name=student.name,
                tally=self._evaluator.tally(logs_by_user.get(student.user_id, []), schedule.time_range),
            )
            for student in self._users.list_enrolled(class_id)
        ]
        out.sort(key=lambda s: s.tally.effective, reverse=True)
        return out

    def set_excused(self, *, current_role: Role, class_id: str, user_id: str, log_id: str, excused: bool) -> None:
        if current_role not in (Role.ADMIN, Role.TEACHER):
            raise AuthorizationError("Only teachers and admins can excuse attendance")

        if not self._logs.get(class_id=class_id, user_id=user_id, log_id=log_id):
            raise ValidationError("Attendance log not found")
        if not self._logs.set_excused(class_id=class_id, user_id=user_id, log_id=log_id, excused=bool(excused)):
            raise ValidationError("Updating excused status failed")
        logger.info("Log %s (%s/%s) marked excused=%s", log_id, class_id, user_id, bool(excused))

    def exclude_range(self, *, current_role: Role, class_id: str, start: date, end: date) -> int:
        if current_role not in (Role.ADMIN, Role.TEACHER):
            raise AuthorizationError("Only teachers and admins can exclude attendance logs")
        if end < start:
            raise ValidationError("End date cannot be before start date")

        self._get_class(class_id)
        removed = self._logs.delete_range(class_id=class_id, start=start, end=end)
        logger.info("Excluded %d log(s) of class %s between %s and %s", removed, class_id, start, end)
        return removed

    @staticmethod
    def export_rows(rows: Sequence[AttendanceRow]) -> list[dict]:
        return [
            {
                "Name": r.user_name,
                "Date": r.log_date.strftime("%Y-%m-%d"),
                "Time In": r.time_in,
                "Time Out": r.time_out or "-",
                "Scanner In": r.scanner_in or "N/A",
                "Scanner Out": r.scanner_out or "N/A",
                "Status": "Excused" if r.excused else r.status.value,
            }
            for r in rows
        ]
