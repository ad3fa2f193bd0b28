from __future__ import annotations

import logging
from datetime import datetime

from ..attendance.model import AttendanceLogEntry
from ..attendance.repository import AttendanceLogRepository
from ..classes.repository import ClassRepository
from ..classes.schedule_window import is_due_for_evaluation
from ..core.enums import AttendanceStatus
from ..users.repository import UserRepository
from .model import JobFailure, JobReport

logger = logging.getLogger(__name__)


class AbsenceMarkingJob:
    """Write an absence record for every enrolled student who never scanned today.

    Runs repeatedly through the day; a class is only handled once its session has
    ended, and a student already marked absent today is left alone.
    """

    def __init__(self, classes: ClassRepository, logs: AttendanceLogRepository, users: UserRepository):
        self._classes = classes
        self._logs = logs
        self._users = users

    def run(self, *, now: datetime) -> JobReport:
        report = JobReport()
        today = now.date()

        for class_id, schedule in self._classes.list_all().items():
            if not is_due_for_evaluation(schedule, now):
                report.skipped_classes.append(class_id)
                continue

            for student in self._users.list_enrolled(class_id):
                try:
                    if self._mark_if_missing(class_id=class_id, user_id=student.user_id, now=now):
                        report.marked_absent.append((class_id, student.user_id))
                        logger.info("Marked %s absent in class %s on %s", student.user_id, class_id, today)
                except Exception as e:
                    logger.exception("Absence marking failed for %s in class %s", student.user_id, class_id)
                    report.failures.append(JobFailure(class_id=class_id, user_id=student.user_id, error=str(e)))

        return report

    def _mark_if_missing(self, *, class_id: str, user_id: str, now: datetime) -> bool:
        today = now.date()
        todays = [log for log in self._logs.list_for_enrollment(class_id=class_id, user_id=user_id) if log.log_date == today]

        if any(log.has_time_in or log.has_time_out for log in todays):
            return False
        if any(log.status_marker == AttendanceStatus.ABSENT for log in todays):
            return False

        self._logs.add(
            AttendanceLogEntry(
                log_id="",
                class_id=class_id,
                user_id=user_id,
                log_date=today,
                status_marker=AttendanceStatus.ABSENT,
            )
        )
        return True
