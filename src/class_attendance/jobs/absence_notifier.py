from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..attendance.evaluator import AttendanceEvaluator
from ..attendance.repository import AttendanceLogRepository
from ..classes.model import ClassSchedule
from ..classes.repository import ClassRepository
from ..classes.schedule_window import is_due_for_evaluation
from ..core.constants import DEFAULT_FAILED_THRESHOLD, ENROLLMENT_SCOPE_KEY
from ..core.enums import NotificationKind, NotificationScope
from ..core.exceptions import NotificationDeliveryError
from ..notifications.gate import NotificationGate
from ..notifications.mailer import Mailer
from ..notifications.model import GateDecision, NotificationRecord, NotificationRequest
from ..notifications.repository import NotificationRepository
from ..notifications.templates import render
from ..users.model import User
from ..users.repository import UserRepository
from .model import JobFailure, JobReport

logger = logging.getLogger(__name__)


def scope_key_for(scope: NotificationScope, today: date) -> str:
    if scope == NotificationScope.PER_ENROLLMENT:
        return ENROLLMENT_SCOPE_KEY
    return today.strftime("%Y-%m-%d")


class AbsenceNotificationJob:
    """Daily effective-absence check: warn students, report failures to teachers.

    Delivery order is record-then-send. If the mailer raises, the previous record
    is restored so the next run retries; a crash between the two steps leaves a
    level marked as sent without an email rather than sending it twice.
    """

    def __init__(
        self,
        classes: ClassRepository,
        logs: AttendanceLogRepository,
        users: UserRepository,
        notifications: NotificationRepository,
        mailer: Mailer,
        *,
        evaluator: AttendanceEvaluator | None = None,
        gate: NotificationGate | None = None,
        scope: NotificationScope = NotificationScope.PER_DAY,
        failed_attendance_recipient: Optional[str] = None,
        failed_threshold: int = DEFAULT_FAILED_THRESHOLD,
    ):
        self._classes = classes
        self._logs = logs
        self._users = users
        self._notifications = notifications
        self._mailer = mailer
        self._evaluator = evaluator or AttendanceEvaluator()
        self._gate = gate or NotificationGate(failed_threshold=failed_threshold)
        self._scope = NotificationScope(scope)
        self._failed_recipient = failed_attendance_recipient
        self._failed_threshold = int(failed_threshold)

    def run(self, *, now: datetime) -> JobReport:
        report = JobReport()
        today = now.date()
        scope_key = scope_key_for(self._scope, today)

        for class_id, schedule in self._classes.list_all().items():
            if not is_due_for_evaluation(schedule, now):
                report.skipped_classes.append(class_id)
                continue

            for student in self._users.list_enrolled(class_id):
                try:
                    request = self._evaluate_student(schedule, student, today=today, scope_key=scope_key)
                except Exception as e:
                    logger.exception("Absence notification failed for %s in class %s", student.user_id, class_id)
                    report.failures.append(JobFailure(class_id=class_id, user_id=student.user_id, error=str(e)))
                    continue

                if request:
                    report.sent.append(request)
                    logger.info(
                        "Sent %s email for %s in class %s (effective absences: %d)",
                        request.kind.value,
                        student.user_id,
                        class_id,
                        request.level,
                    )

        if report.failures:
            logger.warning("Absence notification run finished with %d failure(s)", len(report.failures))
        return report

    def _evaluate_student(self, schedule: ClassSchedule, student: User, *, today: date, scope_key: str) -> Optional[NotificationRequest]:
        logs = self._logs.list_for_enrollment(class_id=schedule.class_id, user_id=student.user_id)
        tally = self._evaluator.tally(logs, schedule.time_range)

        previous = self._notifications.get(class_id=schedule.class_id, user_id=student.user_id, scope_key=scope_key)
        record = previous or NotificationRecord(class_id=schedule.class_id, user_id=student.user_id, scope_key=scope_key)

        decision = self._gate.evaluate(tally.effective, record)
        if not decision:
            return None

        request = self._build_request(schedule, student, decision, today=today)

        self._notifications.save(decision.record)
        try:
            self._mailer.send(request)
        except Exception:
            self._notifications.save(record)
            raise
        return request

    def _build_request(self, schedule: ClassSchedule, student: User, decision: GateDecision, *, today: date) -> NotificationRequest:
        if decision.kind == NotificationKind.FAILED_ATTENDANCE:
            recipient = self._teacher_address(schedule) or self._failed_recipient
        else:
            recipient = student.email

        if not recipient:
            raise NotificationDeliveryError(f"No recipient address for {decision.kind.value} notification")

        subject, body = render(
            decision.kind,
            student_name=student.name,
            class_name=schedule.name,
            effective=decision.level,
            failed_threshold=self._failed_threshold,
        )
        return NotificationRequest(
            recipient_address=recipient,
            subject=subject,
            body=body,
            class_id=schedule.class_id,
            user_id=student.user_id,
            date=today,
            level=decision.level,
            kind=decision.kind,
        )

    def _teacher_address(self, schedule: ClassSchedule) -> Optional[str]:
        if not schedule.teacher_id:
            return None
        teacher = self._users.get_by_id(schedule.teacher_id)
        return teacher.email if teacher else None
