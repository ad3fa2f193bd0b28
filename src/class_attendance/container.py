from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.evaluator import AttendanceEvaluator
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceLogRepository
from .attendance.rules import ClassificationRules
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .core import constants
from .core.enums import NotificationScope
from .database.connection import DBConfig, DatabaseConnection
from .jobs.absence_marker import AbsenceMarkingJob
from .jobs.absence_notifier import AbsenceNotificationJob
from .notifications.gate import NotificationGate
from .notifications.mailer import Mailer
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    classes_repo: ClassRepository
    users_repo: UserRepository
    logs_repo: AttendanceLogRepository
    notifications_repo: NotificationRepository

    evaluator: AttendanceEvaluator
    attendance_service: AttendanceService
    class_service: ClassService
    absence_marking_job: AbsenceMarkingJob
    absence_notification_job: AbsenceNotificationJob

    timezone: Optional[str] = None
    job_token: str = ""


def build_services(
    *,
    settings: Any,
    classes_repo: ClassRepository,
    users_repo: UserRepository,
    logs_repo: AttendanceLogRepository,
    notifications_repo: NotificationRepository,
    mailer: Mailer,
) -> Container:
    """Wire services and jobs on top of any repository implementations."""

    rules = ClassificationRules(
        late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", constants.DEFAULT_LATE_GRACE_MINUTES)),
        early_leave_margin_minutes=int(
            getattr(settings, "EARLY_LEAVE_MARGIN_MINUTES", constants.DEFAULT_EARLY_LEAVE_MARGIN_MINUTES)
        ),
    )
    evaluator = AttendanceEvaluator(rules, strategy_factory=AttendanceStrategyFactory())

    failed_threshold = int(getattr(settings, "FAILED_THRESHOLD", constants.DEFAULT_FAILED_THRESHOLD))
    gate = NotificationGate(
        warning_threshold=int(getattr(settings, "WARNING_THRESHOLD", constants.DEFAULT_WARNING_THRESHOLD)),
        failed_threshold=failed_threshold,
    )

    attendance_service = AttendanceService(classes_repo, logs_repo, users_repo, evaluator=evaluator)
    class_service = ClassService(classes_repo, users_repo)
    absence_marking_job = AbsenceMarkingJob(classes_repo, logs_repo, users_repo)
    absence_notification_job = AbsenceNotificationJob(
        classes_repo,
        logs_repo,
        users_repo,
        notifications_repo,
        mailer,
        evaluator=evaluator,
        gate=gate,
        scope=NotificationScope(getattr(settings, "NOTIFICATION_SCOPE", NotificationScope.PER_DAY.value)),
        failed_attendance_recipient=getattr(settings, "FAILED_ATTENDANCE_RECIPIENT", "") or None,
        failed_threshold=failed_threshold,
    )

    return Container(
        classes_repo=classes_repo,
        users_repo=users_repo,
        logs_repo=logs_repo,
        notifications_repo=notifications_repo,
        evaluator=evaluator,
        attendance_service=attendance_service,
        class_service=class_service,
        absence_marking_job=absence_marking_job,
        absence_notification_job=absence_notification_job,
        timezone=getattr(settings, "TIMEZONE", constants.DEFAULT_TIMEZONE) or None,
        job_token=str(getattr(settings, "JOB_TOKEN", "") or ""),
    )


def build_container(*, settings: Any, mailer: Mailer) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    return build_services(
        settings=settings,
        classes_repo=MySQLClassRepository(conn),
        users_repo=MySQLUserRepository(conn),
        logs_repo=MySQLAttendanceRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        mailer=mailer,
    )
