from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used for authorization on the dashboard and admin console."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Normalized status of one attendance log."""

    PRESENT = "Present"
    LATE = "Late"
    EARLY_TIMEOUT = "Early Timeout"
    ABSENT = "Absent"

    @classmethod
    def from_marker(cls, value) -> "AttendanceStatus | None":
        """Normalize a loosely typed stored marker ("absent", "Absent", "LATE", ...)."""

        if value is None:
            return None
        if isinstance(value, AttendanceStatus):
            return value
        text = str(value).strip().lower().replace("_", " ").replace("-", " ")
        for status in cls:
            if status.value.lower() == text:
                return status
        return None


class NotificationKind(str, Enum):
    WARNING = "warning"
    FAILED_ATTENDANCE = "failedAttendance"


class NotificationScope(str, Enum):
    """How long a notification record remembers what was already sent."""

    PER_DAY = "per_day"
    PER_ENROLLMENT = "per_enrollment"
