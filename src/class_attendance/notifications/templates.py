from __future__ import annotations

from ..core.enums import NotificationKind

WARNING_SUBJECT = "Attendance Warning"
FAILED_ATTENDANCE_SUBJECT = "Failed Attendance Notification"

_WARNING_BODY = """Dear {student_name},

This is a warning that your effective absence count for class "{class_name}" is {effective}.
You will receive further warnings on each additional absence (e.g., on the 5th, 6th, and 7th absence).
Once your effective absences reach {failed_threshold}, a failed attendance notification will be sent.

Regards,
Attendance System"""

_FAILED_BODY = """Dear Teacher,

Student {student_name} in class "{class_name}" has reached an effective absence count of {effective} and has failed attendance.
Please take the necessary actions.

Regards,
Attendance System"""


def render(kind: NotificationKind, *, student_name: str, class_name: str, effective: int, failed_threshold: int) -> tuple[str, str]:
    """Return ``(subject, body)`` for a notification."""

    if kind == NotificationKind.FAILED_ATTENDANCE:
        body = _FAILED_BODY.format(student_name=student_name, class_name=class_name, effective=effective)
        return FAILED_ATTENDANCE_SUBJECT, body

    body = _WARNING_BODY.format(
        student_name=student_name,
        class_name=class_name,
        effective=effective,
        failed_threshold=failed_threshold,
    )
    return WARNING_SUBJECT, body
