from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date

from ..core.enums import NotificationKind


@dataclass(frozen=True)
class NotificationRecord:
    """What was already sent for one (class, student, scope) key.

    ``scope_key`` is the ISO evaluation date for per-day records, or
    ``"enrollment"`` when one record spans the whole enrollment.
    """

    class_id: str
    user_id: str
    scope_key: str
    warning_levels_sent: frozenset[int] = field(default_factory=frozenset)
    failed_attendance_sent: bool = False

    def with_warning(self, level: int) -> "NotificationRecord":
        return replace(self, warning_levels_sent=self.warning_levels_sent | {int(level)})

    def with_failed_attendance(self) -> "NotificationRecord":
        return replace(self, failed_attendance_sent=True)


@dataclass(frozen=True)
class GateDecision:
    kind: NotificationKind
    level: int
    record: NotificationRecord


@dataclass(frozen=True)
class NotificationRequest:
    """Outbound "send notification" request produced by the batch path."""

    recipient_address: str
    subject: str
    body: str
    class_id: str
    user_id: str
    date: date
    level: int
    kind: NotificationKind
