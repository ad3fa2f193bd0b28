from __future__ import annotations

from dataclasses import dataclass, field

from ..notifications.model import NotificationRequest


@dataclass(frozen=True)
class JobFailure:
    class_id: str
    user_id: str
    error: str


@dataclass
class JobReport:
    """Outcome of one batch run, handed back to the trigger for logging."""

    sent: list[NotificationRequest] = field(default_factory=list)
    marked_absent: list[tuple[str, str]] = field(default_factory=list)
    failures: list[JobFailure] = field(default_factory=list)
    skipped_classes: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "sent": [
                {
                    "class_id": r.class_id,
                    "user_id": r.user_id,
                    "kind": r.kind.value,
                    "level": r.level,
                    "date": r.date.strftime("%Y-%m-%d"),
                }
                for r in self.sent
            ],
            "marked_absent": [{"class_id": c, "user_id": u} for c, u in self.marked_absent],
            "failures": [{"class_id": f.class_id, "user_id": f.user_id, "error": f.error} for f in self.failures],
            "skipped_classes": list(self.skipped_classes),
        }
