from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Iterable, Optional

from ..common.time_parser import to_minutes
from ..common.validators import require_non_empty, require_weekdays
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ScheduleConflictError, ValidationError
from ..users.repository import UserRepository
from .conflicts import find_conflict
from .model import ClassSchedule, TimeRange
from .repository import ClassRepository

logger = logging.getLogger(__name__)


class ClassService:
    def __init__(self, classes: ClassRepository, users: UserRepository):
        self._classes = classes
        self._users = users

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def _build(
        self,
        *,
        class_id: str,
        name: str,
        room: str,
        teacher_id: Optional[str],
        days: Iterable[str],
        start: str,
        end: str,
    ) -> ClassSchedule:
        start = require_non_empty(start, "Start time")
        end = require_non_empty(end, "End time")
        if to_minutes(start) >= to_minutes(end):
            raise ValidationError("Start time must be earlier than end time.")

        return ClassSchedule(
            class_id=class_id,
            name=require_non_empty(name, "Class name"),
            room=require_non_empty(room, "Room"),
            teacher_id=(teacher_id or "").strip() or None,
            scheduled_days=require_weekdays(days),
            time=str(TimeRange(start=start, end=end)),
            archived=False,
        )

    def _check_conflict(self, candidate: ClassSchedule) -> None:
        conflict_id = find_conflict(candidate, self._classes.list_all())
        if conflict_id:
            raise ScheduleConflictError("Please reschedule class", conflicting_class_id=conflict_id)

    def create_class(
        self,
        *,
        current_role: Role,
        name: str,
        room: str,
        teacher_id: Optional[str],
        days: Iterable[str],
        start: str,
        end: str,
    ) -> str:
        self._require_admin(current_role)

        class_id = f"class_{uuid.uuid4().hex[:12]}"
        candidate = self._build(class_id=class_id, name=name, room=room, teacher_id=teacher_id, days=days, start=start, end=end)
        self._check_conflict(candidate)
        self._classes.save(candidate)
        if candidate.teacher_id:
            self._users.enroll(class_id=class_id, user_id=candidate.teacher_id)
        logger.info("Created class %s (%s, %s)", class_id, candidate.name, candidate.time)
        return class_id

    def update_class(
        self,
        *,
        current_role: Role,
        class_id: str,
        name: str,
        room: str,
        teacher_id: Optional[str],
        days: Iterable[str],
        start: str,
        end: str,
    ) -> None:
        self._require_admin(current_role)

        existing = self._classes.get_by_id(class_id)
        if not existing:
            raise ValidationError("Class not found")

        candidate = self._build(class_id=class_id, name=name, room=room, teacher_id=teacher_id, days=days, start=start, end=end)
        if existing.archived:
            candidate = replace(candidate, archived=True)
        else:
            self._check_conflict(candidate)
        self._classes.save(candidate)

    def toggle_archive(self, *, current_role: Role, class_id: str) -> bool:
        """Flip the archived flag. Returns the new value.

        Unarchiving re-checks the class against every active class.
        """

        self._require_admin(current_role)

        existing = self._classes.get_by_id(class_id)
        if not existing:
            raise ValidationError("Class not found")

        if existing.archived:
            self._check_conflict(existing)

        archived = not existing.archived
        if not self._classes.set_archived(class_id, archived):
            raise ValidationError("Updating archive status failed")
        logger.info("Class %s archived=%s", class_id, archived)
        return archived

    def enroll(self, *, current_role: Role, class_id: str, user_id: str) -> None:
        self._require_admin(current_role)

        schedule = self._classes.get_by_id(class_id)
        if not schedule:
            raise ValidationError("Class not found")
        if schedule.archived:
            raise ValidationError("Cannot enroll in an archived class.")
        if not self._users.get_by_id(user_id):
            raise ValidationError("User not found")

        if not self._users.enroll(class_id=class_id, user_id=user_id):
            raise ValidationError("Student is already enrolled")

    def unenroll(self, *, current_role: Role, class_id: str, user_id: str) -> None:
        """Remove a student from a class. Their logs for the class go with the enrollment."""

        self._require_admin(current_role)

        if not self._classes.get_by_id(class_id):
            raise ValidationError("Class not found")
        if not self._users.unenroll(class_id=class_id, user_id=user_id):
            raise ValidationError("Student is not enrolled in this class")
        logger.info("Unenrolled %s from class %s", user_id, class_id)

    def delete_class(self, *, current_role: Role, class_id: str) -> None:
        self._require_admin(current_role)

        if not self._classes.get_by_id(class_id):
            raise ValidationError("Class not found")
        if not self._classes.delete(class_id):
            raise ValidationError("Deleting class failed")
        logger.info("Deleted class %s and its enrollments", class_id)
