from __future__ import annotations

from typing import Mapping, Optional, Protocol

from .model import ClassSchedule


class ClassRepository(Protocol):
    def get_by_id(self, class_id: str) -> Optional[ClassSchedule]:
        raise NotImplementedError

    def list_all(self) -> Mapping[str, ClassSchedule]:
        """All classes keyed by class_id (archived included)."""

        raise NotImplementedError

    def save(self, schedule: ClassSchedule) -> None:
        """Create or replace a class."""

        raise NotImplementedError

    def set_archived(self, class_id: str, archived: bool) -> bool:
        raise NotImplementedError

    def delete(self, class_id: str) -> bool:
        """Remove a class with its enrollments, logs and notification records."""

        raise NotImplementedError
