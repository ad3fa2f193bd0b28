from __future__ import annotations

from typing import Optional, Protocol

from .model import NotificationRecord


class NotificationRepository(Protocol):
    def get(self, *, class_id: str, user_id: str, scope_key: str) -> Optional[NotificationRecord]:
        raise NotImplementedError

    def save(self, record: NotificationRecord) -> None:
        """Create or replace the record for its (class, user, scope) key."""

        raise NotImplementedError
