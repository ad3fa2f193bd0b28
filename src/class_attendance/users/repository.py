from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_enrolled(self, class_id: str) -> Sequence[User]:
        """Students enrolled in a class."""

        raise NotImplementedError

    def enroll(self, *, class_id: str, user_id: str) -> bool:
        raise NotImplementedError

    def unenroll(self, *, class_id: str, user_id: str) -> bool:
        """Drop an enrollment together with its attendance logs."""

        raise NotImplementedError
