from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a student, teacher or admin account.

    Note: Plain data object (no DB access); credentials live with the auth service.
    """

    user_id: str
    name: str
    email: Optional[str]
    role: Role
