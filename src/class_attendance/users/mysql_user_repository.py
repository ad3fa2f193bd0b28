from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository


def _to_user(r: Mapping[str, Any]) -> User:
    return User(
        user_id=str(r["user_id"]),
        name=r["name"],
        email=r.get("email") or None,
        role=Role(r.get("role") or Role.STUDENT.value),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, email, role FROM users WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def list_enrolled(self, class_id: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.name, u.email, u.role
                FROM enrollments e
                JOIN users u ON u.user_id = e.user_id
                WHERE e.class_id=%s AND u.role=%s
                ORDER BY u.name
                """,
                (class_id, Role.STUDENT.value),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def enroll(self, *, class_id: str, user_id: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT INTO enrollments(class_id, user_id) VALUES(%s,%s)", (class_id, user_id))
                return cur.rowcount > 0
        except mysql.connector.IntegrityError:
            return False

    def unenroll(self, *, class_id: str, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM enrollments WHERE class_id=%s AND user_id=%s", (class_id, user_id))
            removed = cur.rowcount > 0
            cur.execute("DELETE FROM attendance_logs WHERE class_id=%s AND user_id=%s", (class_id, user_id))
            return removed
