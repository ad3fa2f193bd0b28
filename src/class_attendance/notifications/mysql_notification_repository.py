from __future__ import annotations

import json
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import NotificationRecord
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    """Rows of ``notifications_sent``; warning levels are stored as a JSON list."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, class_id: str, user_id: str, scope_key: str) -> Optional[NotificationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, user_id, scope_key, failed_attendance, warning_levels
                FROM notifications_sent
                WHERE class_id=%s AND user_id=%s AND scope_key=%s
                """,
                (class_id, user_id, scope_key),
            )
            r = fetchone(cur)
            if not r:
                return None
            return NotificationRecord(
                class_id=str(r["class_id"]),
                user_id=str(r["user_id"]),
                scope_key=str(r["scope_key"]),
                warning_levels_sent=frozenset(int(v) for v in json.loads(r.get("warning_levels") or "[]")),
                failed_attendance_sent=bool(r.get("failed_attendance")),
            )

    def save(self, record: NotificationRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications_sent(class_id, user_id, scope_key, failed_attendance, warning_levels)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    failed_attendance=VALUES(failed_attendance), warning_levels=VALUES(warning_levels)
                """,
                (
                    record.class_id,
                    record.user_id,
                    record.scope_key,
                    int(record.failed_attendance_sent),
                    json.dumps(sorted(record.warning_levels_sent)),
                ),
            )
