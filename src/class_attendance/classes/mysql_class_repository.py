from __future__ import annotations

from typing import Any, Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassSchedule
from .repository import ClassRepository

_COLUMNS = "class_id, name, room, teacher_id, days, time_range, archived"


def _to_schedule(r: Mapping[str, Any]) -> ClassSchedule:
    days = r.get("days") or ""
    return ClassSchedule(
        class_id=str(r["class_id"]),
        name=r["name"],
        room=r["room"],
        teacher_id=r.get("teacher_id") or None,
        scheduled_days=frozenset(d.strip() for d in days.split(",") if d.strip()),
        time=r.get("time_range") or "",
        archived=bool(r.get("archived")),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: str) -> Optional[ClassSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes WHERE class_id=%s", (class_id,))
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def list_all(self) -> Mapping[str, ClassSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes ORDER BY class_id")
            return {str(r["class_id"]): _to_schedule(r) for r in fetchall(cur)}

    def save(self, schedule: ClassSchedule) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO classes(class_id, name, room, teacher_id, days, time_range, archived)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), room=VALUES(room), teacher_id=VALUES(teacher_id),
                    days=VALUES(days), time_range=VALUES(time_range), archived=VALUES(archived)
                """,
                (
                    schedule.class_id,
                    schedule.name,
                    schedule.room,
                    schedule.teacher_id,
                    ",".join(sorted(schedule.scheduled_days)),
                    schedule.time,
                    int(schedule.archived),
                ),
            )

    def set_archived(self, class_id: str, archived: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE classes SET archived=%s WHERE class_id=%s", (int(archived), class_id))
            return cur.rowcount > 0

    def delete(self, class_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM enrollments WHERE class_id=%s", (class_id,))
            cur.execute("DELETE FROM attendance_logs WHERE class_id=%s", (class_id,))
            cur.execute("DELETE FROM notifications_sent WHERE class_id=%s", (class_id,))
            cur.execute("DELETE FROM classes WHERE class_id=%s", (class_id,))
            return cur.rowcount > 0
