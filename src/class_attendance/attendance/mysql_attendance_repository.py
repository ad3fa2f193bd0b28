from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceLogEntry
from .repository import AttendanceLogRepository

_COLUMNS = "log_id, class_id, user_id, log_date, time_in, time_out, scanner_in, scanner_out, excused, status_marker"


def _log_pk(log_id: str) -> Optional[int]:
    # log_id is an AUTO_INCREMENT key; anything else cannot match a row.
    value = str(log_id or "").strip()
    return int(value) if value.isdigit() else None


def _to_entry(r: Mapping[str, Any]) -> AttendanceLogEntry:
    return AttendanceLogEntry.from_raw(
        log_id=r["log_id"],
        class_id=r["class_id"],
        user_id=r["user_id"],
        raw={
            "date": r["log_date"],
            "time_in": r.get("time_in"),
            "time_out": r.get("time_out"),
            "scanner_in": r.get("scanner_in"),
            "scanner_out": r.get("scanner_out"),
            "excused": r.get("excused"),
            "status": r.get("status_marker"),
        },
    )


class MySQLAttendanceRepository(AttendanceLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_enrollment(self, *, class_id: str, user_id: str) -> Sequence[AttendanceLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE class_id=%s AND user_id=%s
                ORDER BY log_date, log_id
                """,
                (class_id, user_id),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_for_class(self, class_id: str) -> Mapping[str, Sequence[AttendanceLogEntry]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE class_id=%s
                ORDER BY user_id, log_date, log_id
                """,
                (class_id,),
            )
            by_user: dict[str, list[AttendanceLogEntry]] = defaultdict(list)
            for r in fetchall(cur):
                entry = _to_entry(r)
                by_user[entry.user_id].append(entry)
            return dict(by_user)

    def get(self, *, class_id: str, user_id: str, log_id: str) -> Optional[AttendanceLogEntry]:
        pk = _log_pk(log_id)
        if pk is None:
            return None

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_logs WHERE class_id=%s AND user_id=%s AND log_id=%s",
                (class_id, user_id, pk),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def add(self, entry: AttendanceLogEntry) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(
                    class_id, user_id, log_date, time_in, time_out, scanner_in, scanner_out, excused, status_marker
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.class_id,
                    entry.user_id,
                    entry.log_date,
                    entry.time_in,
                    entry.time_out,
                    entry.scanner_in,
                    entry.scanner_out,
                    int(entry.excused),
                    entry.status_marker.value if entry.status_marker else None,
                ),
            )
            return str(cur.lastrowid)

    def set_excused(self, *, class_id: str, user_id: str, log_id: str, excused: bool) -> bool:
        pk = _log_pk(log_id)
        if pk is None:
            return False

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_logs
                SET excused=%s
                WHERE class_id=%s AND user_id=%s AND log_id=%s
                """,
                (int(excused), class_id, user_id, pk),
            )
            # Matched-but-unchanged rows report rowcount 0; existence is checked by the service.
            return True

    def delete_range(self, *, class_id: str, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_logs WHERE class_id=%s AND log_date BETWEEN %s AND %s",
                (class_id, start, end),
            )
            return int(cur.rowcount)
