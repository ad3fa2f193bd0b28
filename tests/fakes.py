from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Mapping, Optional, Sequence

from class_attendance.attendance.model import AttendanceLogEntry
from class_attendance.classes.model import ClassSchedule
from class_attendance.core.enums import Role
from class_attendance.notifications.model import NotificationRecord, NotificationRequest
from class_attendance.users.model import User


class InMemoryClasses:
    def __init__(
        self,
        classes: Sequence[ClassSchedule] = (),
        *,
        users: Optional["InMemoryUsers"] = None,
        logs: Optional["InMemoryLogs"] = None,
    ):
        self._by_id: dict[str, ClassSchedule] = {c.class_id: c for c in classes}
        self._users = users
        self._logs = logs

    def get_by_id(self, class_id: str) -> Optional[ClassSchedule]:
        return self._by_id.get(class_id)

    def list_all(self) -> Mapping[str, ClassSchedule]:
        return dict(self._by_id)

    def save(self, schedule: ClassSchedule) -> None:
        self._by_id[schedule.class_id] = schedule

    def set_archived(self, class_id: str, archived: bool) -> bool:
        existing = self._by_id.get(class_id)
        if not existing:
            return False
        self._by_id[class_id] = replace(existing, archived=archived)
        return True

    def delete(self, class_id: str) -> bool:
        if class_id not in self._by_id:
            return False
        del self._by_id[class_id]
        if self._users:
            self._users.drop_class(class_id)
        if self._logs:
            self._logs.delete_where(class_id=class_id)
        return True


class InMemoryUsers:
    def __init__(
        self,
        users: Sequence[User] = (),
        enrollments: Mapping[str, Sequence[str]] | None = None,
        *,
        logs: Optional["InMemoryLogs"] = None,
    ):
        self._logs = logs
        self._by_id: dict[str, User] = {u.user_id: u for u in users}
        self._enrolled: dict[str, list[str]] = {k: list(v) for k, v in (enrollments or {}).items()}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def list_enrolled(self, class_id: str) -> Sequence[User]:
        members = [self._by_id[u] for u in self._enrolled.get(class_id, []) if u in self._by_id]
        return [u for u in members if u.role == Role.STUDENT]

    def enroll(self, *, class_id: str, user_id: str) -> bool:
        members = self._enrolled.setdefault(class_id, [])
        if user_id in members:
            return False
        members.append(user_id)
        return True

    def unenroll(self, *, class_id: str, user_id: str) -> bool:
        members = self._enrolled.get(class_id, [])
        if user_id not in members:
            return False
        members.remove(user_id)
        if self._logs:
            self._logs.delete_where(class_id=class_id, user_id=user_id)
        return True

    def drop_class(self, class_id: str) -> None:
        self._enrolled.pop(class_id, None)

    def is_enrolled(self, class_id: str, user_id: str) -> bool:
        return user_id in self._enrolled.get(class_id, [])


class InMemoryLogs:
    def __init__(self, entries: Sequence[AttendanceLogEntry] = ()):
        self._entries: list[AttendanceLogEntry] = []
        self._next_id = 1
        for e in entries:
            self.add(e)

    def list_for_enrollment(self, *, class_id: str, user_id: str) -> Sequence[AttendanceLogEntry]:
        return [e for e in self._entries if e.class_id == class_id and e.user_id == user_id]

    def list_for_class(self, class_id: str) -> Mapping[str, Sequence[AttendanceLogEntry]]:
        by_user: dict[str, list[AttendanceLogEntry]] = defaultdict(list)
        for e in self._entries:
            if e.class_id == class_id:
                by_user[e.user_id].append(e)
        return dict(by_user)

    def get(self, *, class_id: str, user_id: str, log_id: str) -> Optional[AttendanceLogEntry]:
        for e in self._entries:
            if (e.class_id, e.user_id, e.log_id) == (class_id, user_id, log_id):
                return e
        return None

    def add(self, entry: AttendanceLogEntry) -> str:
        log_id = entry.log_id or f"log{self._next_id}"
        self._next_id += 1
        self._entries.append(replace(entry, log_id=log_id))
        return log_id

    def set_excused(self, *, class_id: str, user_id: str, log_id: str, excused: bool) -> bool:
        for i, e in enumerate(self._entries):
            if (e.class_id, e.user_id, e.log_id) == (class_id, user_id, log_id):
                self._entries[i] = replace(e, excused=excused)
                return True
        return False

    def delete_range(self, *, class_id: str, start: date, end: date) -> int:
        keep = [e for e in self._entries if not (e.class_id == class_id and start <= e.log_date <= end)]
        removed = len(self._entries) - len(keep)
        self._entries = keep
        return removed

    def delete_where(self, *, class_id: str, user_id: Optional[str] = None) -> None:
        self._entries = [
            e for e in self._entries if not (e.class_id == class_id and (user_id is None or e.user_id == user_id))
        ]


class InMemoryNotifications:
    def __init__(self):
        self.records: dict[tuple[str, str, str], NotificationRecord] = {}

    def get(self, *, class_id: str, user_id: str, scope_key: str) -> Optional[NotificationRecord]:
        return self.records.get((class_id, user_id, scope_key))

    def save(self, record: NotificationRecord) -> None:
        self.records[(record.class_id, record.user_id, record.scope_key)] = record


class RecordingMailer:
    def __init__(self, fail_for: Sequence[str] = ()):
        self.sent: list[NotificationRequest] = []
        self._fail_for = set(fail_for)

    def send(self, request: NotificationRequest) -> None:
        if request.recipient_address in self._fail_for:
            raise RuntimeError(f"SMTP refused {request.recipient_address}")
        self.sent.append(request)


class FakeCursor:
    """Stand-in for a mysql-connector dictionary cursor."""

    def __init__(self, row=None, *, rowcount: int = 1):
        self.row = row
        self.rowcount = rowcount
        self.lastrowid = None
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))

    def fetchone(self):
        return self.row

    def fetchall(self):
        return [self.row] if self.row else []

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self, cursor: FakeCursor):
        self.cursor = cursor
        self.conn = FakeConnection(cursor)

    def connect(self, *, with_database: bool = True):
        return self.conn
