from __future__ import annotations

from class_attendance.notifications.model import NotificationRecord
from class_attendance.notifications.mysql_notification_repository import MySQLNotificationRepository
from tests.fakes import FakeConnectionFactory, FakeCursor


def test_save_stores_levels_as_sorted_json():
    factory = FakeConnectionFactory(FakeCursor())
    repo = MySQLNotificationRepository(factory)

    repo.save(NotificationRecord(class_id="c1", user_id="u1", scope_key="2026-02-02", warning_levels_sent=frozenset({6, 4})))

    (_, params) = factory.cursor.executed[0]
    assert params == ("c1", "u1", "2026-02-02", 0, "[4, 6]")
    assert factory.conn.committed


def test_get_decodes_row():
    row = {"class_id": "c1", "user_id": 7, "scope_key": "enrollment", "failed_attendance": 1, "warning_levels": "[4, 5]"}
    repo = MySQLNotificationRepository(FakeConnectionFactory(FakeCursor(row)))

    record = repo.get(class_id="c1", user_id="7", scope_key="enrollment")

    assert record.user_id == "7"
    assert record.warning_levels_sent == frozenset({4, 5})
    assert record.failed_attendance_sent


def test_get_missing_row():
    repo = MySQLNotificationRepository(FakeConnectionFactory(FakeCursor(None)))

    assert repo.get(class_id="c1", user_id="u1", scope_key="2026-02-02") is None
