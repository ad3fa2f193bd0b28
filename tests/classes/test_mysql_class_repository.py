from class_attendance.classes.mysql_class_repository import MySQLClassRepository
from tests.fakes import FakeConnectionFactory, FakeCursor


def test_delete_cascades_in_one_transaction():
    factory = FakeConnectionFactory(FakeCursor())

    assert MySQLClassRepository(factory).delete("math") is True

    statements = [" ".join(sql.split()) for sql, _ in factory.cursor.executed]
    assert statements == [
        "DELETE FROM enrollments WHERE class_id=%s",
        "DELETE FROM attendance_logs WHERE class_id=%s",
        "DELETE FROM notifications_sent WHERE class_id=%s",
        "DELETE FROM classes WHERE class_id=%s",
    ]
    assert all(params == ("math",) for _, params in factory.cursor.executed)
    assert factory.conn.committed


def test_delete_unknown_class():
    assert MySQLClassRepository(FakeConnectionFactory(FakeCursor(rowcount=0))).delete("nope") is False
