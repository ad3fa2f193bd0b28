from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from class_attendance.attendance.model import AttendanceLogEntry
from class_attendance.classes.model import ClassSchedule
from class_attendance.container import build_services
from class_attendance.core.enums import Role
from class_attendance.main import create_app
from class_attendance.users.model import User
from tests.fakes import InMemoryClasses, InMemoryLogs, InMemoryNotifications, InMemoryUsers, RecordingMailer

TOKEN = "test-job-token"


@pytest.fixture
def container():
    settings = SimpleNamespace(JOB_TOKEN=TOKEN, TIMEZONE="Asia/Manila")
    classes = InMemoryClasses(
        [
            ClassSchedule(
                class_id="math",
                name="Math",
                room="R1",
                teacher_id="t1",
                scheduled_days=frozenset({"Monday"}),
                time="09:00 - 10:00",
            )
        ]
    )
    users = InMemoryUsers(
        [
            User(user_id="ana", name="Ana Cruz", email="ana@example.com", role=Role.STUDENT),
            User(user_id="t1", name="Ms. Lim", email="lim@example.com", role=Role.TEACHER),
        ],
        {"math": ["ana"]},
    )
    logs = InMemoryLogs(
        [
            AttendanceLogEntry(
                log_id="", class_id="math", user_id="ana", log_date=date(2026, 2, 2), time_in="09:20", time_out="10:00"
            )
        ]
    )
    return build_services(
        settings=settings,
        classes_repo=classes,
        users_repo=users,
        logs_repo=logs,
        notifications_repo=InMemoryNotifications(),
        mailer=RecordingMailer(),
    )


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


def _login(client, user_id: str, role: Role) -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role.value


def test_attendance_requires_login(client):
    res = client.get("/api/classes/math/attendance")

    assert res.status_code == 401


def test_attendance_rows(client):
    _login(client, "t1", Role.TEACHER)

    res = client.get("/api/classes/math/attendance")

    assert res.status_code == 200
    (row,) = res.get_json()["rows"]
    assert row["status"] == "Late"
    assert row["scanner_in"] == "N/A"


def test_summary_for_date(client):
    _login(client, "t1", Role.TEACHER)

    body = client.get("/api/classes/math/attendance/summary?date=2026-02-02").get_json()

    assert (body["late"], body["on_time"], body["absent"]) == (1, 0, 0)


def test_bad_date_is_rejected(client):
    _login(client, "t1", Role.TEACHER)

    assert client.get("/api/classes/math/attendance/summary?date=02-02-2026").status_code == 400


def test_student_cannot_excuse(client):
    _login(client, "ana", Role.STUDENT)

    res = client.post("/api/classes/math/attendance/ana/log1/excused", json={"excused": True})

    assert res.status_code == 403


def test_teacher_excuses_log(client, container):
    _login(client, "t1", Role.TEACHER)

    res = client.post("/api/classes/math/attendance/ana/log1/excused", json={"excused": True})

    assert res.status_code == 200
    assert container.attendance_service.get_tally("math", "ana").late == 0


def test_export_csv(client):
    _login(client, "t1", Role.ADMIN)

    res = client.get("/api/classes/math/attendance/export.csv")

    assert res.status_code == 200
    text = res.data.decode("utf-8-sig")
    assert text.splitlines()[0] == "Name,Date,Time In,Time Out,Scanner In,Scanner Out,Status"
    assert "Ana Cruz,2026-02-02,09:20,10:00,N/A,N/A,Late" in text


def test_class_conflict_returns_409(client):
    _login(client, "admin", Role.ADMIN)

    res = client.post(
        "/api/classes",
        json={"name": "Physics", "room": "R1", "days": ["Monday"], "start": "09:30", "end": "10:30"},
    )

    assert res.status_code == 409
    assert res.get_json()["conflicting_class_id"] == "math"


def test_jobs_require_token(client):
    assert client.post("/jobs/absence-marking").status_code == 403
    assert client.post("/jobs/absence-marking", headers={"X-Job-Token": "nope"}).status_code == 403


def test_jobs_run_with_token(client):
    res = client.post("/jobs/absence-notifications", headers={"X-Job-Token": TOKEN})

    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["failures"] == []


def test_admin_unenrolls_and_deletes_class(client, container):
    _login(client, "admin", Role.ADMIN)

    assert client.delete("/api/classes/math/enrollments/ana").status_code == 200
    assert container.users_repo.list_enrolled("math") == []

    assert client.delete("/api/classes/math").status_code == 200
    assert client.get("/api/classes/math/attendance").status_code == 400


def test_teacher_cannot_delete_class(client):
    _login(client, "t1", Role.TEACHER)

    assert client.delete("/api/classes/math").status_code == 403
