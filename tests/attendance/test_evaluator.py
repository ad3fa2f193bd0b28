from datetime import date

from class_attendance.attendance.evaluator import AttendanceEvaluator, display_sort_key
from class_attendance.attendance.model import AttendanceLogEntry
from class_attendance.classes.model import TimeRange
from class_attendance.core.enums import AttendanceStatus

RANGE = TimeRange(start="09:00", end="10:00")
DAY = date(2026, 2, 2)


def _log(time_in="", time_out="", *, log_id="1", user_id="u1", log_date=DAY, excused=False) -> AttendanceLogEntry:
    return AttendanceLogEntry(
        log_id=log_id,
        class_id="c1",
        user_id=user_id,
        log_date=log_date,
        time_in=time_in,
        time_out=time_out,
        excused=excused,
    )


def _logs(*statuses: str) -> list[AttendanceLogEntry]:
    shapes = {
        "absent": ("", ""),
        "late": ("09:30", "10:00"),
        "early": ("09:00", "09:30"),
        "present": ("09:00", "10:00"),
    }
    return [_log(*shapes[s], log_id=str(i)) for i, s in enumerate(statuses)]


def test_classify_examples():
    ev = AttendanceEvaluator()

    assert ev.classify(_log("09:10", "10:05"), RANGE) == AttendanceStatus.PRESENT
    assert ev.classify(_log("09:20", "10:05"), RANGE) == AttendanceStatus.LATE
    assert ev.classify(_log("09:05", "09:45"), RANGE) == AttendanceStatus.EARLY_TIMEOUT
    assert ev.classify(_log("09:05", ""), RANGE) == AttendanceStatus.ABSENT
    assert ev.classify(_log("", "10:00"), RANGE) == AttendanceStatus.ABSENT


def test_classify_margin_boundaries():
    ev = AttendanceEvaluator()

    # exactly 10 minutes early is still within the margin
    assert ev.classify(_log("09:00", "09:50"), RANGE) == AttendanceStatus.PRESENT
    assert ev.classify(_log("09:00", "09:49"), RANGE) == AttendanceStatus.EARLY_TIMEOUT
    # exactly 15 minutes after start is still on time
    assert ev.classify(_log("09:15", "10:00"), RANGE) == AttendanceStatus.PRESENT


def test_classify_accepts_meridiem_times():
    ev = AttendanceEvaluator()
    afternoon = TimeRange(start="1:00 PM", end="2:00 PM")

    assert ev.classify(_log("1:20 PM", "2:00 PM"), afternoon) == AttendanceStatus.LATE


def test_tally_converts_every_three_incidents():
    ev = AttendanceEvaluator()

    t = ev.tally(_logs("absent", "late", "late", "late", "late", "early", "early"), RANGE)
    assert (t.absent, t.late, t.early) == (1, 4, 2)
    assert t.extra == 2
    assert t.effective == 3

    t = ev.tally(_logs("late", "late", "early"), RANGE)
    assert (t.extra, t.effective) == (1, 1)

    t = ev.tally(_logs("late", "late", "present"), RANGE)
    assert t.effective == 0


def test_tally_ignores_excused_logs():
    ev = AttendanceEvaluator()
    logs = [
        _log("", "", log_id="1"),
        _log("", "", log_id="2", excused=True),
        _log("09:30", "10:00", log_id="3", excused=True),
    ]

    t = ev.tally(logs, RANGE)

    assert (t.absent, t.late, t.early, t.effective) == (1, 0, 0, 1)


def test_tally_without_schedule_is_zero():
    assert AttendanceEvaluator().tally(_logs("absent", "absent"), None).effective == 0


def test_display_order_complete_then_recent():
    ev = AttendanceEvaluator()
    no_show = _log(log_id="none")
    clock_in_only = _log("09:00", "", log_id="in-only")
    older_complete = _log("09:00", "10:00", log_id="old", log_date=date(2026, 1, 26))
    newer_complete = _log("09:00", "10:00", log_id="new")

    ordered = ev.sort_for_display([no_show, older_complete, clock_in_only, newer_complete])

    assert [log.log_id for log in ordered] == ["new", "old", "in-only", "none"]
    assert display_sort_key(no_show)[0] == 0


def test_today_summary_counts_each_student_once():
    ev = AttendanceEvaluator()
    logs_by_user = {
        "on-time": [_log("09:05", "09:55", user_id="on-time")],
        "late": [_log("09:20", "10:00", user_id="late")],
        "left-early": [_log("09:00", "09:30", user_id="left-early")],
        "excused-only": [_log("", "", user_id="excused-only", excused=True)],
        "other-day": [_log("09:00", "10:00", user_id="other-day", log_date=date(2026, 1, 26))],
        "two-scans": [
            _log("09:30", "10:00", log_id="a", user_id="two-scans"),
            _log("09:02", "10:00", log_id="b", user_id="two-scans"),
        ],
    }

    s = ev.today_summary(logs_by_user, RANGE, DAY)

    assert (s.late, s.on_time, s.absent) == (1, 2, 1)
