import pytest

from class_attendance.common.time_parser import parse_time, to_minutes


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2:30 PM", (14, 30)),
        ("12:00 AM", (0, 0)),
        ("12:15 PM", (12, 15)),
        ("9:05", (9, 5)),
        ("09:05:59", (9, 5)),
        ("7 pm", (19, 0)),
        ("", (0, 0)),
        ("  -  ", (0, 0)),
        ("/", (0, 0)),
        (None, (0, 0)),
    ],
)
def test_parse_time(text, expected):
    assert parse_time(text) == expected


def test_parse_time_degrades_garbage_to_zero():
    assert parse_time("ab:cd") == (0, 0)
    assert parse_time("10:xx") == (10, 0)
    assert parse_time("05x:3y") == (5, 3)


def test_to_minutes():
    assert to_minutes("10:05") == 605
    assert to_minutes("1:00 PM") == 780
