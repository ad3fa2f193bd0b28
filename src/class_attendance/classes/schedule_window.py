from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import combine_time, weekday_name
from .model import ClassSchedule


def is_due_for_evaluation(schedule: ClassSchedule, now: datetime) -> bool:
    """Whether the batch jobs may evaluate ``schedule`` at ``now``.

    A class is due once it is active, meets today and today's session has ended.
    Classes with a malformed time range are never due.
    """

    if schedule.archived:
        return False
    if weekday_name(now.date()) not in schedule.scheduled_days:
        return False

    time_range = schedule.time_range
    if time_range is None:
        return False

    return now >= combine_time(now.date(), time_range.end)
