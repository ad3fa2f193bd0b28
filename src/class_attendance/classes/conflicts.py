from __future__ import annotations

from typing import Mapping, Optional

from .model import ClassSchedule


def find_conflict(
    candidate: ClassSchedule,
    existing: Mapping[str, ClassSchedule],
) -> Optional[str]:
    """Return the id of an active class that clashes with ``candidate``.

    Two classes clash when they share a room, meet on at least one common day
    and their time ranges overlap. Archived classes never clash, and a class
    never clashes with its own stored version (edits).
    """

    new_range = candidate.time_range
    if new_range is None:
        return None

    for class_id, other in existing.items():
        if class_id == candidate.class_id:
            continue
        if other.archived:
            continue
        if other.room != candidate.room:
            continue
        if not (other.scheduled_days & candidate.scheduled_days):
            continue
        other_range = other.time_range
        if other_range is None:
            continue
        if new_range.overlaps(other_range):
            return class_id
    return None
