from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.time_parser import to_minutes


@dataclass(frozen=True)
class TimeRange:
    start: str
    end: str

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    def overlaps(self, other: "TimeRange") -> bool:
        return self.start_minutes < other.end_minutes and other.start_minutes < self.end_minutes

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


def parse_time_range(value: Optional[str]) -> Optional[TimeRange]:
    """Parse a stored "HH:mm - HH:mm" range; None unless exactly two parts."""

    if not value:
        return None
    parts = value.split("-")
    if len(parts) != 2:
        return None
    return TimeRange(start=parts[0].strip(), end=parts[1].strip())


@dataclass(frozen=True)
class ClassSchedule:
    """Domain entity: a class with its weekly schedule."""

    class_id: str
    name: str
    room: str
    teacher_id: Optional[str]
    scheduled_days: frozenset[str] = field(default_factory=frozenset)
    time: str = ""
    archived: bool = False

    @property
    def time_range(self) -> Optional[TimeRange]:
        return parse_time_range(self.time)
