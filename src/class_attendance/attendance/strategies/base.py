from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...classes.model import TimeRange
from ...core.enums import AttendanceStatus
from ..model import AttendanceLogEntry
from ..rules import ClassificationRules


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, *, log: AttendanceLogEntry, time_range: TimeRange, rules: ClassificationRules) -> StatusDecision:
        raise NotImplementedError
