from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_EARLY_LEAVE_MARGIN_MINUTES, DEFAULT_LATE_GRACE_MINUTES, LATE_EARLY_PER_ABSENCE


@dataclass(frozen=True)
class ClassificationRules:
    """Grace windows applied when classifying a log against a class schedule.

    The margins absorb scanner clock skew and the walk between door and room.
    """

    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    early_leave_margin_minutes: int = DEFAULT_EARLY_LEAVE_MARGIN_MINUTES
    incidents_per_absence: int = LATE_EARLY_PER_ABSENCE
