from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_TRAINING_END_TIME, DEFAULT_TRAINING_START_TIME
from ..core.enums import AttendanceStatus
from .clock_time import ClockTime


@dataclass(frozen=True)
class TrainingHours:
    """Reference boundaries of a training day (from configuration)."""

    start: ClockTime
    end: ClockTime

    @classmethod
    def from_config(cls, start: str = DEFAULT_TRAINING_START_TIME, end: str = DEFAULT_TRAINING_END_TIME) -> "TrainingHours":
        hours = cls(start=ClockTime.parse(start), end=ClockTime.parse(end))
        if not hours.start.is_set or not hours.end.is_set:
            raise ValueError("training hours must define both start and end")
        return hours


class AttendanceStatusClassifier:
    """Decide late / leave-early status from punched times.

    Late-ness depends only on the start time and leave-early-ness only on the end
    time, so the two flags are evaluated independently and then combined.
    """

    def __init__(self, hours: TrainingHours):
        self._hours = hours

    @property
    def hours(self) -> TrainingHours:
        return self._hours

    def is_late(self, start: ClockTime) -> bool:
        return start > self._hours.start

    def is_leave_early(self, end: ClockTime) -> bool:
        return end < self._hours.end

    def classify(self, start: Optional[ClockTime], end: Optional[ClockTime]) -> AttendanceStatus:
        has_start = start is not None and start.is_set
        has_end = end is not None and end.is_set
        if not has_start and not has_end:
            raise ValueError("cannot classify a day without punch times")

        late = has_start and self.is_late(start)
        leave_early = has_end and self.is_leave_early(end)
        return AttendanceStatus.from_flags(late=late, leave_early=leave_early)
