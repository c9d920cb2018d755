from __future__ import annotations

from datetime import date
from typing import Protocol


class CourseCalendarRepository(Protocol):
    def is_work_day(self, course_id: int, training_date: date) -> bool:
        """True when ``training_date`` is a scheduled training day of the course."""

        raise NotImplementedError
