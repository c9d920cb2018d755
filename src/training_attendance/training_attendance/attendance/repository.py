from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceManagementRow, DailyAttendanceRecord


class AttendanceRepository(Protocol):
    """Storage of daily attendance records.

    Every read excludes soft-deleted rows.
    """

    def get_for_student_and_date(self, student_id: int, training_date: date) -> Optional[DailyAttendanceRecord]:
        raise NotImplementedError

    def list_active_for_student(self, student_id: int) -> Sequence[DailyAttendanceRecord]:
        raise NotImplementedError

    def count_unfilled_past(self, student_id: int, before_date: date) -> int:
        """Past records with an empty punch-in or punch-out time."""

        raise NotImplementedError

    def get_attendance_management(
        self,
        *,
        course_id: int,
        student_id: int,
        today: date,
    ) -> Sequence[AttendanceManagementRow]:
        """One row per scheduled training day of the course, joined with the student's record."""

        raise NotImplementedError

    def insert(self, record: DailyAttendanceRecord) -> int:
        raise NotImplementedError

    def update(self, record: DailyAttendanceRecord) -> bool:
        raise NotImplementedError
