from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, PunchState


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """Domain entity: one student's attendance on one training day.

    Start/end times are ``HH:MM`` strings, ``""`` meaning not punched yet.
    ``attendance_id`` is None until the record has been inserted.
    """

    attendance_id: Optional[int]
    student_id: int
    training_date: date
    training_start_time: str = ""
    training_end_time: str = ""
    blank_time: Optional[int] = None
    status: AttendanceStatus = AttendanceStatus.NORMAL
    note: str = ""
    account_id: Optional[int] = None
    is_deleted: bool = False
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_by: Optional[int] = None
    updated_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        return self.attendance_id is not None

    @property
    def punch_state(self) -> PunchState:
        return PunchState.of(self.training_start_time, self.training_end_time)


@dataclass(frozen=True)
class AttendanceManagementRow:
    """Read-model: one scheduled training day of a course joined with the student's record."""

    training_date: date
    section_name: str
    is_today: bool
    attendance_id: Optional[int] = None
    training_start_time: str = ""
    training_end_time: str = ""
    blank_time: Optional[int] = None
    status: AttendanceStatus = AttendanceStatus.NORMAL
    note: str = ""
    blank_time_value: str = ""
    status_disp_name: str = ""


@dataclass
class DailyEditRow:
    """Edit-session shape of one day (mutable form object)."""

    training_date: str
    attendance_id: Optional[int] = None
    training_start_time_hour: Optional[int] = None
    training_start_time_minute: Optional[int] = None
    training_end_time_hour: Optional[int] = None
    training_end_time_minute: Optional[int] = None
    blank_time: Optional[int] = None
    blank_time_value: str = ""
    status: Optional[int] = None
    note: Optional[str] = None
    # Display-only fields
    section_name: str = ""
    is_today: bool = False
    disp_training_date: str = ""
    status_disp_name: str = ""

    @property
    def is_untouched(self) -> bool:
        return (
            self.training_start_time_hour is None
            and self.training_start_time_minute is None
            and self.training_end_time_hour is None
            and self.training_end_time_minute is None
            and not self.note
        )


@dataclass
class AttendanceEditForm:
    """A week's (or course's) worth of daily edit rows plus the form menus."""

    student_id: Optional[int] = None
    user_name: str = ""
    leave_flg: bool = False
    leave_date: str = ""
    disp_leave_date: str = ""
    attendance_list: list[DailyEditRow] = field(default_factory=list)
    blank_times: dict[int, str] = field(default_factory=dict)
    hour_map: dict[int, str] = field(default_factory=dict)
    minute_map: dict[int, str] = field(default_factory=dict)
