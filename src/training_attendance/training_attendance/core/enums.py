from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Actor role used for permission checks."""

    STUDENT = "student"
    ADMIN = "admin"


class AttendanceStatus(Enum):
    """Late / leave-early classification stored per training day.

    Each member carries the integer code persisted in the database and the
    message key of its display name.
    """

    NORMAL = (0, "attendance.status.normal")
    LATE = (1, "attendance.status.late")
    LEAVE_EARLY = (2, "attendance.status.leave_early")
    LATE_AND_LEAVE_EARLY = (3, "attendance.status.late_and_leave_early")
    ABSENT = (4, "attendance.status.absent")

    def __init__(self, code: int, message_key: str):
        self.code = code
        self.message_key = message_key

    @classmethod
    def from_code(cls, code: int) -> "AttendanceStatus":
        for status in cls:
            if status.code == int(code):
                return status
        raise ValueError(f"Unknown attendance status code: {code!r}")

    @classmethod
    def from_flags(cls, *, late: bool, leave_early: bool) -> "AttendanceStatus":
        if late and leave_early:
            return cls.LATE_AND_LEAVE_EARLY
        if late:
            return cls.LATE
        if leave_early:
            return cls.LEAVE_EARLY
        return cls.NORMAL

    @property
    def is_late(self) -> bool:
        return self in (AttendanceStatus.LATE, AttendanceStatus.LATE_AND_LEAVE_EARLY)

    @property
    def is_leave_early(self) -> bool:
        return self in (AttendanceStatus.LEAVE_EARLY, AttendanceStatus.LATE_AND_LEAVE_EARLY)


class PunchType(str, Enum):
    """Single-button punch actions."""

    PUNCH_IN = "punch_in"
    PUNCH_OUT = "punch_out"


class PunchState(str, Enum):
    """Punch progress of one student on one training day."""

    NO_PUNCH = "NO_PUNCH"
    PUNCHED_IN = "PUNCHED_IN"
    PUNCHED_OUT = "PUNCHED_OUT"

    @classmethod
    def of(cls, start_time: Optional[str], end_time: Optional[str]) -> "PunchState":
        if not start_time:
            return cls.NO_PUNCH
        if not end_time:
            return cls.PUNCHED_IN
        return cls.PUNCHED_OUT
