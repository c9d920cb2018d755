"""Time-of-day value with minute precision.

``ClockTime`` is what punch times and hour/minute form fields turn into before
any comparison happens. The empty string stored for "not punched yet" maps to the
distinguished unset value, which formats back to ``""`` and refuses comparison.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from functools import total_ordering
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import HOURS_PER_DAY, MINUTES_PER_HOUR
from ..core.exceptions import TimeFormatError

_HH_MM = re.compile(r"([0-9]{2}):([0-9]{2})")


@total_ordering
@dataclass(frozen=True)
class ClockTime:
    hour: Optional[int] = None
    minute: Optional[int] = None

    def __post_init__(self):
        if (self.hour is None) != (self.minute is None):
            raise TimeFormatError("hour and minute must both be set or both be unset")
        if self.hour is None:
            return
        if not 0 <= self.hour < HOURS_PER_DAY:
            raise TimeFormatError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute < MINUTES_PER_HOUR:
            raise TimeFormatError(f"minute out of range: {self.minute}")

    @classmethod
    def unset(cls) -> "ClockTime":
        return cls()

    @classmethod
    def of(cls, hour: int, minute: int) -> "ClockTime":
        return cls(int(hour), int(minute))

    @classmethod
    def now(cls, now: Optional[datetime] = None) -> "ClockTime":
        """Current wall-clock time truncated to the minute."""
        now = now or now_local()
        return cls(now.hour, now.minute)

    @classmethod
    def parse(cls, value: Optional[str]) -> "ClockTime":
        if value is None or not value.strip():
            return cls.unset()
        m = _HH_MM.fullmatch(value)
        if not m:
            raise TimeFormatError(f"Invalid time (HH:MM): {value!r}")
        return cls(int(m.group(1)), int(m.group(2)))

    @classmethod
    def from_fields(cls, hour: Optional[int], minute: Optional[int]) -> "ClockTime":
        """Build from an edit row's hour/minute pair; a half-filled pair is unset."""
        if hour is None or minute is None:
            return cls.unset()
        return cls.of(hour, minute)

    @property
    def is_set(self) -> bool:
        return self.hour is not None

    @property
    def total_minutes(self) -> int:
        if not self.is_set:
            raise ValueError("an unset ClockTime has no total minutes")
        return self.hour * MINUTES_PER_HOUR + self.minute

    def minutes_until(self, other: "ClockTime") -> int:
        """Elapsed minutes from this time to ``other`` (negative if ``other`` is earlier)."""
        return other.total_minutes - self.total_minutes

    def format(self) -> str:
        if not self.is_set:
            return ""
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.format()

    def __lt__(self, other: "ClockTime") -> bool:
        if not isinstance(other, ClockTime):
            return NotImplemented
        return self.total_minutes < other.total_minutes
