"""Break ("blank") time accounting.

Break time is stored as a count of minutes picked from a fixed menu. These helpers
build that menu (and the hour/minute menus of the edit form), render a stored
value for display and check it against the punched span.
"""

from __future__ import annotations

from typing import Optional

from ..common.messages import (
    KEY_BLANK_TIME_HOURS,
    KEY_BLANK_TIME_HOURS_MINUTES,
    KEY_BLANK_TIME_MINUTES,
    MessageCatalog,
)
from ..core.constants import BLANK_TIME_MAX_MINUTES, BLANK_TIME_STEP_MINUTES, HOURS_PER_DAY, MINUTES_PER_HOUR
from .clock_time import ClockTime


def calc_blank_time(minutes: int) -> ClockTime:
    """Render a stored break duration as ``HH:MM``-shaped hours and minutes."""
    minutes = int(minutes)
    if minutes < 0:
        raise ValueError(f"break time cannot be negative: {minutes}")
    return ClockTime.of(minutes // MINUTES_PER_HOUR, minutes % MINUTES_PER_HOUR)


def blank_time_label(minutes: int, messages: MessageCatalog) -> str:
    hours, rest = divmod(int(minutes), MINUTES_PER_HOUR)
    if hours and rest:
        return messages.lookup(KEY_BLANK_TIME_HOURS_MINUTES, [hours, rest])
    if hours:
        return messages.lookup(KEY_BLANK_TIME_HOURS, [hours])
    return messages.lookup(KEY_BLANK_TIME_MINUTES, [rest])


def blank_time_options(messages: MessageCatalog) -> dict[int, str]:
    """Selectable break durations (minutes -> label)."""
    return {
        minutes: blank_time_label(minutes, messages)
        for minutes in range(BLANK_TIME_STEP_MINUTES, BLANK_TIME_MAX_MINUTES + 1, BLANK_TIME_STEP_MINUTES)
    }


def hour_options() -> dict[int, str]:
    return {h: f"{h:02d}" for h in range(HOURS_PER_DAY)}


def minute_options() -> dict[int, str]:
    return {m: f"{m:02d}" for m in range(MINUTES_PER_HOUR)}


def normalize_blank_time(value: Optional[int]) -> int:
    """``None`` means no break."""
    return int(value) if value is not None else 0


def blank_time_in_range(value: Optional[int]) -> bool:
    """Whether a break duration can be stored and rendered as ``HH:MM`` at all."""
    return value is None or 0 <= int(value) < HOURS_PER_DAY * MINUTES_PER_HOUR


def blank_time_fits(blank_time: Optional[int], elapsed_minutes: int) -> bool:
    """Break must not exceed the punched span; equal is allowed."""
    return normalize_blank_time(blank_time) <= elapsed_minutes


def load_form_menus(form, messages: MessageCatalog) -> None:
    """(Re)populate the break-time, hour and minute menus of an edit form."""
    form.blank_times = blank_time_options(messages)
    form.hour_map = hour_options()
    form.minute_map = minute_options()
