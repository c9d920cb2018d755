from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..common.datetime_utils import parse_iso_date
from ..common.messages import (
    KEY_BLANK_TIME_ERROR,
    KEY_INPUT_INVALID,
    KEY_LABEL_BLANK_TIME,
    KEY_LABEL_END_TIME,
    KEY_LABEL_NOTE,
    KEY_LABEL_START_TIME,
    KEY_LABEL_STATUS,
    KEY_LABEL_TRAINING_DATE,
    KEY_MAX_LENGTH,
    KEY_PUNCH_IN_EMPTY,
    KEY_TRAINING_TIME_RANGE,
    MessageCatalog,
)
from ..core.constants import HOURS_PER_DAY, MINUTES_PER_HOUR, NOTE_MAX_LENGTH
from ..core.enums import AttendanceStatus
from .blank_time import blank_time_fits, blank_time_in_range, load_form_menus
from .model import AttendanceEditForm, DailyEditRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    """Field-scoped errors collected over a whole batch."""

    errors: list[FieldError] = field(default_factory=list)

    def add(self, index: int, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field=row_field_path(index, field_name), message=message))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def for_row(self, index: int) -> list[FieldError]:
        prefix = f"attendance_list[{index}]."
        return [e for e in self.errors if e.field.startswith(prefix)]

    def as_dict(self) -> dict[str, list[str]]:
        out: dict[str, list[str]] = {}
        for e in self.errors:
            out.setdefault(e.field, []).append(e.message)
        return out


def row_field_path(index: int, field_name: str) -> str:
    return f"attendance_list[{index}].{field_name}"


def _total_minutes(hour: int, minute: int) -> int:
    return int(hour) * MINUTES_PER_HOUR + int(minute)


class AttendanceFormValidator:
    """Validate a batch of daily edit rows before they are committed.

    Rows are independent of each other and every rule runs, so the caller gets
    every problem of every row in one pass.
    """

    def __init__(self, messages: MessageCatalog, *, note_max_length: int = NOTE_MAX_LENGTH):
        self._messages = messages
        self._note_max_length = int(note_max_length)

    def validate(self, form: AttendanceEditForm) -> ValidationResult:
        result = ValidationResult()
        for i, row in enumerate(form.attendance_list):
            # Every row is written back, touched or not.
            self._check_stored_fields(i, row, result)
            if row.is_untouched:
                continue
            self._check_row(i, row, result)

        load_form_menus(form, self._messages)

        if result.has_errors:
            logger.debug("Attendance form rejected with %d field error(s)", len(result.errors))
        return result

    def _check_stored_fields(self, i: int, row: DailyEditRow, result: ValidationResult) -> None:
        msg = self._messages

        try:
            parse_iso_date(row.training_date)
        except (TypeError, ValueError):
            result.add(i, "training_date", msg.lookup(KEY_INPUT_INVALID, [msg.lookup(KEY_LABEL_TRAINING_DATE)]))

        if row.status is not None:
            try:
                AttendanceStatus.from_code(row.status)
            except ValueError:
                result.add(i, "status", msg.lookup(KEY_INPUT_INVALID, [msg.lookup(KEY_LABEL_STATUS)]))

        if not blank_time_in_range(row.blank_time):
            result.add(i, "blank_time", msg.lookup(KEY_INPUT_INVALID, [msg.lookup(KEY_LABEL_BLANK_TIME)]))

    def _check_row(self, i: int, row: DailyEditRow, result: ValidationResult) -> None:
        msg = self._messages

        if row.note is not None and len(row.note) > self._note_max_length:
            result.add(
                i,
                "note",
                msg.lookup(KEY_MAX_LENGTH, [msg.lookup(KEY_LABEL_NOTE), self._note_max_length]),
            )

        self._check_pair(
            i,
            result,
            hour=row.training_start_time_hour,
            minute=row.training_start_time_minute,
            prefix="training_start_time",
            label_key=KEY_LABEL_START_TIME,
        )
        self._check_pair(
            i,
            result,
            hour=row.training_end_time_hour,
            minute=row.training_end_time_minute,
            prefix="training_end_time",
            label_key=KEY_LABEL_END_TIME,
        )

        has_start = row.training_start_time_hour is not None and row.training_start_time_minute is not None
        has_end = row.training_end_time_hour is not None and row.training_end_time_minute is not None

        if not has_start and has_end:
            no_punch_in = msg.lookup(KEY_PUNCH_IN_EMPTY, [msg.lookup(KEY_LABEL_END_TIME)])
            result.add(i, "training_start_time_hour", no_punch_in)
            result.add(i, "training_start_time_minute", no_punch_in)

        if has_start and has_end:
            start_total = _total_minutes(row.training_start_time_hour, row.training_start_time_minute)
            end_total = _total_minutes(row.training_end_time_hour, row.training_end_time_minute)
            elapsed = end_total - start_total

            if elapsed <= 0:
                range_msg = msg.lookup(KEY_TRAINING_TIME_RANGE)
                result.add(i, "training_end_time_hour", range_msg)
                result.add(i, "training_end_time_minute", range_msg)

            if blank_time_in_range(row.blank_time) and not blank_time_fits(row.blank_time, elapsed):
                result.add(i, "blank_time", msg.lookup(KEY_BLANK_TIME_ERROR))

    def _check_pair(self, i: int, result: ValidationResult, *, hour, minute, prefix: str, label_key: str) -> None:
        message = self._messages.lookup(KEY_INPUT_INVALID, [self._messages.lookup(label_key)])
        if hour is not None and minute is not None:
            if not 0 <= int(hour) < HOURS_PER_DAY:
                result.add(i, f"{prefix}_hour", message)
            if not 0 <= int(minute) < MINUTES_PER_HOUR:
                result.add(i, f"{prefix}_minute", message)
            return
        if hour is None and minute is None:
            return
        # Entered alone: flag the missing half.
        if hour is None:
            result.add(i, f"{prefix}_hour", message)
        if minute is None:
            result.add(i, f"{prefix}_minute", message)
