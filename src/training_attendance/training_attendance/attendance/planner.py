from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.messages import MessageCatalog
from ..core.enums import AttendanceStatus
from .blank_time import normalize_blank_time
from .classifier import AttendanceStatusClassifier
from .clock_time import ClockTime
from .model import DailyAttendanceRecord, DailyEditRow


@dataclass(frozen=True)
class PlannedRecord:
    """A record ready to be written, with the id of the stored record it replaces."""

    record: DailyAttendanceRecord
    matched_existing_id: Optional[int] = None

    @property
    def is_insert(self) -> bool:
        return self.matched_existing_id is None


class AttendanceUpsertPlanner:
    """Match submitted edit rows to stored records by training date.

    A row whose date already has a record becomes an update of that record (its
    id and creation audit fields are kept); any other row becomes an insert.
    """

    def __init__(self, classifier: AttendanceStatusClassifier, messages: MessageCatalog):
        self._classifier = classifier
        self._messages = messages

    def is_marked_absent(self, row: DailyEditRow) -> bool:
        if row.status is not None and row.status == AttendanceStatus.ABSENT.code:
            return True
        absent_label = self._messages.lookup(AttendanceStatus.ABSENT.message_key)
        return bool(row.status_disp_name) and row.status_disp_name == absent_label

    def plan(
        self,
        *,
        student_id: int,
        actor_id: int,
        account_id: Optional[int],
        existing: Sequence[DailyAttendanceRecord],
        rows: Sequence[DailyEditRow],
        now: datetime,
    ) -> list[PlannedRecord]:
        existing_by_date: dict[date, DailyAttendanceRecord] = {}
        for rec in existing:
            existing_by_date.setdefault(rec.training_date, rec)

        planned: dict[date, PlannedRecord] = {}
        for row in rows:
            training_date = parse_iso_date(row.training_date)
            matched = existing_by_date.get(training_date)
            base = matched or DailyAttendanceRecord(
                attendance_id=None,
                student_id=int(student_id),
                training_date=training_date,
                status=self._initial_status(row),
            )

            start = ClockTime.from_fields(row.training_start_time_hour, row.training_start_time_minute)
            end = ClockTime.from_fields(row.training_end_time_hour, row.training_end_time_minute)

            status = base.status
            if (start.is_set or end.is_set) and not self.is_marked_absent(row):
                status = self._classifier.classify(start, end)

            record = replace(
                base,
                student_id=int(student_id),
                account_id=account_id,
                training_start_time=start.format(),
                training_end_time=end.format(),
                blank_time=normalize_blank_time(row.blank_time),
                status=status,
                note=row.note or "",
                is_deleted=False,
                updated_by=int(actor_id),
                updated_at=now,
            )
            # Same date submitted twice: the later row wins.
            planned[training_date] = PlannedRecord(
                record=record,
                matched_existing_id=matched.attendance_id if matched else None,
            )

        return list(planned.values())

    @staticmethod
    def _initial_status(row: DailyEditRow) -> AttendanceStatus:
        if row.status is None:
            return AttendanceStatus.NORMAL
        return AttendanceStatus.from_code(row.status)
