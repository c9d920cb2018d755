from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..auth.context import ActorContext
from ..common.datetime_utils import format_display_date, format_iso_date, now_local
from ..common.messages import (
    KEY_AUTHORIZATION,
    KEY_COURSE_REQUIRED,
    KEY_NOT_WORK_DAY,
    KEY_PUNCH_ALREADY_EXISTS,
    KEY_PUNCH_IN_EMPTY,
    KEY_LABEL_END_TIME,
    KEY_STUDENT_REQUIRED,
    KEY_TRAINING_TIME_RANGE,
    KEY_UPDATE_NOTICE,
    MessageCatalog,
)
from ..core.enums import PunchState, PunchType
from ..core.exceptions import AuthorizationError, FormValidationError, ValidationError
from ..courses.repository import CourseCalendarRepository
from .blank_time import calc_blank_time, load_form_menus
from .classifier import AttendanceStatusClassifier
from .clock_time import ClockTime
from .model import AttendanceEditForm, AttendanceManagementRow, DailyAttendanceRecord, DailyEditRow
from .planner import AttendanceUpsertPlanner
from .repository import AttendanceRepository
from .validator import AttendanceFormValidator, ValidationResult

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        calendar: CourseCalendarRepository,
        messages: MessageCatalog,
        classifier: AttendanceStatusClassifier,
        *,
        validator: AttendanceFormValidator | None = None,
        planner: AttendanceUpsertPlanner | None = None,
    ):
        self._attendance = attendance
        self._calendar = calendar
        self._messages = messages
        self._classifier = classifier
        self._validator = validator or AttendanceFormValidator(messages)
        self._planner = planner or AttendanceUpsertPlanner(classifier, messages)

    # ----- listing -----

    def get_attendance_management(
        self,
        *,
        course_id: int | None,
        student_id: int,
        today: date | None = None,
    ) -> list[AttendanceManagementRow]:
        if course_id is None:
            raise ValidationError(self._messages.lookup(KEY_COURSE_REQUIRED))
        today = today or now_local().date()
        rows = self._attendance.get_attendance_management(course_id=course_id, student_id=student_id, today=today)
        return [self._decorate(r) for r in rows]

    def _decorate(self, row: AttendanceManagementRow) -> AttendanceManagementRow:
        blank_time_value = str(calc_blank_time(row.blank_time)) if row.blank_time is not None else ""
        return replace(
            row,
            blank_time_value=blank_time_value,
            status_disp_name=self._messages.lookup(row.status.message_key),
        )

    def has_unfilled_past(self, student_id: int, *, today: date | None = None) -> bool:
        """Whether any training day before today still lacks a punch-in or punch-out."""
        today = today or now_local().date()
        return self._attendance.count_unfilled_past(student_id, today) > 0

    # ----- punch buttons -----

    def punch_check(self, actor: ActorContext, punch_type: PunchType, *, now: datetime | None = None) -> Optional[str]:
        """Return the message of the first failed precondition, or None when the punch may proceed."""
        now = now or now_local()
        training_date = now.date()

        if not actor.is_student:
            return self._messages.lookup(KEY_AUTHORIZATION)
        if actor.course_id is None or not self._calendar.is_work_day(actor.course_id, training_date):
            return self._messages.lookup(KEY_NOT_WORK_DAY)

        record = self._attendance.get_for_student_and_date(actor.user_id, training_date)
        state = record.punch_state if record else PunchState.NO_PUNCH

        if punch_type == PunchType.PUNCH_IN:
            if state != PunchState.NO_PUNCH:
                return self._messages.lookup(KEY_PUNCH_ALREADY_EXISTS)
            return None

        if state == PunchState.NO_PUNCH:
            return self._messages.lookup(KEY_PUNCH_IN_EMPTY, [self._messages.lookup(KEY_LABEL_END_TIME)])
        if state == PunchState.PUNCHED_OUT:
            return self._messages.lookup(KEY_PUNCH_ALREADY_EXISTS)
        if ClockTime.parse(record.training_start_time) > ClockTime.now(now):
            return self._messages.lookup(KEY_TRAINING_TIME_RANGE)
        return None

    def punch_in(self, actor: ActorContext, *, now: datetime | None = None) -> str:
        now = now or now_local()
        error = self.punch_check(actor, PunchType.PUNCH_IN, now=now)
        if error:
            logger.debug("Punch-in rejected for student %s: %s", actor.user_id, error)
            raise ValidationError(error)

        training_date = now.date()
        start = ClockTime.now(now)
        status = self._classifier.classify(start, None)

        record = self._attendance.get_for_student_and_date(actor.user_id, training_date)
        if record is None:
            self._attendance.insert(
                DailyAttendanceRecord(
                    attendance_id=None,
                    student_id=actor.user_id,
                    training_date=training_date,
                    training_start_time=start.format(),
                    training_end_time="",
                    blank_time=None,
                    status=status,
                    note="",
                    account_id=actor.account_id,
                    created_by=actor.user_id,
                    created_at=now,
                    updated_by=actor.user_id,
                    updated_at=now,
                )
            )
        else:
            self._attendance.update(
                replace(
                    record,
                    training_start_time=start.format(),
                    status=status,
                    is_deleted=False,
                    updated_by=actor.user_id,
                    updated_at=now,
                )
            )

        logger.info("Student %s punched in at %s on %s (%s)", actor.user_id, start, training_date, status.name)
        return self._messages.lookup(KEY_UPDATE_NOTICE)

    def punch_out(self, actor: ActorContext, *, now: datetime | None = None) -> str:
        now = now or now_local()
        error = self.punch_check(actor, PunchType.PUNCH_OUT, now=now)
        if error:
            logger.debug("Punch-out rejected for student %s: %s", actor.user_id, error)
            raise ValidationError(error)

        training_date = now.date()
        record = self._attendance.get_for_student_and_date(actor.user_id, training_date)
        start = ClockTime.parse(record.training_start_time)
        end = ClockTime.now(now)
        status = self._classifier.classify(start, end)

        self._attendance.update(
            replace(
                record,
                training_end_time=end.format(),
                status=status,
                is_deleted=False,
                updated_by=actor.user_id,
                updated_at=now,
            )
        )

        logger.info("Student %s punched out at %s on %s (%s)", actor.user_id, end, training_date, status.name)
        return self._messages.lookup(KEY_UPDATE_NOTICE)

    # ----- batch edit -----

    def build_edit_form(self, actor: ActorContext, rows: Sequence[AttendanceManagementRow]) -> AttendanceEditForm:
        form = AttendanceEditForm(
            student_id=actor.user_id,
            user_name=actor.user_name,
            leave_flg=actor.has_left,
        )
        load_form_menus(form, self._messages)

        if actor.leave_date is not None:
            form.leave_date = format_iso_date(actor.leave_date)
            form.disp_leave_date = format_display_date(actor.leave_date)

        for r in rows:
            start = ClockTime.parse(r.training_start_time)
            end = ClockTime.parse(r.training_end_time)
            form.attendance_list.append(
                DailyEditRow(
                    training_date=format_iso_date(r.training_date),
                    attendance_id=r.attendance_id,
                    training_start_time_hour=start.hour,
                    training_start_time_minute=start.minute,
                    training_end_time_hour=end.hour,
                    training_end_time_minute=end.minute,
                    blank_time=r.blank_time,
                    blank_time_value=str(calc_blank_time(r.blank_time)) if r.blank_time is not None else "",
                    status=r.status.code,
                    note=r.note,
                    section_name=r.section_name,
                    is_today=r.is_today,
                    disp_training_date=format_display_date(r.training_date, with_weekday=True),
                    status_disp_name=r.status_disp_name or self._messages.lookup(r.status.message_key),
                )
            )
        return form

    def validate(self, form: AttendanceEditForm) -> ValidationResult:
        return self._validator.validate(form)

    def update(self, actor: ActorContext, form: AttendanceEditForm, *, now: datetime | None = None) -> str:
        now = now or now_local()

        result = self._validator.validate(form)
        if result.has_errors:
            raise FormValidationError(result)

        if actor.is_student:
            student_id = actor.user_id
        elif form.student_id is not None:
            student_id = int(form.student_id)
        else:
            raise AuthorizationError(self._messages.lookup(KEY_STUDENT_REQUIRED))

        existing = self._attendance.list_active_for_student(student_id)
        planned = self._planner.plan(
            student_id=student_id,
            actor_id=actor.user_id,
            account_id=actor.account_id,
            existing=existing,
            rows=form.attendance_list,
            now=now,
        )

        inserted = updated = 0
        for p in planned:
            if p.is_insert:
                self._attendance.insert(replace(p.record, created_by=actor.user_id, created_at=now))
                inserted += 1
            else:
                self._attendance.update(p.record)
                updated += 1

        logger.info(
            "Attendance of student %s saved by %s: %d inserted, %d updated",
            student_id,
            actor.user_id,
            inserted,
            updated,
        )
        return self._messages.lookup(KEY_UPDATE_NOTICE)
