"""User-facing text lookup.

All strings shown to students go through ``MessageCatalog.lookup`` so that the
service layer only deals with opaque message keys.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

KEY_AUTHORIZATION = "errors.authorization"
KEY_NOT_WORK_DAY = "errors.attendance.not_work_day"
KEY_PUNCH_ALREADY_EXISTS = "errors.attendance.punch_already_exists"
KEY_PUNCH_IN_EMPTY = "errors.attendance.punch_in_empty"
KEY_TRAINING_TIME_RANGE = "errors.attendance.training_time_range"
KEY_BLANK_TIME_ERROR = "errors.attendance.blank_time_exceeded"
KEY_MAX_LENGTH = "errors.max_length"
KEY_INPUT_INVALID = "errors.input_invalid"
KEY_STUDENT_REQUIRED = "errors.attendance.student_required"
KEY_COURSE_REQUIRED = "errors.attendance.course_required"
KEY_UPDATE_NOTICE = "messages.attendance.update_notice"
KEY_LABEL_START_TIME = "labels.training_start_time"
KEY_LABEL_END_TIME = "labels.training_end_time"
KEY_LABEL_NOTE = "labels.note"
KEY_LABEL_BLANK_TIME = "labels.blank_time"
KEY_LABEL_TRAINING_DATE = "labels.training_date"
KEY_LABEL_STATUS = "labels.status"
KEY_BLANK_TIME_HOURS = "labels.blank_time.hours"
KEY_BLANK_TIME_MINUTES = "labels.blank_time.minutes"
KEY_BLANK_TIME_HOURS_MINUTES = "labels.blank_time.hours_minutes"

_EN = {
    KEY_AUTHORIZATION: "You are not allowed to perform this operation.",
    KEY_NOT_WORK_DAY: "Today is not a training day.",
    KEY_PUNCH_ALREADY_EXISTS: "Today's attendance has already been entered. Please edit it directly.",
    KEY_PUNCH_IN_EMPTY: "{0} cannot be entered because there is no punch-in time.",
    KEY_TRAINING_TIME_RANGE: "The punch-out time must be after the punch-in time.",
    KEY_BLANK_TIME_ERROR: "The break time must not exceed the time between punch-in and punch-out.",
    KEY_MAX_LENGTH: "{0} must be at most {1} characters.",
    KEY_INPUT_INVALID: "{0} is not entered correctly.",
    KEY_STUDENT_REQUIRED: "Please select the student whose attendance is edited.",
    KEY_COURSE_REQUIRED: "No training course is assigned to this account.",
    KEY_UPDATE_NOTICE: "Attendance has been updated.",
    KEY_LABEL_START_TIME: "Punch-in time",
    KEY_LABEL_END_TIME: "Punch-out time",
    KEY_LABEL_NOTE: "Note",
    KEY_LABEL_BLANK_TIME: "Break time",
    KEY_LABEL_TRAINING_DATE: "Training date",
    KEY_LABEL_STATUS: "Attendance status",
    KEY_BLANK_TIME_HOURS: "{0} h",
    KEY_BLANK_TIME_MINUTES: "{0} min",
    KEY_BLANK_TIME_HOURS_MINUTES: "{0} h {1} min",
    "attendance.status.normal": "",
    "attendance.status.late": "Late",
    "attendance.status.leave_early": "Left early",
    "attendance.status.late_and_leave_early": "Late / Left early",
    "attendance.status.absent": "Absent",
}

_JA = {
    KEY_AUTHORIZATION: "この操作を行う権限がありません。",
    KEY_NOT_WORK_DAY: "本日は研修日ではありません。",
    KEY_PUNCH_ALREADY_EXISTS: "本日の勤怠情報は既に入力されています。直接編集してください。",
    KEY_PUNCH_IN_EMPTY: "出勤情報がないため{0}を入力出来ません。",
    KEY_TRAINING_TIME_RANGE: "退勤時刻は出勤時刻より後でなければいけません。",
    KEY_BLANK_TIME_ERROR: "中抜け時間が勤務時間を超えています。",
    KEY_MAX_LENGTH: "{0}は{1}文字以内で入力してください。",
    KEY_INPUT_INVALID: "{0}が正しく入力されていません。",
    KEY_STUDENT_REQUIRED: "編集対象の受講生を選択してください。",
    KEY_COURSE_REQUIRED: "受講コースが登録されていません。",
    KEY_UPDATE_NOTICE: "勤怠情報の登録が完了しました。",
    KEY_LABEL_START_TIME: "出勤時間",
    KEY_LABEL_END_TIME: "退勤時間",
    KEY_LABEL_NOTE: "備考",
    KEY_LABEL_BLANK_TIME: "中抜け時間",
    KEY_LABEL_TRAINING_DATE: "研修日",
    KEY_LABEL_STATUS: "勤怠状況",
    KEY_BLANK_TIME_HOURS: "{0}時間",
    KEY_BLANK_TIME_MINUTES: "{0}分",
    KEY_BLANK_TIME_HOURS_MINUTES: "{0}時間{1}分",
    "attendance.status.normal": "",
    "attendance.status.late": "遅刻",
    "attendance.status.leave_early": "早退",
    "attendance.status.late_and_leave_early": "遅刻／早退",
    "attendance.status.absent": "欠席",
}

CATALOGS: dict[str, Mapping[str, str]] = {"en": _EN, "ja": _JA}


class MessageCatalog:
    def __init__(self, locale: str = "en", *, catalogs: Optional[Mapping[str, Mapping[str, str]]] = None):
        catalogs = catalogs or CATALOGS
        if locale not in catalogs:
            raise ValueError(f"Unsupported message locale: {locale!r}")
        self._locale = locale
        self._messages = catalogs[locale]

    @property
    def locale(self) -> str:
        return self._locale

    def lookup(self, key: str, params: Optional[Sequence[object]] = None) -> str:
        template = self._messages.get(key)
        if template is None:
            # Show the key itself so a missing translation is visible on screen.
            logger.warning("Missing message key %r for locale %r", key, self._locale)
            return key
        if params:
            return template.format(*params)
        return template
