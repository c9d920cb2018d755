from __future__ import annotations

import pytest

from src.training_attendance.training_attendance.attendance.model import AttendanceEditForm, DailyEditRow
from src.training_attendance.training_attendance.attendance.validator import AttendanceFormValidator


def row(training_date="2026-02-02", *, start=(None, None), end=(None, None), blank_time=None, note=None):
    return DailyEditRow(
        training_date=training_date,
        training_start_time_hour=start[0],
        training_start_time_minute=start[1],
        training_end_time_hour=end[0],
        training_end_time_minute=end[1],
        blank_time=blank_time,
        note=note,
    )


@pytest.fixture
def validator(messages):
    return AttendanceFormValidator(messages)


def test_untouched_row_is_skipped(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(note=""), row(blank_time=600)]))
    assert not result.has_errors


def test_hour_without_minute_flags_only_missing_minute(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(start=(9, None), note="")]))

    assert result.fields() == ["attendance_list[0].training_start_time_minute"]
    assert result.errors[0].message == "Punch-in time is not entered correctly."


def test_minute_without_hour_on_end_time(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(start=(9, 0), end=(None, 30))]))
    assert result.fields() == ["attendance_list[0].training_end_time_hour"]


def test_note_longer_than_limit(validator):
    ok = row(note="x" * 100)
    too_long = row(note="x" * 101)

    result = validator.validate(AttendanceEditForm(attendance_list=[ok, too_long]))

    assert result.fields() == ["attendance_list[1].note"]
    assert result.errors[0].message == "Note must be at most 100 characters."


def test_end_without_start_flags_both_start_fields(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(end=(18, 0))]))

    assert result.fields() == [
        "attendance_list[0].training_start_time_hour",
        "attendance_list[0].training_start_time_minute",
    ]


def test_equal_start_and_end_is_a_range_error(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(start=(9, 0), end=(9, 0))]))

    assert result.fields() == [
        "attendance_list[0].training_end_time_hour",
        "attendance_list[0].training_end_time_minute",
    ]


def test_one_minute_span_with_one_minute_break_is_valid(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(start=(9, 0), end=(9, 1), blank_time=1)]))
    assert not result.has_errors


def test_break_longer_than_span(validator):
    too_long = row(start=(9, 0), end=(17, 0), blank_time=600)
    fine = row("2026-02-03", start=(9, 0), end=(17, 0), blank_time=300)

    result = validator.validate(AttendanceEditForm(attendance_list=[too_long, fine]))

    assert result.fields() == ["attendance_list[0].blank_time"]


def test_errors_accumulate_instead_of_short_circuiting(validator):
    bad = row(start=(10, 0), end=(9, 0), blank_time=30, note="n" * 150)

    result = validator.validate(AttendanceEditForm(attendance_list=[bad]))

    assert sorted(result.fields()) == [
        "attendance_list[0].blank_time",
        "attendance_list[0].note",
        "attendance_list[0].training_end_time_hour",
        "attendance_list[0].training_end_time_minute",
    ]


def test_out_of_range_hour_is_invalid_input(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(start=(25, 0))]))
    assert "attendance_list[0].training_start_time_hour" in result.fields()


def test_row_errors_do_not_depend_on_submission_order(validator):
    a = row("2026-02-02", start=(9, None))
    b = row("2026-02-03", start=(9, 0), end=(8, 0))

    forward = validator.validate(AttendanceEditForm(attendance_list=[a, b]))
    backward = validator.validate(AttendanceEditForm(attendance_list=[b, a]))

    def strip(errors):
        return sorted((e.field.split(".", 1)[1], e.message) for e in errors)

    assert strip(forward.for_row(0)) == strip(backward.for_row(1))
    assert strip(forward.for_row(1)) == strip(backward.for_row(0))


def test_menus_are_reloaded_after_validation(validator):
    form = AttendanceEditForm(attendance_list=[row(start=(9, None))])

    validator.validate(form)

    assert form.blank_times and form.hour_map and form.minute_map


def test_break_time_that_cannot_be_shown_is_rejected_even_without_punches(validator):
    note_only = row(note="doctor", blank_time=5000)
    untouched = row("2026-02-03", blank_time=24 * 60)

    result = validator.validate(AttendanceEditForm(attendance_list=[note_only, untouched]))

    assert result.fields() == ["attendance_list[0].blank_time", "attendance_list[1].blank_time"]
    assert result.errors[0].message == "Break time is not entered correctly."


def test_negative_break_time_is_rejected(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(start=(9, 0), end=(18, 0), blank_time=-30)]))
    assert result.fields() == ["attendance_list[0].blank_time"]


def test_break_time_too_large_is_reported_once(validator):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(start=(9, 0), end=(18, 0), blank_time=5000)]))
    assert result.fields() == ["attendance_list[0].blank_time"]


@pytest.mark.parametrize("training_date", ["2026/02/03", "", "next monday"])
def test_unreadable_training_date(validator, training_date):
    result = validator.validate(AttendanceEditForm(attendance_list=[row(training_date, start=(9, 0))]))

    assert result.fields() == ["attendance_list[0].training_date"]
    assert result.errors[0].message == "Training date is not entered correctly."


def test_unknown_status_code(validator):
    bad = DailyEditRow(training_date="2026-02-03", status=99)
    known = DailyEditRow(training_date="2026-02-04", status=4)

    result = validator.validate(AttendanceEditForm(attendance_list=[bad, known]))

    assert result.fields() == ["attendance_list[0].status"]
