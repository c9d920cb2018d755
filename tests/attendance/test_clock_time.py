from datetime import datetime

import pytest

from src.training_attendance.training_attendance.attendance.clock_time import ClockTime
from src.training_attendance.training_attendance.core.exceptions import TimeFormatError


@pytest.mark.parametrize("text", ["00:00", "09:05", "12:30", "23:59"])
def test_parse_then_format_returns_same_text(text):
    assert ClockTime.parse(text).format() == text


def test_empty_text_is_unset_not_midnight():
    unset = ClockTime.parse("")

    assert not unset.is_set
    assert unset.format() == ""
    assert unset != ClockTime.of(0, 0)
    assert ClockTime.parse("   ") == unset
    assert ClockTime.parse(None) == unset


@pytest.mark.parametrize("text", ["9:00", "09:0", "0900", "24:00", "12:60", "ab:cd", "09:00 ", "09:00\n"])
def test_malformed_text_raises(text):
    with pytest.raises(TimeFormatError):
        ClockTime.parse(text)


def test_out_of_range_fields_raise():
    with pytest.raises(TimeFormatError):
        ClockTime.of(24, 0)
    with pytest.raises(TimeFormatError):
        ClockTime.of(10, -1)
    with pytest.raises(TimeFormatError):
        ClockTime(9, None)


def test_now_truncates_to_minute():
    t = ClockTime.now(datetime(2026, 2, 2, 17, 45, 59, 999999))
    assert t == ClockTime.of(17, 45)
    assert str(t) == "17:45"


def test_comparison_uses_total_minutes():
    assert ClockTime.of(9, 15) > ClockTime.of(9, 0)
    assert ClockTime.of(8, 59) < ClockTime.of(9, 0)
    assert ClockTime.of(9, 0) <= ClockTime.parse("09:00")
    assert ClockTime.of(9, 0).minutes_until(ClockTime.of(17, 0)) == 480


def test_unset_cannot_be_compared():
    with pytest.raises(ValueError):
        ClockTime.unset() < ClockTime.of(9, 0)
    with pytest.raises(ValueError):
        _ = ClockTime.unset().total_minutes


def test_from_fields_requires_both_halves():
    assert ClockTime.from_fields(9, 30) == ClockTime.of(9, 30)
    assert not ClockTime.from_fields(9, None).is_set
    assert not ClockTime.from_fields(None, None).is_set
