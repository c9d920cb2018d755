from src.training_attendance.training_attendance.attendance.blank_time import (
    blank_time_fits,
    blank_time_in_range,
    blank_time_label,
    blank_time_options,
    calc_blank_time,
    hour_options,
    minute_options,
)
from src.training_attendance.training_attendance.common.messages import MessageCatalog


def test_calc_blank_time_renders_hours_and_minutes():
    assert str(calc_blank_time(90)) == "01:30"
    assert str(calc_blank_time(45)) == "00:45"
    assert str(calc_blank_time(0)) == "00:00"


def test_labels(messages):
    assert blank_time_label(15, messages) == "15 min"
    assert blank_time_label(60, messages) == "1 h"
    assert blank_time_label(75, messages) == "1 h 15 min"
    assert blank_time_label(75, MessageCatalog("ja")) == "1時間15分"


def test_menus(messages):
    options = blank_time_options(messages)
    assert list(options)[:3] == [15, 30, 45]
    assert max(options) == 480
    assert list(hour_options()) == list(range(24))
    assert minute_options()[5] == "05"
    assert len(minute_options()) == 60


def test_blank_time_may_equal_but_not_exceed_span():
    assert blank_time_fits(1, 1)
    assert blank_time_fits(None, 0)
    assert blank_time_fits(300, 480)
    assert not blank_time_fits(600, 480)


def test_blank_time_in_range_covers_what_can_be_rendered():
    assert blank_time_in_range(None)
    assert blank_time_in_range(0)
    assert blank_time_in_range(23 * 60 + 59)
    assert not blank_time_in_range(24 * 60)
    assert not blank_time_in_range(-15)
