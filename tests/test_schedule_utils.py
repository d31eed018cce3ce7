from datetime import date, datetime

import pytest

from leisure_pricing.utils.money import round_money, to_minor_units
from leisure_pricing.utils.schedule import (
    describe_days,
    normalize_time,
    parse_booking_date,
    sunday_based_weekday,
    time_to_minutes,
)


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2025, 6, 15)) == 0  # Sunday
    assert sunday_based_weekday(date(2025, 6, 16)) == 1  # Monday
    assert sunday_based_weekday(datetime(2025, 6, 21, 23, 59)) == 6  # Saturday


def test_normalize_time_pads_and_adds_seconds():
    assert normalize_time("9:05") == "09:05:00"
    assert normalize_time("18:30:15") == "18:30:15"


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "12", "1:2:3:4"])
def test_invalid_times_raise(value):
    with pytest.raises(ValueError):
        normalize_time(value)


def test_time_to_minutes_ignores_seconds():
    assert time_to_minutes("20:00:59") == 1200


def test_parse_booking_date():
    assert parse_booking_date("2025-06-18") == date(2025, 6, 18)
    assert parse_booking_date(datetime(2025, 6, 18, 9, 0)) == date(2025, 6, 18)
    assert parse_booking_date("") is None
    assert parse_booking_date(None) is None


def test_describe_days():
    assert describe_days([1, 3]) == "Monday, Wednesday"


def test_money_helpers():
    assert round_money(20.0799) == 20.08
    assert to_minor_units(19.99) == 1999
