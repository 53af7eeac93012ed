"""Tests for the lunisolar converter and its labels."""

from datetime import date

import pytest

from lantern_calendar.core.lunisolar import (
    LunisolarRangeError,
    lunar_date,
    lunisolar_label,
    to_lunar,
)


def test_new_years_day_2025_is_twelfth_month_second_day():
    converted = to_lunar(date(2025, 1, 1))

    assert (converted.month, converted.day, converted.is_leap) == (12, 2, False)
    assert lunisolar_label(date(2025, 1, 1)) == ("初二", "腊月初二")


def test_first_day_of_month_uses_month_name():
    assert lunisolar_label(date(2025, 1, 29)) == ("正月", "正月初一")
    assert lunisolar_label(date(2026, 2, 17)) == ("正月", "正月初一")


def test_mid_autumn_2025():
    assert lunisolar_label(date(2025, 10, 6)) == ("十五", "八月十五")


def test_leap_month_is_marked():
    converted = to_lunar(date(2025, 7, 25))

    assert converted.is_leap
    assert (converted.month, converted.day) == (6, 1)
    assert lunisolar_label(date(2025, 7, 25)) == ("闰六月", "闰六月初一")


@pytest.mark.parametrize("day", [date(1900, 6, 1), date(2101, 1, 1), date(1, 1, 1)])
def test_out_of_range_is_rejected(day):
    with pytest.raises(LunisolarRangeError):
        to_lunar(day)
    assert lunar_date(day) is None
    assert lunisolar_label(day) == (None, None)
