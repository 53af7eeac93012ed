"""Gregorian to Chinese lunisolar calendar conversion.

The lunisolar calendar cannot be derived arithmetically from the Gregorian
one; month lengths and leap months come from the astronomical table embedded
in :mod:`zhdate`. Only the years in ``SUPPORTED_YEARS`` are converted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

from zhdate import ZhDate

from .config import SUPPORTED_YEARS

logger = logging.getLogger(__name__)

LUNAR_MONTH_NAMES = [
    "正月", "二月", "三月", "四月", "五月", "六月",
    "七月", "八月", "九月", "十月", "冬月", "腊月",
]
LUNAR_DAY_NAMES = [
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
]
LEAP_PREFIX = "闰"


class LunisolarRangeError(ValueError):
    """Raised when a date lies outside the supported lunisolar table."""


@dataclass(frozen=True, slots=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap: bool = False

    @property
    def month_name(self) -> str:
        name = LUNAR_MONTH_NAMES[self.month - 1]
        return f"{LEAP_PREFIX}{name}" if self.is_leap else name

    @property
    def day_name(self) -> str:
        return LUNAR_DAY_NAMES[self.day - 1]

    @property
    def short_label(self) -> str:
        return self.month_name if self.day == 1 else self.day_name

    @property
    def full_label(self) -> str:
        return f"{self.month_name}{self.day_name}"


def is_supported(day: date) -> bool:
    return SUPPORTED_YEARS[0] <= day.year <= SUPPORTED_YEARS[1]


def to_lunar(day: date) -> LunarDate:
    if not is_supported(day):
        raise LunisolarRangeError(
            f"{day.isoformat()} is outside the supported years {SUPPORTED_YEARS[0]}-{SUPPORTED_YEARS[1]}"
        )
    try:
        converted = ZhDate.from_datetime(datetime.combine(day, time()))
    except (IndexError, TypeError, ValueError) as exc:
        raise LunisolarRangeError(f"Unable to convert {day.isoformat()} to the lunisolar calendar") from exc
    return LunarDate(
        year=converted.lunar_year,
        month=converted.lunar_month,
        day=converted.lunar_day,
        is_leap=bool(converted.leap_month),
    )


def lunar_date(day: date) -> Optional[LunarDate]:
    try:
        return to_lunar(day)
    except LunisolarRangeError:
        logger.debug("No lunisolar date for %s", day.isoformat())
        return None


def lunisolar_label(day: date) -> Tuple[Optional[str], Optional[str]]:
    """Return the ``(short, full)`` lunar labels, or ``(None, None)`` out of range."""

    converted = lunar_date(day)
    if converted is None:
        return None, None
    return converted.short_label, converted.full_label


__all__ = [
    "LEAP_PREFIX",
    "LUNAR_DAY_NAMES",
    "LUNAR_MONTH_NAMES",
    "LunarDate",
    "LunisolarRangeError",
    "is_supported",
    "lunar_date",
    "lunisolar_label",
    "to_lunar",
]
