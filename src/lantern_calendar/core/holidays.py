from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from .lunisolar import lunar_date

GREGORIAN_HOLIDAYS: Dict[str, str] = {
    "01-01": "元旦",
    "02-14": "情人节",
    "03-08": "妇女节",
    "03-12": "植树节",
    "04-01": "愚人节",
    "05-01": "劳动节",
    "05-04": "青年节",
    "06-01": "儿童节",
    "07-01": "建党节",
    "08-01": "建军节",
    "09-10": "教师节",
    "10-01": "国庆节",
    "12-24": "平安夜",
    "12-25": "圣诞节",
}

LUNAR_HOLIDAYS: Dict[str, str] = {
    "01-01": "春节",
    "01-15": "元宵节",
    "02-02": "龙抬头",
    "05-05": "端午节",
    "07-07": "七夕节",
    "07-15": "中元节",
    "08-15": "中秋节",
    "09-09": "重阳节",
    "12-08": "腊八节",
    "12-23": "小年",
}

LUNAR_NEW_YEARS_EVE = "除夕"


@dataclass(frozen=True, slots=True)
class FloatingHoliday:
    """A holiday on the ``ordinal``-th ``weekday`` (Monday=0) of ``month``."""

    name: str
    month: int
    weekday: int
    ordinal: int

    def matches(self, day: date) -> bool:
        return (
            day.month == self.month
            and day.weekday() == self.weekday
            and (day.day - 1) // 7 + 1 == self.ordinal
        )


FLOATING_HOLIDAYS: Tuple[FloatingHoliday, ...] = (
    FloatingHoliday("母亲节", month=5, weekday=6, ordinal=2),
    FloatingHoliday("父亲节", month=6, weekday=6, ordinal=3),
)


def _is_lunar_new_years_eve(day: date, lunar_month: int, lunar_day: int) -> bool:
    # The twelfth month has 29 or 30 days; the eve is whichever is its last.
    if lunar_month != 12 or lunar_day < 29:
        return False
    try:
        following = lunar_date(day + timedelta(days=1))
    except OverflowError:
        return False
    return following is not None and following.month == 1 and following.day == 1 and not following.is_leap


def holidays(day: date, lunar_month: Optional[int], lunar_day: Optional[int], *, is_leap: bool = False) -> List[str]:
    """Return the holidays of ``day`` as Gregorian, then lunisolar, then floating matches."""

    found: List[str] = []

    gregorian = GREGORIAN_HOLIDAYS.get(f"{day.month:02d}-{day.day:02d}")
    if gregorian:
        found.append(gregorian)

    if lunar_month is not None and lunar_day is not None and not is_leap:
        lunar = LUNAR_HOLIDAYS.get(f"{lunar_month:02d}-{lunar_day:02d}")
        if lunar:
            found.append(lunar)
        if _is_lunar_new_years_eve(day, lunar_month, lunar_day):
            found.append(LUNAR_NEW_YEARS_EVE)

    found.extend(rule.name for rule in FLOATING_HOLIDAYS if rule.matches(day))
    return found


def holidays_for(day: date) -> List[str]:
    """Like :func:`holidays`, deriving the lunar date from ``day``."""

    converted = lunar_date(day)
    if converted is None:
        return holidays(day, None, None)
    return holidays(day, converted.month, converted.day, is_leap=converted.is_leap)


__all__ = [
    "FLOATING_HOLIDAYS",
    "GREGORIAN_HOLIDAYS",
    "LUNAR_HOLIDAYS",
    "LUNAR_NEW_YEARS_EVE",
    "FloatingHoliday",
    "holidays",
    "holidays_for",
]
