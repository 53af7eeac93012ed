"""The 24 solar terms, located with the ``[Y*D+C]-L`` approximation.

``Y`` is the last two digits of the year, ``D`` is 0.2422, ``C`` is a
per-term constant fitted separately for the 20th and 21st centuries and
``L`` is the leap-year correction ``[Y/4]``. The constants are empirical and
only valid for 1901-2100.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from .config import SUPPORTED_YEARS

DAY_FACTOR = 0.2422
CENTURY_SPLIT = 2001


@dataclass(frozen=True, slots=True)
class SolarTerm:
    key: str
    name: str
    month: int
    c20: float
    c21: float

    def constant(self, year: int) -> float:
        return self.c20 if year < CENTURY_SPLIT else self.c21


SOLAR_TERMS: Tuple[SolarTerm, ...] = (
    SolarTerm("xiao_han", "小寒", 1, 6.11, 5.4055),
    SolarTerm("da_han", "大寒", 1, 20.84, 20.12),
    SolarTerm("li_chun", "立春", 2, 4.6295, 3.87),
    SolarTerm("yu_shui", "雨水", 2, 19.4599, 18.73),
    SolarTerm("jing_zhe", "惊蛰", 3, 6.3826, 5.63),
    SolarTerm("chun_fen", "春分", 3, 21.4155, 20.646),
    SolarTerm("qing_ming", "清明", 4, 5.59, 4.81),
    SolarTerm("gu_yu", "谷雨", 4, 20.888, 20.1),
    SolarTerm("li_xia", "立夏", 5, 6.318, 5.52),
    SolarTerm("xiao_man", "小满", 5, 21.86, 21.04),
    SolarTerm("mang_zhong", "芒种", 6, 6.5, 5.678),
    SolarTerm("xia_zhi", "夏至", 6, 22.2, 21.37),
    SolarTerm("xiao_shu", "小暑", 7, 7.928, 7.108),
    SolarTerm("da_shu", "大暑", 7, 23.65, 22.83),
    SolarTerm("li_qiu", "立秋", 8, 8.35, 7.5),
    SolarTerm("chu_shu", "处暑", 8, 23.95, 23.15),
    SolarTerm("bai_lu", "白露", 9, 8.44, 7.646),
    SolarTerm("qiu_fen", "秋分", 9, 23.822, 23.042),
    SolarTerm("han_lu", "寒露", 10, 9.098, 8.318),
    SolarTerm("shuang_jiang", "霜降", 10, 24.218, 23.438),
    SolarTerm("li_dong", "立冬", 11, 8.218, 7.438),
    SolarTerm("xiao_xue", "小雪", 11, 23.08, 22.36),
    SolarTerm("da_xue", "大雪", 12, 7.7, 7.18),
    SolarTerm("dong_zhi", "冬至", 12, 22.394, 21.94),
)

TERMS_BY_KEY: Dict[str, SolarTerm] = {term.key: term for term in SOLAR_TERMS}
TERMS_BY_MONTH: Dict[int, Tuple[SolarTerm, ...]] = {
    month: tuple(term for term in SOLAR_TERMS if term.month == month) for month in range(1, 13)
}

# Years in which the formula is off by a day, as (term key, year) -> offset.
DAY_CORRECTIONS: Dict[Tuple[str, int], int] = {
    ("xiao_han", 1982): 1,
    ("xiao_han", 2019): -1,
    ("da_han", 2082): 1,
    ("yu_shui", 2026): -1,
    ("chun_fen", 2084): 1,
    ("xiao_man", 2008): 1,
    ("mang_zhong", 1902): 1,
    ("xia_zhi", 1928): 1,
    ("xiao_shu", 1925): 1,
    ("xiao_shu", 2016): 1,
    ("da_shu", 1922): 1,
    ("li_qiu", 2002): 1,
    ("bai_lu", 1927): 1,
    ("qiu_fen", 1942): 1,
    ("shuang_jiang", 2089): 1,
    ("li_dong", 2089): 1,
    ("xiao_xue", 1978): 1,
    ("da_xue", 1954): 1,
    ("dong_zhi", 1918): -1,
    ("dong_zhi", 2021): -1,
    ("dong_zhi", 2082): 1,
}


def _in_range(year: int) -> bool:
    return SUPPORTED_YEARS[0] <= year <= SUPPORTED_YEARS[1]


def solar_term_day(term: SolarTerm, year: int) -> int:
    """Day of month on which ``term`` falls in ``year``."""

    short_year = year % 100
    day = int(short_year * DAY_FACTOR + term.constant(year)) - short_year // 4
    return day + DAY_CORRECTIONS.get((term.key, year), 0)


def solar_term(day: date) -> Optional[str]:
    if not _in_range(day.year):
        return None
    for term in TERMS_BY_MONTH[day.month]:
        if solar_term_day(term, day.year) == day.day:
            return term.name
    return None


def solar_terms_for_year(year: int) -> List[Tuple[date, str]]:
    if not _in_range(year):
        return []
    return [(date(year, term.month, solar_term_day(term, year)), term.name) for term in SOLAR_TERMS]


__all__ = [
    "DAY_CORRECTIONS",
    "SOLAR_TERMS",
    "SolarTerm",
    "solar_term",
    "solar_term_day",
    "solar_terms_for_year",
]
