from __future__ import annotations

from enum import Enum
from typing import Optional

# Regions whose calendars conventionally start the week on Sunday.
_SUNDAY_FIRST_REGIONS = frozenset(
    {"US", "CA", "JP", "KR", "TW", "HK", "MO", "IL", "BR", "MX", "PH", "IN", "SA", "ZA", "AU"}
)


class RecurrenceFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: object) -> Optional["RecurrenceFrequency"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class WeekStartDay(str, Enum):
    SYSTEM = "system"
    SUNDAY = "sunday"
    MONDAY = "monday"

    def first_weekday(self, locale_name: Optional[str] = None) -> int:
        """Resolve to a ``date.weekday()`` value (Monday=0 .. Sunday=6)."""

        if self is WeekStartDay.MONDAY:
            return 0
        if self is WeekStartDay.SUNDAY:
            return 6
        region = _locale_region(locale_name)
        return 6 if region in _SUNDAY_FIRST_REGIONS else 0


class ReminderBucket(str, Enum):
    OVERDUE = "overdue"
    ONE_TIME = "one_time"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    YEARLY = "yearly"
    MULTI_YEAR = "multi_year"
    FUTURE = "future"
    OTHER = "other"


def _locale_region(locale_name: Optional[str]) -> Optional[str]:
    if not locale_name:
        return None
    base = locale_name.split(".", 1)[0].replace("-", "_")
    parts = base.split("_")
    return parts[-1].upper() if len(parts) > 1 else None
