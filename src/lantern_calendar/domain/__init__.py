"""Domain models for the calendar date engine."""

from __future__ import annotations

from .models import (
    CalendarDayCell,
    CalendarEvent,
    DayReminder,
    RecurrenceOccurrence,
    RecurrenceRule,
    Reminder,
    as_local,
    local_day,
)
from .enums import RecurrenceFrequency, ReminderBucket, WeekStartDay

__all__ = [
    "CalendarDayCell",
    "CalendarEvent",
    "DayReminder",
    "RecurrenceFrequency",
    "RecurrenceOccurrence",
    "RecurrenceRule",
    "Reminder",
    "ReminderBucket",
    "WeekStartDay",
    "as_local",
    "local_day",
]
