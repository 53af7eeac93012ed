from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core import ReminderBuckets, cycle_range
from ..domain import CalendarDayCell, CalendarEvent, RecurrenceOccurrence, Reminder, ReminderBucket


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    start: str
    end: str
    is_all_day: bool = False
    location: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    url: Optional[str] = Field(default=None)
    calendar_id: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, event: CalendarEvent) -> "EventPayload":
        return cls(
            id=event.id,
            title=event.title,
            start=event.start.isoformat(),
            end=event.end.isoformat(),
            is_all_day=event.is_all_day,
            location=event.location,
            color=event.color,
            notes=event.notes,
            url=event.url,
            calendar_id=event.calendar_id,
        )


class ReminderPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    reminder_id: str
    title: str
    due: Optional[str] = Field(default=None)
    has_time: bool = False
    priority: int = 0
    priority_text: str = ""
    list_name: str = ""
    color: Optional[str] = Field(default=None)
    recurrence: Optional[Dict[str, Any]] = Field(default=None)
    cycle_start: Optional[str] = Field(default=None)
    cycle_end: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, item: Reminder | RecurrenceOccurrence, *, tz=None) -> "ReminderPayload":
        reminder = item.reminder if isinstance(item, RecurrenceOccurrence) else item
        due = item.due if isinstance(item, RecurrenceOccurrence) else reminder.due
        span = cycle_range(reminder, tz) if isinstance(item, Reminder) else None
        return cls(
            id=item.id,
            reminder_id=reminder.id,
            title=reminder.title,
            due=_iso(due),
            has_time=reminder.has_time,
            priority=reminder.priority,
            priority_text=reminder.priority_text,
            list_name=reminder.list_name,
            color=reminder.color,
            recurrence=reminder.recurrence.to_record() if reminder.recurrence else None,
            cycle_start=span[0].isoformat() if span else None,
            cycle_end=span[1].isoformat() if span else None,
        )


class DayCellPayload(BaseModel):
    date: str
    in_month: bool
    lunar_short: Optional[str] = Field(default=None)
    lunar_full: Optional[str] = Field(default=None)
    holidays: List[str] = Field(default_factory=list)
    solar_term: Optional[str] = Field(default=None)
    events: List[EventPayload] = Field(default_factory=list)
    reminders: List[ReminderPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, cell: CalendarDayCell, *, tz=None) -> "DayCellPayload":
        return cls(
            date=cell.date.isoformat(),
            in_month=cell.in_month,
            lunar_short=cell.lunar_short,
            lunar_full=cell.lunar_full,
            holidays=list(cell.holidays),
            solar_term=cell.solar_term,
            events=[EventPayload.from_domain(event) for event in cell.events],
            reminders=[ReminderPayload.from_domain(item, tz=tz) for item in cell.reminders],
        )


class ReminderBucketsPayload(BaseModel):
    overdue: List[ReminderPayload] = Field(default_factory=list)
    one_time: List[ReminderPayload] = Field(default_factory=list)
    weekly: List[ReminderPayload] = Field(default_factory=list)
    biweekly: List[ReminderPayload] = Field(default_factory=list)
    monthly: List[ReminderPayload] = Field(default_factory=list)
    quarterly: List[ReminderPayload] = Field(default_factory=list)
    semiannual: List[ReminderPayload] = Field(default_factory=list)
    yearly: List[ReminderPayload] = Field(default_factory=list)
    multi_year: Dict[str, List[ReminderPayload]] = Field(default_factory=dict)
    future: List[ReminderPayload] = Field(default_factory=list)
    other: List[ReminderPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, buckets: ReminderBuckets, *, tz=None) -> "ReminderBucketsPayload":
        def _dump(items: List[Reminder]) -> List[ReminderPayload]:
            return [ReminderPayload.from_domain(item, tz=tz) for item in items]

        fields = {
            bucket.value: _dump(buckets.bucket(bucket))
            for bucket in ReminderBucket
            if bucket is not ReminderBucket.MULTI_YEAR
        }
        multi_year = {str(interval): _dump(items) for interval, items in buckets.multi_year.items()}
        return cls(multi_year=multi_year, **fields)


def _iso(value: Optional[datetime | date]) -> Optional[str]:
    return value.isoformat() if value else None
