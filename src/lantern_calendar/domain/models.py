from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Any, Dict, Optional, Tuple, Union

from .enums import RecurrenceFrequency


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported datetime value: {value!r}")


def _required(record: Dict[str, Any], key: str, kind: str) -> Any:
    try:
        return record[key]
    except KeyError:
        raise ValueError(f"{kind} record is missing '{key}': {record!r}") from None


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def as_local(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Express ``value`` in ``tz``; naive values are taken to already be local."""

    if tz is None or value.tzinfo is None:
        return value
    return value.astimezone(tz)


def local_day(value: datetime, tz: Optional[tzinfo]) -> date:
    return as_local(value, tz).date()


@dataclass(frozen=True, slots=True)
class RecurrenceRule:
    frequency: RecurrenceFrequency
    interval: int = 1

    @classmethod
    def coerce(cls, frequency: Any, interval: Any = 1) -> Optional["RecurrenceRule"]:
        """Build a rule from raw values, or ``None`` when the frequency is unknown."""

        parsed = RecurrenceFrequency.parse(frequency)
        if parsed is None:
            return None
        try:
            step = int(interval) if interval is not None else 1
        except (TypeError, ValueError):
            step = 1
        return cls(frequency=parsed, interval=max(step, 1))

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> Optional["RecurrenceRule"]:
        if not record:
            return None
        return cls.coerce(record.get("frequency"), record.get("interval", 1))

    def to_record(self) -> Dict[str, Any]:
        return {"frequency": self.frequency.value, "interval": self.interval}


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    id: str
    title: str
    start: datetime
    end: datetime
    is_all_day: bool = False
    location: Optional[str] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    calendar_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CalendarEvent":
        start = _parse_datetime(_required(record, "start", "Event"))
        return cls(
            id=str(_required(record, "id", "Event")),
            title=str(record.get("title") or ""),
            start=start,
            end=_parse_datetime(record["end"]) if record.get("end") else start,
            is_all_day=bool(record.get("is_all_day", False)),
            location=record.get("location"),
            color=record.get("color"),
            notes=record.get("notes"),
            url=record.get("url"),
            calendar_id=record.get("calendar_id"),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "is_all_day": self.is_all_day,
            "location": self.location,
            "color": self.color,
            "notes": self.notes,
            "url": self.url,
            "calendar_id": self.calendar_id,
        }


@dataclass(frozen=True, slots=True)
class Reminder:
    id: str
    title: str
    is_completed: bool = False
    priority: int = 0
    due: Optional[datetime] = None
    has_time: bool = False
    color: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    list_name: str = ""
    list_id: Optional[str] = None
    recurrence: Optional[RecurrenceRule] = None

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @property
    def priority_text(self) -> str:
        return {1: "!!!", 5: "!!", 9: "!"}.get(self.priority, "")

    def due_day(self, tz: Optional[tzinfo]) -> Optional[date]:
        if self.due is None:
            return None
        return local_day(self.due, tz)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Reminder":
        due = _parse_datetime(record["due"]) if record.get("due") else None
        return cls(
            id=str(_required(record, "id", "Reminder")),
            title=str(record.get("title") or ""),
            is_completed=bool(record.get("is_completed", False)),
            priority=int(record.get("priority") or 0),
            due=due,
            has_time=bool(record.get("has_time", False)) and due is not None,
            color=record.get("color"),
            notes=record.get("notes"),
            url=record.get("url"),
            list_name=str(record.get("list_name") or ""),
            list_id=record.get("list_id"),
            recurrence=RecurrenceRule.from_record(record.get("recurrence")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "is_completed": self.is_completed,
            "priority": self.priority,
            "due": _iso(self.due),
            "has_time": self.has_time,
            "color": self.color,
            "notes": self.notes,
            "url": self.url,
            "list_name": self.list_name,
            "list_id": self.list_id,
            "recurrence": self.recurrence.to_record() if self.recurrence else None,
        }


@dataclass(frozen=True, slots=True)
class RecurrenceOccurrence:
    """One concrete day on which a reminder is due."""

    reminder: Reminder
    occurs_on: date
    due: datetime

    @property
    def id(self) -> str:
        return f"{self.reminder.id}_{int(self.due.timestamp())}"

    @property
    def title(self) -> str:
        return self.reminder.title

    @property
    def has_time(self) -> bool:
        return self.reminder.has_time


DayReminder = Union[Reminder, RecurrenceOccurrence]


@dataclass(frozen=True, slots=True)
class CalendarDayCell:
    date: date
    lunar_short: Optional[str] = None
    lunar_full: Optional[str] = None
    holidays: Tuple[str, ...] = ()
    solar_term: Optional[str] = None
    events: Tuple[CalendarEvent, ...] = ()
    reminders: Tuple[DayReminder, ...] = ()
    in_month: bool = True

    @property
    def primary_holiday(self) -> Optional[str]:
        return self.holidays[0] if self.holidays else None
