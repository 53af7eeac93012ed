from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..domain import (
    CalendarDayCell,
    CalendarEvent,
    DayReminder,
    RecurrenceOccurrence,
    Reminder,
    as_local,
    local_day,
)
from .grid import build_date_grid
from .holidays import holidays
from .lunisolar import lunar_date
from .solar_terms import solar_term

logger = logging.getLogger(__name__)

AgendaItem = Union[CalendarEvent, Reminder, RecurrenceOccurrence]


def group_events_by_day(events: Iterable[CalendarEvent], tz: Optional[tzinfo]) -> Dict[date, List[CalendarEvent]]:
    grouped: Dict[date, List[CalendarEvent]] = {}
    for event in events:
        grouped.setdefault(local_day(event.start, tz), []).append(event)
    return grouped


def group_occurrences_by_day(occurrences: Iterable[RecurrenceOccurrence]) -> Dict[date, List[RecurrenceOccurrence]]:
    grouped: Dict[date, List[RecurrenceOccurrence]] = {}
    for occurrence in occurrences:
        grouped.setdefault(occurrence.occurs_on, []).append(occurrence)
    return grouped


def build_day_cell(
    day: date,
    *,
    events: Sequence[CalendarEvent] = (),
    reminders: Sequence[DayReminder] = (),
    in_month: bool = True,
    show_alternative_calendar: bool = True,
) -> CalendarDayCell:
    converted = lunar_date(day)
    if converted is None:
        day_holidays = holidays(day, None, None)
    else:
        day_holidays = holidays(day, converted.month, converted.day, is_leap=converted.is_leap)
    show_lunar = show_alternative_calendar and converted is not None
    return CalendarDayCell(
        date=day,
        lunar_short=converted.short_label if show_lunar else None,
        lunar_full=converted.full_label if show_lunar else None,
        holidays=tuple(day_holidays),
        solar_term=solar_term(day),
        events=tuple(events),
        reminders=tuple(reminders),
        in_month=in_month,
    )


def build_month_grid(
    reference: date,
    first_weekday: int,
    events_by_day: Optional[Mapping[date, Sequence[CalendarEvent]]] = None,
    reminders_by_day: Optional[Mapping[date, Sequence[DayReminder]]] = None,
    *,
    show_alternative_calendar: bool = True,
) -> List[CalendarDayCell]:
    """Assemble the labelled cells of the month containing ``reference``."""

    events_by_day = events_by_day or {}
    reminders_by_day = reminders_by_day or {}
    cells = [
        build_day_cell(
            day,
            events=events_by_day.get(day, ()),
            reminders=reminders_by_day.get(day, ()),
            in_month=(day.year, day.month) == (reference.year, reference.month),
            show_alternative_calendar=show_alternative_calendar,
        )
        for day in build_date_grid(reference, first_weekday)
    ]
    logger.debug("Assembled %d cells for %04d-%02d", len(cells), reference.year, reference.month)
    return cells


def _is_all_day(item: AgendaItem) -> bool:
    if isinstance(item, CalendarEvent):
        return item.is_all_day
    return not item.has_time


def _sort_instant(item: AgendaItem, tz: Optional[tzinfo]) -> datetime:
    value = item.start if isinstance(item, CalendarEvent) else item.due
    return as_local(value, tz).replace(tzinfo=None) if value is not None else datetime.min


def day_agenda(cell: CalendarDayCell, tz: Optional[tzinfo] = None) -> List[AgendaItem]:
    """Events and reminders of a day: all-day items first, then by time."""

    items: List[AgendaItem] = [*cell.events, *cell.reminders]
    all_day = [item for item in items if _is_all_day(item)]
    timed = sorted((item for item in items if not _is_all_day(item)), key=lambda item: _sort_instant(item, tz))
    return all_day + timed


__all__ = [
    "AgendaItem",
    "build_day_cell",
    "build_month_grid",
    "day_agenda",
    "group_events_by_day",
    "group_occurrences_by_day",
]
