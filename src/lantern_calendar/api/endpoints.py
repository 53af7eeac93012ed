from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from ..core import (
    expand_recurrence,
    holidays,
    holidays_for,
    lunar_date,
    solar_term,
    solar_terms_for_year,
)
from ..domain import CalendarEvent, RecurrenceRule, WeekStartDay
from .models import EventPayload, ReminderPayload
from .registry import register_api
from .serializers import serialize_buckets, serialize_cell
from .state import api_state


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _parse_month(value: str) -> date:
    text = value.strip()
    if len(text) == 7:
        text = f"{text}-01"
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValueError("month must be formatted YYYY-MM or YYYY-MM-DD") from exc


def _parse_week_start(value: Optional[str]) -> Optional[WeekStartDay]:
    if value is None:
        return None
    try:
        return WeekStartDay(value.strip().lower())
    except ValueError as exc:
        raise ValueError("week_start must be one of: system, sunday, monday") from exc


@register_api(
    "calendar_month_grid",
    description="Build the labelled day grid (lunar labels, solar terms, holidays, events, reminders) for a month.",
    category="calendar",
    tags=("calendar", "grid"),
)
def calendar_month_grid(
    month: Optional[str] = None,
    week_start: Optional[str] = None,
    today: Optional[str] = None,
) -> Dict[str, Any]:
    context = api_state.context
    reference = _parse_month(month) if month else context.today()
    view = api_state.calendar.load_month(
        reference,
        week_start=_parse_week_start(week_start),
        today=_parse_date(today) if today else None,
    )
    return {
        "month": f"{reference.year:04d}-{reference.month:02d}",
        "first_weekday": view.first_weekday,
        "version": view.version,
        "days": [serialize_cell(cell, tz=context.tz) for cell in view.cells],
    }


@register_api(
    "calendar_day_agenda",
    description="Return the events and reminders of one day, all-day items first, then by time.",
    category="calendar",
    tags=("calendar", "day"),
)
def calendar_day_agenda(day: str, today: Optional[str] = None) -> Dict[str, Any]:
    target = _parse_date(day)
    tz = api_state.context.tz
    items = []
    for item in api_state.calendar.agenda_for(target, today=_parse_date(today) if today else None):
        if isinstance(item, CalendarEvent):
            items.append({"kind": "event", **EventPayload.from_domain(item).model_dump()})
        else:
            items.append({"kind": "reminder", **ReminderPayload.from_domain(item, tz=tz).model_dump()})
    return {"date": target.isoformat(), "items": items}


@register_api(
    "calendar_expand_recurrence",
    description="List the occurrence dates of a recurrence rule within an inclusive date range.",
    category="recurrence",
    tags=("recurrence",),
)
def calendar_expand_recurrence(
    anchor: str,
    frequency: str,
    range_start: str,
    range_end: str,
    interval: int = 1,
) -> Dict[str, Any]:
    rule = RecurrenceRule.coerce(frequency, interval)
    occurrences = expand_recurrence(
        _parse_date(anchor),
        rule,
        _parse_date(range_start),
        _parse_date(range_end),
        max_iterations=api_state.context.settings.engine.recurrence_max_iterations,
    )
    return {
        "anchor": anchor,
        "rule": rule.to_record() if rule else None,
        "occurrences": [day.isoformat() for day in occurrences],
    }


@register_api(
    "reminders_classify",
    description="Group incomplete reminders into overdue, one-time, cadence and future buckets.",
    category="reminders",
    tags=("reminders",),
)
def reminders_classify(today: Optional[str] = None) -> Dict[str, Any]:
    buckets = api_state.reminders.buckets(today=_parse_date(today) if today else None)
    return serialize_buckets(buckets, tz=api_state.context.tz)


@register_api(
    "calendar_solar_term",
    description="Return the solar term falling on a date, if any (1901-2100).",
    category="almanac",
    tags=("solar_term",),
)
def calendar_solar_term(day: str) -> Dict[str, Any]:
    target = _parse_date(day)
    return {"date": target.isoformat(), "solar_term": solar_term(target)}


@register_api(
    "calendar_solar_terms_for_year",
    description="Return the dates of all 24 solar terms in a year (1901-2100).",
    category="almanac",
    tags=("solar_term",),
)
def calendar_solar_terms_for_year(year: int) -> Dict[str, Any]:
    terms = solar_terms_for_year(int(year))
    return {"year": int(year), "terms": [{"date": day.isoformat(), "name": name} for day, name in terms]}


@register_api(
    "calendar_lunisolar_label",
    description="Return the short and full Chinese lunisolar labels of a date (1901-2100).",
    category="almanac",
    tags=("lunar",),
)
def calendar_lunisolar_label(day: str) -> Dict[str, Any]:
    target = _parse_date(day)
    converted = lunar_date(target)
    if converted is None:
        return {"date": target.isoformat(), "supported": False, "short": None, "full": None}
    return {
        "date": target.isoformat(),
        "supported": True,
        "short": converted.short_label,
        "full": converted.full_label,
        "lunar_year": converted.year,
        "lunar_month": converted.month,
        "lunar_day": converted.day,
        "is_leap": converted.is_leap,
    }


@register_api(
    "calendar_holidays",
    description="Return the holidays of a date; the lunar month/day (and leap flag) are derived when omitted.",
    category="almanac",
    tags=("holiday",),
)
def calendar_holidays(
    day: str,
    lunar_month: Optional[int] = None,
    lunar_day: Optional[int] = None,
    is_leap: bool = False,
) -> Dict[str, Any]:
    target = _parse_date(day)
    if lunar_month is None or lunar_day is None:
        names = holidays_for(target)
    else:
        names = holidays(target, int(lunar_month), int(lunar_day), is_leap=bool(is_leap))
    return {"date": target.isoformat(), "holidays": names}
