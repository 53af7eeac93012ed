"""Expansion of recurring reminders into concrete occurrence dates."""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import List, Optional

from ..domain import RecurrenceFrequency, RecurrenceOccurrence, RecurrenceRule, Reminder, as_local

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 1000


def add_units(anchor: date, frequency: RecurrenceFrequency, amount: int) -> Optional[date]:
    """Add ``amount`` calendar units to ``anchor``.

    Month and year steps keep the anchor's day of month, clamped to the length
    of the target month (Jan 31 + 1 month is Feb 28/29). Returns ``None`` when
    the result is not representable.
    """

    try:
        if frequency is RecurrenceFrequency.DAILY:
            return anchor + timedelta(days=amount)
        if frequency is RecurrenceFrequency.WEEKLY:
            return anchor + timedelta(weeks=amount)
        months = amount * 12 if frequency is RecurrenceFrequency.YEARLY else amount
        total = anchor.year * 12 + (anchor.month - 1) + months
        year, month = divmod(total, 12)
        month += 1
        day = min(anchor.day, calendar.monthrange(year, month)[1])
        return date(year, month, day)
    except (OverflowError, ValueError):
        return None


def units_between(start: date, end: date, frequency: RecurrenceFrequency) -> int:
    """Whole calendar units from ``start`` to ``end`` (never negative)."""

    if end <= start:
        return 0
    if frequency is RecurrenceFrequency.DAILY:
        return (end - start).days
    if frequency is RecurrenceFrequency.WEEKLY:
        return (end - start).days // 7
    if frequency is RecurrenceFrequency.MONTHLY:
        return (end.year - start.year) * 12 + (end.month - start.month)
    return end.year - start.year


def expand_recurrence(
    anchor: date,
    rule: Optional[RecurrenceRule],
    range_start: date,
    range_end: date,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> List[date]:
    """Return the occurrence dates of ``rule`` within ``[range_start, range_end]``.

    Occurrences are ``anchor + k * interval`` units for ``k >= 0``. Occurrences
    before ``range_start`` are skipped arithmetically rather than one by one,
    so the cost depends on the size of the range and not on the age of the
    anchor. At most ``max_iterations`` candidates are examined; when the cap is
    hit the occurrences gathered so far are returned.
    """

    if range_end < range_start:
        return []
    frequency = RecurrenceFrequency.parse(rule.frequency) if rule is not None else None
    if frequency is None:
        return [anchor] if range_start <= anchor <= range_end else []

    interval = max(int(rule.interval), 1)
    index = (units_between(anchor, range_start, frequency) // interval) * interval

    occurrences: List[date] = []
    for _ in range(max(max_iterations, 0)):
        candidate = add_units(anchor, frequency, index)
        if candidate is None:
            logger.warning("Stopped expanding %s rule from %s: date overflow", frequency.value, anchor)
            break
        if candidate > range_end:
            break
        if candidate >= range_start:
            occurrences.append(candidate)
        index += interval
    else:
        logger.warning(
            "Recurrence expansion from %s hit the %d step cap; returning %d occurrences",
            anchor.isoformat(),
            max_iterations,
            len(occurrences),
        )
    return occurrences


def expand_reminder(
    reminder: Reminder,
    range_start: date,
    range_end: date,
    *,
    tz: Optional[tzinfo],
    today: date,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> List[RecurrenceOccurrence]:
    """Place ``reminder`` on every day of the range it is due.

    Reminders without a due date are treated as due ``today``.
    """

    if reminder.due is None:
        anchor_day = today
        anchor_time = time()
        zone = tz
    else:
        local_due = as_local(reminder.due, tz)
        anchor_day = local_due.date()
        anchor_time = local_due.time().replace(tzinfo=None) if reminder.has_time else time()
        zone = local_due.tzinfo or tz

    days = expand_recurrence(
        anchor_day,
        reminder.recurrence,
        range_start,
        range_end,
        max_iterations=max_iterations,
    )
    return [
        RecurrenceOccurrence(
            reminder=reminder,
            occurs_on=day,
            due=datetime.combine(day, anchor_time, tzinfo=zone),
        )
        for day in days
    ]


__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "add_units",
    "expand_recurrence",
    "expand_reminder",
    "units_between",
]
