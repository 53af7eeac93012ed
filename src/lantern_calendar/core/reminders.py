"""Bucketing of incomplete reminders for the reminder list view."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

from ..domain import RecurrenceFrequency, RecurrenceRule, Reminder, ReminderBucket, as_local
from .recurrence import add_units

# (frequency, interval) pairs with a named bucket; yearly intervals above one
# are grouped separately.
CADENCE_BUCKETS: Dict[Tuple[RecurrenceFrequency, int], ReminderBucket] = {
    (RecurrenceFrequency.WEEKLY, 1): ReminderBucket.WEEKLY,
    (RecurrenceFrequency.WEEKLY, 2): ReminderBucket.BIWEEKLY,
    (RecurrenceFrequency.MONTHLY, 1): ReminderBucket.MONTHLY,
    (RecurrenceFrequency.MONTHLY, 3): ReminderBucket.QUARTERLY,
    (RecurrenceFrequency.MONTHLY, 6): ReminderBucket.SEMIANNUAL,
    (RecurrenceFrequency.YEARLY, 1): ReminderBucket.YEARLY,
}


@dataclass
class ReminderBuckets:
    overdue: List[Reminder] = field(default_factory=list)
    one_time: List[Reminder] = field(default_factory=list)
    weekly: List[Reminder] = field(default_factory=list)
    biweekly: List[Reminder] = field(default_factory=list)
    monthly: List[Reminder] = field(default_factory=list)
    quarterly: List[Reminder] = field(default_factory=list)
    semiannual: List[Reminder] = field(default_factory=list)
    yearly: List[Reminder] = field(default_factory=list)
    multi_year: Dict[int, List[Reminder]] = field(default_factory=dict)
    future: List[Reminder] = field(default_factory=list)
    other: List[Reminder] = field(default_factory=list)

    def bucket(self, name: ReminderBucket) -> List[Reminder]:
        if name is ReminderBucket.MULTI_YEAR:
            return [reminder for interval in sorted(self.multi_year) for reminder in self.multi_year[interval]]
        return getattr(self, name.value)

    def bucket_of(self, reminder_id: str) -> Optional[ReminderBucket]:
        for name in ReminderBucket:
            if any(reminder.id == reminder_id for reminder in self.bucket(name)):
                return name
        return None

    def is_empty(self) -> bool:
        return not any(self.bucket(name) for name in ReminderBucket)


def cycle_end(anchor: date, rule: RecurrenceRule) -> Optional[date]:
    """Last day of the cycle starting at ``anchor``: one interval later, minus a day."""

    following = add_units(anchor, rule.frequency, max(rule.interval, 1))
    if following is None:
        return None
    try:
        return following - timedelta(days=1)
    except OverflowError:
        return None


def cycle_range(reminder: Reminder, tz: Optional[tzinfo]) -> Optional[Tuple[date, date]]:
    """The ``(start, end)`` span of a recurring reminder's current cycle."""

    start = reminder.due_day(tz)
    if start is None or reminder.recurrence is None:
        return None
    end = cycle_end(start, reminder.recurrence)
    if end is None:
        return None
    return start, end


def _sort_key(reminder: Reminder, tz: Optional[tzinfo]) -> Tuple[int, datetime]:
    if reminder.due is None:
        return 0, datetime.min
    return 1, as_local(reminder.due, tz).replace(tzinfo=None)


def _sorted(reminders: Iterable[Reminder], tz: Optional[tzinfo]) -> List[Reminder]:
    return sorted(reminders, key=lambda reminder: _sort_key(reminder, tz))


def classify_reminder(reminder: Reminder, *, today: date, tz: Optional[tzinfo]) -> Tuple[ReminderBucket, int]:
    """Return the bucket of ``reminder`` and, for multi-year reminders, its interval."""

    due_day = reminder.due_day(tz)
    rule = reminder.recurrence
    if rule is None:
        if due_day is not None and due_day < today:
            return ReminderBucket.OVERDUE, 0
        return ReminderBucket.ONE_TIME, 0

    if due_day is not None:
        end = cycle_end(due_day, rule)
        if end is not None and end < today:
            return ReminderBucket.OVERDUE, 0
        if due_day > today:
            return ReminderBucket.FUTURE, 0

    interval = max(rule.interval, 1)
    named = CADENCE_BUCKETS.get((rule.frequency, interval))
    if named is not None:
        return named, 0
    if rule.frequency is RecurrenceFrequency.YEARLY:
        return ReminderBucket.MULTI_YEAR, interval
    return ReminderBucket.OTHER, 0


def classify_reminders(
    reminders: Iterable[Reminder],
    *,
    today: date,
    tz: Optional[tzinfo] = None,
) -> ReminderBuckets:
    """Partition incomplete reminders into the list-view buckets.

    Completed reminders are ignored. Every bucket is sorted by due date with
    undated reminders first; multi-year reminders are grouped by interval.
    """

    grouped: Dict[ReminderBucket, List[Reminder]] = {}
    multi_year: Dict[int, List[Reminder]] = {}
    for reminder in reminders:
        if reminder.is_completed:
            continue
        bucket, interval = classify_reminder(reminder, today=today, tz=tz)
        if bucket is ReminderBucket.MULTI_YEAR:
            multi_year.setdefault(interval, []).append(reminder)
        else:
            grouped.setdefault(bucket, []).append(reminder)

    result = ReminderBuckets(
        multi_year={interval: _sorted(multi_year[interval], tz) for interval in sorted(multi_year)}
    )
    for bucket, items in grouped.items():
        setattr(result, bucket.value, _sorted(items, tz))
    return result


__all__ = [
    "CADENCE_BUCKETS",
    "ReminderBuckets",
    "classify_reminder",
    "classify_reminders",
    "cycle_end",
    "cycle_range",
]
