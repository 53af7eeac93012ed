"""Tests for reminder list bucketing."""

from datetime import date, datetime

import pytest

from lantern_calendar.core.reminders import classify_reminders, cycle_range
from lantern_calendar.domain import ReminderBucket


@pytest.mark.parametrize(
    "due, frequency, interval, expected",
    [
        (date(2025, 6, 14), None, 1, ReminderBucket.OVERDUE),
        (date(2025, 6, 15), None, 1, ReminderBucket.ONE_TIME),
        (None, None, 1, ReminderBucket.ONE_TIME),
        (date(2025, 6, 12), "weekly", 1, ReminderBucket.WEEKLY),
        (date(2025, 6, 1), "weekly", 1, ReminderBucket.OVERDUE),
        (date(2025, 6, 5), "weekly", 2, ReminderBucket.BIWEEKLY),
        (date(2025, 5, 20), "monthly", 1, ReminderBucket.MONTHLY),
        (date(2025, 4, 1), "monthly", 3, ReminderBucket.QUARTERLY),
        (date(2025, 1, 1), "monthly", 6, ReminderBucket.SEMIANNUAL),
        (date(2024, 7, 1), "yearly", 1, ReminderBucket.YEARLY),
        (date(2025, 6, 20), "weekly", 1, ReminderBucket.FUTURE),
        (date(2025, 6, 15), "daily", 1, ReminderBucket.OTHER),
        (date(2025, 5, 1), "monthly", 2, ReminderBucket.OTHER),
        (None, "weekly", 1, ReminderBucket.WEEKLY),
    ],
)
def test_each_reminder_lands_in_exactly_one_bucket(make_reminder, tz, today, due, frequency, interval, expected):
    reminder = make_reminder("r1", due, frequency=frequency, interval=interval)

    buckets = classify_reminders([reminder], today=today, tz=tz)

    assert buckets.bucket_of("r1") is expected
    assert sum(len(buckets.bucket(name)) for name in ReminderBucket) == 1


def test_multi_year_reminders_grouped_by_interval(make_reminder, tz, today):
    reminders = [
        make_reminder("five", date(2021, 1, 1), frequency="yearly", interval=5),
        make_reminder("two", date(2024, 1, 1), frequency="yearly", interval=2),
        make_reminder("two-later", date(2024, 3, 1), frequency="yearly", interval=2),
    ]

    buckets = classify_reminders(reminders, today=today, tz=tz)

    assert list(buckets.multi_year) == [2, 5]
    assert [item.id for item in buckets.multi_year[2]] == ["two", "two-later"]
    assert [item.id for item in buckets.bucket(ReminderBucket.MULTI_YEAR)] == ["two", "two-later", "five"]


def test_completed_reminders_are_ignored(make_reminder, tz, today):
    buckets = classify_reminders(
        [make_reminder("done", date(2025, 6, 1), completed=True)],
        today=today,
        tz=tz,
    )

    assert buckets.is_empty()


def test_buckets_sorted_with_undated_first(make_reminder, tz, today):
    reminders = [
        make_reminder("later", datetime(2025, 6, 30, 9, tzinfo=tz), has_time=True),
        make_reminder("undated"),
        make_reminder("sooner", date(2025, 6, 16)),
    ]

    buckets = classify_reminders(reminders, today=today, tz=tz)

    assert [item.id for item in buckets.one_time] == ["undated", "sooner", "later"]


def test_cycle_range(make_reminder, tz):
    monthly = make_reminder("m", date(2025, 1, 31), frequency="monthly")
    one_off = make_reminder("o", date(2025, 1, 31))

    assert cycle_range(monthly, tz) == (date(2025, 1, 31), date(2025, 2, 27))
    assert cycle_range(one_off, tz) is None
