"""Tests for the calendar and reminder services."""

from datetime import date, datetime

import pytest

from lantern_calendar.domain import CalendarEvent, RecurrenceOccurrence, WeekStartDay
from lantern_calendar.services import CalendarService, ReminderService

TODAY = date(2025, 10, 15)


def test_load_month_places_events_and_reminders(context):
    service = CalendarService(context)

    view = service.load_month(date(2025, 10, 1), today=TODAY)

    assert view.first_weekday == 0
    assert view.start == date(2025, 9, 29)
    assert view.end == date(2025, 11, 2)
    assert [event.id for event in view.cell_for(date(2025, 10, 6)).events] == ["evt-holiday", "evt-standup"]
    assert [event.id for event in view.cell_for(date(2025, 10, 2)).events] == ["evt-late"]
    assert [item.reminder.id for item in view.cell_for(date(2025, 10, 5)).reminders] == ["rem-rent"]
    assert [item.reminder.id for item in view.cell_for(date(2025, 10, 8)).reminders] == ["rem-plants"]
    assert [item.reminder.id for item in view.cell_for(date(2025, 10, 22)).reminders] == ["rem-plants"]
    assert [item.reminder.id for item in view.cell_for(date(2025, 10, 20)).reminders] == ["rem-visa"]
    assert view.cell_for(date(2025, 10, 10)).reminders == ()


def test_week_start_override(context):
    view = CalendarService(context).load_month(date(2025, 10, 1), week_start=WeekStartDay.SUNDAY, today=TODAY)

    assert view.first_weekday == 6
    assert view.start == date(2025, 9, 28)


def test_calendar_filter(context):
    service = CalendarService(context, calendar_ids={"work"})

    view = service.load_month(date(2025, 10, 1), today=TODAY)

    assert [event.id for event in view.cell_for(date(2025, 10, 6)).events] == ["evt-standup"]


def test_refresh_if_stale_rebuilds_after_change(context, store):
    service = CalendarService(context)
    assert service.refresh_if_stale(today=TODAY) is None

    view = service.load_month(date(2025, 10, 1), today=TODAY)
    assert service.refresh_if_stale(today=TODAY) is view

    store.replace([], [])
    refreshed = service.refresh_if_stale(today=TODAY)

    assert refreshed.version == view.version + 1
    assert refreshed.first_weekday == view.first_weekday
    assert refreshed.cell_for(date(2025, 10, 6)).events == ()


def test_agenda_for_orders_items(context, tz):
    service = CalendarService(context)

    items = service.agenda_for(date(2025, 10, 6), today=TODAY)
    assert [item.id for item in items] == ["evt-holiday", "evt-standup"]

    plants = service.agenda_for(date(2025, 10, 8), today=TODAY)
    assert len(plants) == 1
    assert isinstance(plants[0], RecurrenceOccurrence)
    assert plants[0].due == datetime(2025, 10, 8, 8, 30, tzinfo=tz)
    assert not isinstance(plants[0], CalendarEvent)


def test_reminder_buckets(context):
    buckets = ReminderService(context).buckets(today=TODAY)

    assert [item.id for item in buckets.overdue] == ["rem-rent", "rem-plants"]
    assert [item.id for item in buckets.one_time] == ["rem-visa"]
    assert buckets.bucket_of("rem-done") is None


def test_agenda_for_follows_source_changes(context, store):
    service = CalendarService(context)
    service.load_month(date(2025, 10, 1), today=TODAY)

    store.replace([], [])

    assert service.agenda_for(date(2025, 10, 6), today=TODAY) == []


def test_services_require_a_source(context):
    context.source = None

    with pytest.raises(RuntimeError):
        CalendarService(context).load_month(date(2025, 10, 1), today=TODAY)
    with pytest.raises(RuntimeError):
        ReminderService(context).buckets(today=TODAY)
