"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import orjson
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lantern_calendar.config import get_settings  # noqa: E402
from lantern_calendar.data import SnapshotStore  # noqa: E402
from lantern_calendar.domain import RecurrenceRule, Reminder  # noqa: E402
from lantern_calendar.services import ServiceContext  # noqa: E402

SHANGHAI = ZoneInfo("Asia/Shanghai")


@pytest.fixture
def tz():
    return SHANGHAI


@pytest.fixture
def today():
    return date(2025, 6, 15)


@pytest.fixture
def make_reminder():
    """Factory for reminders due at local midnight (or a given time) in Shanghai."""

    def _make(
        reminder_id,
        due=None,
        *,
        frequency=None,
        interval=1,
        has_time=False,
        completed=False,
        list_id="personal",
    ):
        due_at = None
        if isinstance(due, datetime):
            due_at = due
        elif isinstance(due, date):
            due_at = datetime(due.year, due.month, due.day, tzinfo=SHANGHAI)
        return Reminder(
            id=reminder_id,
            title=f"Reminder {reminder_id}",
            is_completed=completed,
            due=due_at,
            has_time=has_time,
            list_name="Personal",
            list_id=list_id,
            recurrence=RecurrenceRule.coerce(frequency, interval) if frequency else None,
        )

    return _make


@pytest.fixture
def settings(monkeypatch, tmp_path):
    monkeypatch.setenv("LANTERN_TIMEZONE", "Asia/Shanghai")
    monkeypatch.setenv("LANTERN_WEEK_START", "monday")
    monkeypatch.setenv("LANTERN_SNAPSHOT_PATH", str(tmp_path / "snapshot.json"))
    monkeypatch.setenv("LANTERN_LOG_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def snapshot_payload():
    return {
        "events": [
            {
                "id": "evt-standup",
                "title": "Standup",
                "start": "2025-10-06T09:00:00+08:00",
                "end": "2025-10-06T09:15:00+08:00",
                "calendar_id": "work",
            },
            {
                "id": "evt-holiday",
                "title": "Mid-Autumn dinner",
                "start": "2025-10-06T00:00:00+08:00",
                "end": "2025-10-07T00:00:00+08:00",
                "is_all_day": True,
                "calendar_id": "family",
            },
            {
                "id": "evt-late",
                "title": "Call with Berlin",
                "start": "2025-10-01T17:30:00+00:00",
                "end": "2025-10-01T18:00:00+00:00",
                "calendar_id": "work",
            },
            {
                "id": "evt-november",
                "title": "Out of window",
                "start": "2025-11-20T10:00:00+08:00",
                "end": "2025-11-20T11:00:00+08:00",
                "calendar_id": "work",
            },
        ],
        "reminders": [
            {
                "id": "rem-rent",
                "title": "Pay rent",
                "due": "2025-01-05T00:00:00+08:00",
                "list_id": "home",
                "list_name": "Home",
                "priority": 1,
                "recurrence": {"frequency": "monthly", "interval": 1},
            },
            {
                "id": "rem-plants",
                "title": "Water plants",
                "due": "2025-01-15T08:30:00+08:00",
                "has_time": True,
                "list_id": "home",
                "list_name": "Home",
                "recurrence": {"frequency": "weekly", "interval": 2},
            },
            {
                "id": "rem-done",
                "title": "Already done",
                "due": "2025-10-10T00:00:00+08:00",
                "is_completed": True,
                "list_id": "home",
            },
            {
                "id": "rem-visa",
                "title": "Renew visa",
                "due": "2025-10-20T00:00:00+08:00",
                "list_id": "admin",
                "list_name": "Admin",
                "priority": 5,
            },
        ],
    }


@pytest.fixture
def snapshot_path(tmp_path, snapshot_payload):
    path = tmp_path / "snapshot.json"
    path.write_bytes(orjson.dumps(snapshot_payload))
    return path


@pytest.fixture
def store(snapshot_path):
    return SnapshotStore(snapshot_path, tz=SHANGHAI)


@pytest.fixture
def context(settings, store):
    return ServiceContext(settings=settings, source=store)
