from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any, Callable, Collection, Dict, Iterable, List, Optional, Protocol

import orjson

from ..core.config import SNAPSHOT_FILE
from ..domain import CalendarEvent, Reminder, as_local

logger = logging.getLogger(__name__)

ReminderPredicate = Callable[[Reminder], bool]
ChangeCallback = Callable[[int], None]

EMPTY_SNAPSHOT: Dict[str, Any] = {"events": [], "reminders": []}


def incomplete_only(reminder: Reminder) -> bool:
    return not reminder.is_completed


class CalendarSource(Protocol):
    """Read side of the calendar and reminder store the engine consumes."""

    @property
    def version(self) -> int: ...

    def fetch_events(
        self,
        start: datetime,
        end: datetime,
        calendar_ids: Optional[Collection[str]] = None,
    ) -> List[CalendarEvent]: ...

    def fetch_reminders(
        self,
        list_ids: Optional[Collection[str]] = None,
        predicate: Optional[ReminderPredicate] = None,
    ) -> List[Reminder]: ...

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]: ...


def _comparable(value: datetime, tz: Optional[tzinfo]) -> datetime:
    return as_local(value, tz).replace(tzinfo=None)


class SnapshotStore:
    """Calendar source backed by a JSON snapshot of events and reminders.

    The snapshot is exported by the platform store; every load or replacement
    bumps :attr:`version` and notifies subscribers so callers know to rebuild
    their grids.
    """

    def __init__(self, path: Optional[Path] = None, *, tz: Optional[tzinfo] = None) -> None:
        self._path = path or SNAPSHOT_FILE
        self._tz = tz
        self._events: List[CalendarEvent] = []
        self._reminders: List[Reminder] = []
        self._version = 0
        self._loaded = False
        self._subscribers: List[ChangeCallback] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def version(self) -> int:
        self._ensure_loaded()
        return self._version

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.reload()

    def reload(self) -> int:
        if not self._path.exists():
            logger.info("Snapshot %s not found, starting empty", self._path)
            payload = EMPTY_SNAPSHOT
        else:
            raw = self._path.read_bytes()
            payload = orjson.loads(raw) if raw.strip() else EMPTY_SNAPSHOT
        events = [CalendarEvent.from_record(record) for record in payload.get("events") or []]
        reminders = [Reminder.from_record(record) for record in payload.get("reminders") or []]
        return self.replace(events, reminders)

    def replace(self, events: Iterable[CalendarEvent], reminders: Iterable[Reminder]) -> int:
        self._events = list(events)
        self._reminders = list(reminders)
        self._loaded = True
        self._version += 1
        logger.debug(
            "Snapshot version %d: %d events, %d reminders",
            self._version,
            len(self._events),
            len(self._reminders),
        )
        for callback in list(self._subscribers):
            callback(self._version)
        return self._version

    def persist(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "events": [event.to_record() for event in self._events],
            "reminders": [reminder.to_record() for reminder in self._reminders],
        }
        self._path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n")

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def fetch_events(
        self,
        start: datetime,
        end: datetime,
        calendar_ids: Optional[Collection[str]] = None,
    ) -> List[CalendarEvent]:
        """Events overlapping ``[start, end)``, optionally limited to some calendars."""

        self._ensure_loaded()
        window_start = _comparable(start, self._tz)
        window_end = _comparable(end, self._tz)
        matched: List[CalendarEvent] = []
        for event in self._events:
            if calendar_ids is not None and event.calendar_id not in calendar_ids:
                continue
            event_start = _comparable(event.start, self._tz)
            event_end = max(_comparable(event.end, self._tz), event_start)
            if event_start < window_end and (event_end > window_start or event_start >= window_start):
                matched.append(event)
        return sorted(matched, key=lambda item: _comparable(item.start, self._tz))

    def fetch_reminders(
        self,
        list_ids: Optional[Collection[str]] = None,
        predicate: Optional[ReminderPredicate] = None,
    ) -> List[Reminder]:
        self._ensure_loaded()
        return [
            reminder
            for reminder in self._reminders
            if (list_ids is None or reminder.list_id in list_ids)
            and (predicate is None or predicate(reminder))
        ]


__all__ = ["CalendarSource", "EMPTY_SNAPSHOT", "SnapshotStore", "incomplete_only"]
