from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Optional

from ..config import AppSettings, get_settings
from ..data import CalendarSource, SnapshotStore


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings and the calendar source."""

    settings: AppSettings = field(default_factory=get_settings)
    source: Optional[CalendarSource] = None
    tz: tzinfo = field(init=False)

    def __post_init__(self) -> None:
        self.tz = self.settings.engine.tz
        if self.source is None:
            self.source = SnapshotStore(self.settings.store.snapshot_path, tz=self.tz)

    def calendar_source(self) -> CalendarSource:
        if self.source is None:
            raise RuntimeError("Service context has no calendar source")
        return self.source

    def today(self) -> date:
        return datetime.now(self.tz).date()
