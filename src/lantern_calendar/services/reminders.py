from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Collection, Optional

from ..core import ReminderBuckets, classify_reminders
from ..data import CalendarSource, incomplete_only
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReminderService:
    context: ServiceContext
    list_ids: Optional[Collection[str]] = None

    @property
    def source(self) -> CalendarSource:
        return self.context.calendar_source()

    def buckets(self, *, today: Optional[date] = None) -> ReminderBuckets:
        """Classify every incomplete reminder of the visible lists."""

        reminders = self.source.fetch_reminders(self.list_ids, incomplete_only)
        result = classify_reminders(reminders, today=today or self.context.today(), tz=self.context.tz)
        logger.debug("Classified %d incomplete reminders", len(reminders))
        return result
