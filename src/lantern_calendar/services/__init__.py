"""Application services wiring the calendar source into the engine."""

from __future__ import annotations

from .calendar import CalendarService, MonthView
from .context import ServiceContext
from .reminders import ReminderService

__all__ = ["CalendarService", "MonthView", "ReminderService", "ServiceContext"]
