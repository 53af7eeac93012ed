from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Collection, List, Optional

from ..core import (
    build_month_grid,
    day_agenda,
    expand_reminder,
    group_events_by_day,
    group_occurrences_by_day,
)
from ..core.aggregator import AgendaItem
from ..core.grid import build_date_grid
from ..domain import CalendarDayCell, RecurrenceOccurrence, WeekStartDay
from ..data import CalendarSource, incomplete_only
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MonthView:
    reference: date
    first_weekday: int
    version: int
    cells: tuple[CalendarDayCell, ...]

    @property
    def start(self) -> date:
        return self.cells[0].date

    @property
    def end(self) -> date:
        return self.cells[-1].date

    def cell_for(self, day: date) -> Optional[CalendarDayCell]:
        for cell in self.cells:
            if cell.date == day:
                return cell
        return None


@dataclass(slots=True)
class CalendarService:
    """Pull-based pipeline from the calendar source to month grids."""

    context: ServiceContext
    calendar_ids: Optional[Collection[str]] = None
    list_ids: Optional[Collection[str]] = None
    _last_view: Optional[MonthView] = field(default=None, init=False)

    @property
    def source(self) -> CalendarSource:
        return self.context.calendar_source()

    def resolve_first_weekday(self, week_start: Optional[WeekStartDay] = None) -> int:
        engine = self.context.settings.engine
        if week_start is None:
            return engine.first_weekday
        return week_start.first_weekday(engine.locale)

    def occurrences_between(
        self,
        start: date,
        end: date,
        *,
        today: Optional[date] = None,
    ) -> List[RecurrenceOccurrence]:
        today = today or self.context.today()
        max_iterations = self.context.settings.engine.recurrence_max_iterations
        occurrences: List[RecurrenceOccurrence] = []
        for reminder in self.source.fetch_reminders(self.list_ids, incomplete_only):
            occurrences.extend(
                expand_reminder(
                    reminder,
                    start,
                    end,
                    tz=self.context.tz,
                    today=today,
                    max_iterations=max_iterations,
                )
            )
        return sorted(occurrences, key=lambda item: (item.occurs_on, item.due.replace(tzinfo=None)))

    def load_month(
        self,
        reference: date,
        *,
        week_start: Optional[WeekStartDay] = None,
        today: Optional[date] = None,
    ) -> MonthView:
        return self._build(reference, self.resolve_first_weekday(week_start), today)

    def _build(self, reference: date, first_weekday: int, today: Optional[date]) -> MonthView:
        version = self.source.version
        dates = build_date_grid(reference, first_weekday)
        tz = self.context.tz

        window_start = datetime.combine(dates[0], time(), tzinfo=tz)
        window_end = datetime.combine(dates[-1], time(), tzinfo=tz) + timedelta(days=1)
        events = self.source.fetch_events(window_start, window_end, self.calendar_ids)
        occurrences = self.occurrences_between(dates[0], dates[-1], today=today)

        cells = build_month_grid(
            reference,
            first_weekday,
            group_events_by_day(events, tz),
            group_occurrences_by_day(occurrences),
            show_alternative_calendar=self.context.settings.engine.show_alternative_calendar,
        )
        logger.info(
            "Loaded %04d-%02d: %d events, %d reminder occurrences (source version %d)",
            reference.year,
            reference.month,
            len(events),
            len(occurrences),
            version,
        )
        view = MonthView(reference=reference, first_weekday=first_weekday, version=version, cells=tuple(cells))
        self._last_view = view
        return view

    def refresh_if_stale(self, *, today: Optional[date] = None) -> Optional[MonthView]:
        """Rebuild the last loaded month when the source changed since."""

        view = self._last_view
        if view is None:
            return None
        if view.version == self.source.version:
            return view
        return self._build(view.reference, view.first_weekday, today)

    def agenda_for(self, day: date, *, today: Optional[date] = None) -> List[AgendaItem]:
        view = self.refresh_if_stale(today=today)
        cell = view.cell_for(day) if view is not None else None
        if cell is None:
            cell = self.load_month(day, today=today).cell_for(day)
        if cell is None:
            raise RuntimeError(f"No grid cell for {day.isoformat()}")
        return day_agenda(cell, self.context.tz)

