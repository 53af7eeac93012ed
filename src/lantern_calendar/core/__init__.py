"""Calendar date engine: grid, lunisolar labels, solar terms, holidays, recurrence."""

from .config import APP_NAME, DATA_DIR, LOG_DIR, SNAPSHOT_FILE, SUPPORTED_YEARS
from .aggregator import (
    build_day_cell,
    build_month_grid,
    day_agenda,
    group_events_by_day,
    group_occurrences_by_day,
)
from .grid import build_date_grid, month_bounds
from .holidays import holidays, holidays_for
from .lunisolar import LunarDate, LunisolarRangeError, lunar_date, lunisolar_label, to_lunar
from .recurrence import DEFAULT_MAX_ITERATIONS, expand_recurrence, expand_reminder
from .reminders import ReminderBuckets, classify_reminders, cycle_end, cycle_range
from .solar_terms import solar_term, solar_terms_for_year

__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "DEFAULT_MAX_ITERATIONS",
    "LOG_DIR",
    "LunarDate",
    "LunisolarRangeError",
    "ReminderBuckets",
    "SNAPSHOT_FILE",
    "SUPPORTED_YEARS",
    "build_date_grid",
    "build_day_cell",
    "build_month_grid",
    "classify_reminders",
    "cycle_end",
    "cycle_range",
    "day_agenda",
    "expand_recurrence",
    "expand_reminder",
    "group_events_by_day",
    "group_occurrences_by_day",
    "holidays",
    "holidays_for",
    "lunar_date",
    "lunisolar_label",
    "month_bounds",
    "solar_term",
    "solar_terms_for_year",
    "to_lunar",
]
