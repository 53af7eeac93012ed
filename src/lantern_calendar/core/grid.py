from __future__ import annotations

import calendar
import logging
from datetime import date, timedelta
from typing import List, Optional

logger = logging.getLogger(__name__)


def _shift(day: date, days: int) -> Optional[date]:
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return None


def month_bounds(reference: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``reference``."""

    length = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=length)


def lead_in_days(first_of_month: date, first_weekday: int) -> int:
    return (first_of_month.weekday() - first_weekday + 7) % 7


def build_date_grid(reference: date, first_weekday: int = 0) -> List[date]:
    """Build the dates of a month view whose rows start on ``first_weekday``.

    ``first_weekday`` follows ``date.weekday()`` (Monday=0 .. Sunday=6). The
    result holds the lead-in days of the previous month, every day of the
    target month and the trailing days of the next month, so that its length
    is always a multiple of seven.
    """

    first_weekday %= 7
    first, last = month_bounds(reference)

    grid: List[date] = []
    for back in range(lead_in_days(first, first_weekday), 0, -1):
        previous = _shift(first, -back)
        if previous is not None:
            grid.append(previous)

    grid.extend(first + timedelta(days=index) for index in range(last.day))

    missing = (7 - len(grid) % 7) % 7
    step = 1
    while missing and (following := _shift(last, step)) is not None:
        grid.append(following)
        step += 1
        missing -= 1

    # At the edges of the representable range fill from the other side.
    while len(grid) % 7:
        earlier = _shift(grid[0], -1)
        if earlier is None:
            logger.warning("Unable to pad month grid for %s", reference.isoformat())
            break
        grid.insert(0, earlier)

    logger.debug(
        "Built grid for %04d-%02d: %s .. %s (%d days)",
        reference.year,
        reference.month,
        grid[0].isoformat(),
        grid[-1].isoformat(),
        len(grid),
    )
    return grid
