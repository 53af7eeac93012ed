from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Optional

from ..core import ReminderBuckets
from ..domain import CalendarDayCell
from .models import DayCellPayload, ReminderBucketsPayload


def serialize_cell(cell: CalendarDayCell, *, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    return DayCellPayload.from_domain(cell, tz=tz).model_dump()


def serialize_buckets(buckets: ReminderBuckets, *, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    return ReminderBucketsPayload.from_domain(buckets, tz=tz).model_dump()
