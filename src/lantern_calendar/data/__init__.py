"""Data access layer."""

from __future__ import annotations

from .store import CalendarSource, SnapshotStore, incomplete_only

__all__ = ["CalendarSource", "SnapshotStore", "incomplete_only"]
