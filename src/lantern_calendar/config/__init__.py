"""Configuration models and helpers."""

from __future__ import annotations

from .settings import ApiSettings, AppSettings, EngineSettings, LogSettings, StoreSettings, get_settings

__all__ = ["ApiSettings", "AppSettings", "EngineSettings", "LogSettings", "StoreSettings", "get_settings"]
