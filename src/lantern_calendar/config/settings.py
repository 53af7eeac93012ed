from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, tzinfo
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from ..core.config import LOG_DIR, SNAPSHOT_FILE
from ..core.recurrence import DEFAULT_MAX_ITERATIONS
from ..domain import WeekStartDay

load_dotenv()

logger = logging.getLogger(__name__)


def _host_zone_keys() -> List[str]:
    keys: List[str] = []
    tz_env = (os.getenv("TZ") or "").strip().lstrip(":")
    if tz_env:
        keys.append(tz_env)
    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        target = str(localtime.resolve())
        if "zoneinfo/" in target:
            keys.append(target.split("zoneinfo/", 1)[1])
    timezone_file = Path("/etc/timezone")
    if timezone_file.is_file():
        keys.append(timezone_file.read_text(encoding="utf-8").strip())
    return keys


def host_timezone() -> tzinfo:
    """The host's IANA zone, so that day boundaries follow its DST rules."""

    for key in _host_zone_keys():
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            continue
    logger.warning("Unable to resolve the host timezone name, using its current UTC offset")
    return datetime.now().astimezone().tzinfo


@dataclass(frozen=True)
class EngineSettings:
    timezone: Optional[str]
    week_start: WeekStartDay
    locale: str
    show_alternative_calendar: bool
    recurrence_max_iterations: int

    @property
    def tz(self) -> tzinfo:
        if self.timezone:
            try:
                return ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                logger.warning("Unknown timezone %r, using the host timezone", self.timezone)
        return host_timezone()

    @property
    def first_weekday(self) -> int:
        return self.week_start.first_weekday(self.locale)


@dataclass(frozen=True)
class StoreSettings:
    snapshot_path: Path


@dataclass(frozen=True)
class ApiSettings:
    host: str
    port: int


@dataclass(frozen=True)
class LogSettings:
    level: str
    directory: Path


@dataclass(frozen=True)
class AppSettings:
    engine: EngineSettings
    store: StoreSettings
    api: ApiSettings
    logging: LogSettings


def _bool_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _week_start_from_env(name: str) -> WeekStartDay:
    raw = (os.getenv(name) or "").strip().lower()
    try:
        return WeekStartDay(raw)
    except ValueError:
        return WeekStartDay.SYSTEM


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    engine = EngineSettings(
        timezone=os.getenv("LANTERN_TIMEZONE") or None,
        week_start=_week_start_from_env("LANTERN_WEEK_START"),
        locale=os.getenv("LANTERN_LOCALE", "zh_CN"),
        show_alternative_calendar=_bool_from_env("LANTERN_SHOW_ALTERNATIVE_CALENDAR", True),
        recurrence_max_iterations=max(
            _int_from_env("LANTERN_RECURRENCE_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS), 1
        ),
    )

    store = StoreSettings(
        snapshot_path=Path(os.getenv("LANTERN_SNAPSHOT_PATH") or SNAPSHOT_FILE),
    )

    api = ApiSettings(
        host=os.getenv("LANTERN_API_HOST", "127.0.0.1"),
        port=_int_from_env("LANTERN_API_PORT", 8000),
    )

    log = LogSettings(
        level=os.getenv("LANTERN_LOG_LEVEL", "INFO").upper(),
        directory=Path(os.getenv("LANTERN_LOG_DIR") or LOG_DIR),
    )

    return AppSettings(engine=engine, store=store, api=api, logging=log)
