from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir, user_log_dir

APP_NAME = "Lantern Calendar"
APP_AUTHOR = "LanternCalendar"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
LOG_DIR = Path(user_log_dir(APP_NAME, APP_AUTHOR))
SNAPSHOT_FILE = DATA_DIR / "snapshot.json"

# Years for which the lunisolar table and solar-term constants are valid.
SUPPORTED_YEARS = (1901, 2100)
