# leveler/infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "ScheduleLeveler"
HOME_ENV_VAR = "SCHEDULE_LEVELER_HOME"
DB_FILE_NAME = "schedule_leveler.db"


def _platform_data_root() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Directory for the database and logs, created on first use.

    $SCHEDULE_LEVELER_HOME wins when set. Otherwise:
    %APPDATA%\\ScheduleLeveler on Windows,
    ~/Library/Application Support/ScheduleLeveler on macOS,
    $XDG_DATA_HOME/ScheduleLeveler (default ~/.local/share) elsewhere.
    """
    override = os.getenv(HOME_ENV_VAR)
    path = Path(override) if override else _platform_data_root() / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        # read-only or missing profile: fall back to a dot dir in home
        path = Path.home() / f".{APP_NAME}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def default_db_path() -> Path:
    return user_data_dir() / DB_FILE_NAME
