"""
Application configuration and constants
"""

import os
from pathlib import Path

# ===================== TIMING =====================

UPDATE_INTERVAL_MS = 1000   # clock cadence
SYNC_INTERVAL_MS = 60000    # drift check window
DRIFT_TOLERANCE_MS = 1500   # one tick plus scheduling jitter

LOCAL_TIMEZONE = "local"

# ===================== STORAGE =====================

STORAGE_KEYS = {
    "theme": "app_theme",
    "time_format": "app_time_format",
    "timezone": "app_timezone",
    "sound_enabled": "app_sound_enabled",
    "alarms": "app_alarms",
}

CONFIG_DIR = Path(os.environ.get("CLOCKPRO_HOME", Path.home() / ".clockpro"))
CONFIG_FILE = CONFIG_DIR / "clock_config.json"

# ===================== TIMEZONES =====================

TIMEZONES = [
    {"id": LOCAL_TIMEZONE, "label": "Local Time"},
    {"id": "America/New_York", "label": "New York (EST/EDT)"},
    {"id": "America/Chicago", "label": "Chicago (CST/CDT)"},
    {"id": "America/Denver", "label": "Denver (MST/MDT)"},
    {"id": "America/Los_Angeles", "label": "Los Angeles (PST/PDT)"},
    {"id": "Europe/London", "label": "London (GMT/BST)"},
    {"id": "Europe/Paris", "label": "Paris (CET/CEST)"},
    {"id": "Asia/Tokyo", "label": "Tokyo (JST)"},
    {"id": "Asia/Shanghai", "label": "Shanghai (CST)"},
    {"id": "Asia/Hong_Kong", "label": "Hong Kong (HKT)"},
    {"id": "Australia/Sydney", "label": "Sydney (AEDT/AEST)"},
    {"id": "Pacific/Auckland", "label": "Auckland (NZDT/NZST)"},
]

# ===================== DEFAULTS =====================

THEMES = ("light", "dark")
TIME_FORMATS = ("12h", "24h")

DEFAULT_THEME = "light"
DEFAULT_TIME_FORMAT = "12h"
DEFAULT_TIMEZONE = LOCAL_TIMEZONE
DEFAULT_SOUND_ENABLED = True
