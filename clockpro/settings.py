"""
SettingsManager - user preferences (theme, time format, timezone, sound)
"""

import logging

from .config import (
    DEFAULT_SOUND_ENABLED,
    DEFAULT_THEME,
    DEFAULT_TIME_FORMAT,
    DEFAULT_TIMEZONE,
    STORAGE_KEYS,
    THEMES,
    TIME_FORMATS,
)
from .events import ClockEvent, EventEmitter

logger = logging.getLogger(__name__)


class SettingsManager:
    """Gerencia preferências do usuário"""

    def __init__(self, store=None):
        self.store = store
        self.events = EventEmitter()
        self.theme = DEFAULT_THEME
        self.time_format = DEFAULT_TIME_FORMAT
        self.timezone = DEFAULT_TIMEZONE
        self.sound_enabled = DEFAULT_SOUND_ENABLED
        self._load()

    def set_theme(self, theme):
        if theme not in THEMES:
            return
        self.theme = theme
        self._save("theme", theme)
        self.events.emit(ClockEvent.THEME_CHANGED, theme=theme)

    def toggle_theme(self):
        self.set_theme("dark" if self.theme == "light" else "light")

    def set_time_format(self, time_format):
        if time_format not in TIME_FORMATS:
            return
        self.time_format = time_format
        self._save("time_format", time_format)
        self.events.emit(ClockEvent.TIME_FORMAT_CHANGED, format=time_format)

    def toggle_time_format(self):
        self.set_time_format("24h" if self.time_format == "12h" else "12h")

    def set_timezone(self, timezone):
        self.timezone = timezone
        self._save("timezone", timezone)
        self.events.emit(ClockEvent.TIMEZONE_CHANGED, timezone=timezone)

    def set_sound_enabled(self, enabled):
        self.sound_enabled = bool(enabled)
        self._save("sound_enabled", "true" if self.sound_enabled else "false")
        self.events.emit(ClockEvent.SOUND_CHANGED, enabled=self.sound_enabled)

    def toggle_sound(self):
        self.set_sound_enabled(not self.sound_enabled)

    def bind(self, engine):
        """Pushes timezone and format into ``engine`` now and on every later change."""
        engine.set_timezone(self.timezone)
        engine.set_format(self.time_format)
        self.events.on(ClockEvent.TIMEZONE_CHANGED, lambda timezone: engine.set_timezone(timezone))
        self.events.on(ClockEvent.TIME_FORMAT_CHANGED, lambda format: engine.set_format(format))

    # --- Persistence ------------------------------------------------------

    def _load(self):
        if self.store is None:
            return
        try:
            theme = self.store.get(STORAGE_KEYS["theme"])
            if theme in THEMES:
                self.theme = theme

            time_format = self.store.get(STORAGE_KEYS["time_format"])
            if time_format in TIME_FORMATS:
                self.time_format = time_format

            timezone = self.store.get(STORAGE_KEYS["timezone"])
            if timezone:
                self.timezone = timezone

            sound = self.store.get(STORAGE_KEYS["sound_enabled"])
            if sound is not None:
                self.sound_enabled = sound == "true"
        except Exception:
            logger.exception("Failed to load settings")

    def _save(self, name, value):
        """Writes only the preference that changed."""
        if self.store is None:
            return
        try:
            self.store.set(STORAGE_KEYS[name], value)
        except Exception:
            logger.exception(f"Failed to save setting {name}")
