"""
Event registry shared by the clock engine, the alarm trigger and the settings.

Each component owns its own EventEmitter; there is no global dispatch.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ClockEvent(str, Enum):
    TICK = "tick"
    TIMEZONE_CHANGED = "timezone_changed"
    FORMAT_CHANGED = "format_changed"
    ALARM_SET = "alarm_set"
    ALARM_CLEARED = "alarm_cleared"
    ALARM_TOGGLED = "alarm_toggled"
    ALARM_PLAYING_CHANGED = "alarm_playing_changed"
    THEME_CHANGED = "theme_changed"
    TIME_FORMAT_CHANGED = "time_format_changed"
    SOUND_CHANGED = "sound_changed"


class EventEmitter:
    """Registro de listeners por evento"""

    def __init__(self):
        self._listeners = {}

    def on(self, event, listener):
        """Registers ``listener`` and returns it, so it can be used as a decorator."""
        event = ClockEvent(event)
        self._listeners.setdefault(event, []).append(listener)
        return listener

    def off(self, event, listener):
        listeners = self._listeners.get(ClockEvent(event), [])
        if listener in listeners:
            listeners.remove(listener)

    def listeners(self, event):
        return list(self._listeners.get(ClockEvent(event), []))

    def emit(self, event, **detail):
        """Calls every listener synchronously with ``detail`` as keyword arguments."""
        event = ClockEvent(event)
        # Copy so a listener may unsubscribe itself while we iterate
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(**detail)
            except Exception:
                logger.exception(f"Listener {listener!r} failed on {event.value}")
