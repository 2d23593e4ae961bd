"""
AlarmTrigger - single alarm definition, validation and edge-triggered matching
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from .config import STORAGE_KEYS
from .errors import InvalidAlarmTimeError
from .events import ClockEvent, EventEmitter
from .time_source import SystemTimeSource

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")


def is_valid_time(text):
    """True for "HH:MM" strings between 00:00 and 23:59."""
    return isinstance(text, str) and TIME_PATTERN.fullmatch(text) is not None


@dataclass
class Alarm:
    id: int
    time: str
    enabled: bool = True
    created_at: str = ""

    @property
    def hours(self):
        return int(self.time[:2])

    @property
    def minutes(self):
        return int(self.time[3:])

    def to_dict(self):
        return {"id": self.id, "time": self.time, "enabled": self.enabled, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data):
        if not is_valid_time(data.get("time")):
            raise InvalidAlarmTimeError(data.get("time"))
        return cls(
            id=data.get("id"),
            time=data["time"],
            enabled=bool(data.get("enabled", True)),
            created_at=data.get("createdAt", ""),
        )


class AlarmTrigger:
    """Gerencia o alarme (apenas um por vez)"""

    def __init__(self, store=None, time_source=None):
        self.store = store
        self.time_source = time_source or SystemTimeSource()
        self.events = EventEmitter()
        self.alarm = None
        self.is_playing = False
        self._load()

    def set_alarm(self, time, enabled=True):
        """Replaces any existing alarm. Raises InvalidAlarmTimeError before touching state."""
        if not is_valid_time(time):
            raise InvalidAlarmTimeError(time)

        now = self.time_source.now_ms()
        self.alarm = Alarm(
            id=now,
            time=time,
            enabled=bool(enabled),
            created_at=datetime.fromtimestamp(now / 1000, tz=timezone.utc).isoformat(),
        )
        self._save()
        logger.info(f"Alarm set for {time} ({'enabled' if self.alarm.enabled else 'disabled'})")
        self.events.emit(ClockEvent.ALARM_SET, alarm=self.alarm)
        return self.alarm

    def get_alarm(self):
        return self.alarm

    def should_trigger(self, time_value):
        """
        True only on the tick where the alarm minute starts (seconds == 0),
        so it fires once per matching minute instead of on all sixty ticks.
        """
        alarm = self.alarm
        if alarm is None or not alarm.enabled:
            return False
        return (time_value.raw_hours == alarm.hours
                and time_value.raw_minutes == alarm.minutes
                and time_value.raw_seconds == 0)

    def clear_alarm(self):
        self.alarm = None
        self.is_playing = False
        self._save()
        logger.info("Alarm cleared")
        self.events.emit(ClockEvent.ALARM_CLEARED)

    def toggle_alarm(self, enabled):
        if self.alarm is None:
            return
        self.alarm.enabled = bool(enabled)
        self._save()
        self.events.emit(ClockEvent.ALARM_TOGGLED, enabled=self.alarm.enabled)

    def set_playing(self, playing):
        self.is_playing = bool(playing)
        self.events.emit(ClockEvent.ALARM_PLAYING_CHANGED, playing=self.is_playing)

    # --- Persistence ------------------------------------------------------

    def _load(self):
        if self.store is None:
            return
        try:
            stored = self.store.get(STORAGE_KEYS["alarms"])
            if stored:
                self.alarm = Alarm.from_dict(json.loads(stored))
        except (ValueError, TypeError, AttributeError, KeyError) as e:
            logger.warning(f"Ignoring stored alarm: {e}")

    def _save(self):
        if self.store is None:
            return
        try:
            if self.alarm:
                self.store.set(STORAGE_KEYS["alarms"], json.dumps(self.alarm.to_dict()))
            else:
                self.store.remove(STORAGE_KEYS["alarms"])
        except Exception:
            logger.exception("Failed to save alarm")
