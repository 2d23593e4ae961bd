"""
Time source and timezone conversion used by the clock engine
"""

import time
from datetime import datetime, timezone
from typing import NamedTuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import LOCAL_TIMEZONE
from .errors import UnknownTimezoneError


class ZonedFields(NamedTuple):
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


class SystemTimeSource:
    """Relógio do sistema em milissegundos"""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class ZoneConverter:
    """Converts epoch milliseconds into wall-clock fields of a zone.

    ``"local"`` means the system's local calendar. Any other id goes through
    ``zoneinfo``; ids the database does not know raise UnknownTimezoneError.
    """

    def __init__(self):
        self._zones = {}

    def convert(self, epoch_ms, zone_id) -> ZonedFields:
        seconds = epoch_ms / 1000
        if zone_id == LOCAL_TIMEZONE:
            moment = datetime.fromtimestamp(seconds)
        else:
            moment = datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone(self.zone(zone_id))
        return ZonedFields(moment.year, moment.month, moment.day,
                           moment.hour, moment.minute, moment.second)

    def zone(self, zone_id) -> ZoneInfo:
        if zone_id not in self._zones:
            try:
                self._zones[zone_id] = ZoneInfo(zone_id)
            except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
                raise UnknownTimezoneError(zone_id) from e
        return self._zones[zone_id]
