import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clockpro.errors import UnknownTimezoneError
from clockpro.time_source import ZonedFields

OFFSETS = {"local": 0, "UTC": 0, "Test/Plus9": 9, "Test/Minus5": -5}


def epoch_ms(*args):
    """epoch_ms(2024, 1, 1, 7, 30) -> milliseconds for that UTC wall time."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


class FakeTimeSource:
    def __init__(self, now=0):
        self.now = now

    def now_ms(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FakeConverter:
    """Fixed-offset zones; "local" is UTC so results do not depend on the host."""

    def convert(self, epoch_ms, zone_id):
        if zone_id not in OFFSETS:
            raise UnknownTimezoneError(zone_id)
        moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc) + timedelta(hours=OFFSETS[zone_id])
        return ZonedFields(moment.year, moment.month, moment.day, moment.hour, moment.minute, moment.second)


class ManualTimer:
    """Records call_later requests; tests fire them one at a time."""

    def __init__(self, time_source=None):
        self.time_source = time_source
        self.pending = []
        self.cancelled = []
        self._next_id = 0

    def call_later(self, delay_ms, callback):
        self._next_id += 1
        self.pending.append((self._next_id, delay_ms, callback))
        return self._next_id

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.pending = [p for p in self.pending if p[0] != handle]

    def fire_next(self, late_ms=0):
        """Advances the fake clock by the requested delay (plus lateness) and fires."""
        _, delay_ms, callback = self.pending.pop(0)
        if self.time_source is not None:
            self.time_source.advance(delay_ms + late_ms)
        callback()
        return delay_ms


class FakeNotifier:
    def __init__(self):
        self.shown = []

    def show(self, title, message):
        self.shown.append((title, message))
        return True


@pytest.fixture
def time_source():
    return FakeTimeSource(epoch_ms(2024, 1, 1, 0, 0, 0))


@pytest.fixture
def timer(time_source):
    return ManualTimer(time_source)


@pytest.fixture
def converter():
    return FakeConverter()
