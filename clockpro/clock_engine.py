"""
ClockEngine - single source of truth for the current time, with drift correction
"""

import logging
from dataclasses import dataclass

from .config import DRIFT_TOLERANCE_MS, LOCAL_TIMEZONE, SYNC_INTERVAL_MS, TIME_FORMATS
from .errors import UnknownTimezoneError
from .events import ClockEvent, EventEmitter
from .scheduler import AsyncioTimer, TickScheduler
from .time_source import SystemTimeSource, ZoneConverter
from .time_value import build_time_value, hand_angles

logger = logging.getLogger(__name__)


@dataclass
class ClockState:
    timezone_id: str = LOCAL_TIMEZONE
    use_24h: bool = False
    drift_correction_ms: int = 0
    last_sync_ms: int = 0


class ClockEngine:
    """Produces one drift-corrected, timezone-aware TimeValue per second.

    Both the time source and the zone converter are injected so tests can
    drive the engine with fakes; the timer is the scheduling primitive the
    tick loop runs on (tkinter ``after`` or an asyncio loop).
    """

    def __init__(self, time_source=None, converter=None, timer=None):
        self.time_source = time_source or SystemTimeSource()
        self.converter = converter or ZoneConverter()
        self.timer = timer
        self.events = EventEmitter()
        self.state = ClockState(last_sync_ms=self.time_source.now_ms())
        self.on_tick = None
        self._scheduler = None
        self._bad_zones = set()

    # --- Settings ---------------------------------------------------------

    def set_timezone(self, zone_id):
        """Accepts "local" or any IANA id; unknown ids degrade to local time on read."""
        self.state.timezone_id = zone_id
        self.events.emit(ClockEvent.TIMEZONE_CHANGED, timezone=zone_id)

    def get_timezone(self):
        return self.state.timezone_id

    def set_format(self, use_24h):
        """Takes a bool or one of "12h"/"24h"; other strings raise ValueError."""
        if isinstance(use_24h, str):
            if use_24h not in TIME_FORMATS:
                raise ValueError(f"Unknown time format {use_24h!r}, expected one of {TIME_FORMATS}")
            use_24h = use_24h == "24h"
        self.state.use_24h = bool(use_24h)
        self.events.emit(ClockEvent.FORMAT_CHANGED, format=self.get_format())

    def get_format(self):
        return "24h" if self.state.use_24h else "12h"

    # --- Time -------------------------------------------------------------

    def now_ms(self):
        return self.time_source.now_ms() + self.state.drift_correction_ms

    def get_time(self):
        return build_time_value(self._zoned_fields(self.now_ms()), self.state.use_24h)

    def get_hand_angles(self, time_value=None):
        return hand_angles(time_value or self.get_time())

    def _zoned_fields(self, epoch_ms):
        zone_id = self.state.timezone_id
        try:
            return self.converter.convert(epoch_ms, zone_id)
        except UnknownTimezoneError:
            if zone_id not in self._bad_zones:
                self._bad_zones.add(zone_id)
                logger.warning(f"Unknown timezone '{zone_id}', showing local time")
            return self.converter.convert(epoch_ms, LOCAL_TIMEZONE)

    # --- Tick loop --------------------------------------------------------

    @property
    def is_running(self):
        return self._scheduler is not None and self._scheduler.running

    @property
    def scheduler_state(self):
        return self._scheduler.state if self._scheduler else None

    def start(self, on_tick=None, timer=None):
        """Starts ticking on each wall-clock second; returns a cancellable TickHandle."""
        if timer is not None:
            self.timer = timer
        if self.timer is None:
            self.timer = AsyncioTimer()
        if self._scheduler is not None:
            self._scheduler.stop()

        self.on_tick = on_tick
        # A long pause between construction and start is not drift
        self.state.last_sync_ms = self.time_source.now_ms()
        self._scheduler = TickScheduler(self.time_source, self.timer, self._on_tick)
        logger.debug(f"Clock started ({self.state.timezone_id}, {self.get_format()})")
        return self._scheduler.start()

    def stop(self):
        if self._scheduler is not None:
            self._scheduler.stop()

    def _on_tick(self):
        self.sync_drift()
        # One snapshot per tick, shared by the callback and the listeners
        time_value = self.get_time()
        if self.on_tick:
            self.on_tick(time_value)
        self.events.emit(ClockEvent.TICK, time=time_value)

    # --- Drift correction -------------------------------------------------

    def sync_drift(self, now_ms=None):
        """
        Compares the wall time elapsed since the last sync with the expected
        sync window and folds the difference into the drift correction.
        Errors within DRIFT_TOLERANCE_MS are dropped on purpose: they are the
        sub-second phase of the checking tick, not clock-source drift.

        Returns True when a sync window closed (the anchor was reset).
        """
        now = self.time_source.now_ms() if now_ms is None else now_ms
        elapsed = now - self.state.last_sync_ms
        if elapsed <= SYNC_INTERVAL_MS:
            return False

        error = SYNC_INTERVAL_MS - elapsed
        if abs(error) > DRIFT_TOLERANCE_MS:
            self.state.drift_correction_ms += error
            logger.info(f"Drift corrected by {error}ms (total {self.state.drift_correction_ms}ms)")
        self.state.last_sync_ms = now
        return True
