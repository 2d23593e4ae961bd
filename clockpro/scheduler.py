"""
Self-correcting tick scheduler

Every callback re-arms itself for the next wall-clock second boundary
instead of waiting a fixed 1000ms, so the callback's own latency never
piles up across ticks.
"""

import asyncio
import logging
from enum import Enum

from .config import UPDATE_INTERVAL_MS

logger = logging.getLogger(__name__)


# ===================== TIMER PRIMITIVES =====================

class TkTimer:
    """Agenda callbacks no loop do tkinter (after/after_cancel)"""

    def __init__(self, widget):
        self.widget = widget

    def call_later(self, delay_ms, callback):
        return self.widget.after(int(delay_ms), callback)

    def cancel(self, handle):
        self.widget.after_cancel(handle)


class AsyncioTimer:
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop=None):
        self.loop = loop

    def call_later(self, delay_ms, callback):
        loop = self.loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)

    def cancel(self, handle):
        handle.cancel()


# ===================== SCHEDULER =====================

class SchedulerState(Enum):
    STOPPED = "stopped"
    SCHEDULED = "scheduled"
    TICKING = "ticking"


def next_delay_ms(now_ms, interval_ms=UPDATE_INTERVAL_MS):
    """Milliseconds until the next interval boundary, in (0, interval_ms]."""
    return interval_ms - (now_ms % interval_ms)


class TickHandle:
    """Cancels the run that created it, and only that run."""

    def __init__(self, scheduler, token):
        self._scheduler = scheduler
        self._token = token

    @property
    def active(self):
        return self._scheduler.is_current(self._token)

    def cancel(self):
        if self.active:
            self._scheduler.stop()


class TickScheduler:
    """
    State machine STOPPED -> SCHEDULED -> TICKING -> SCHEDULED ...

    Every armed callback carries the token of the run that armed it. stop()
    drops the token, so a callback that still slips through after the
    primitive's cancel is discarded, and a stop() issued from inside
    ``on_fire`` prevents the re-arm.
    """

    def __init__(self, time_source, timer, on_fire, interval_ms=UPDATE_INTERVAL_MS):
        self.time_source = time_source
        self.timer = timer
        self.on_fire = on_fire
        self.interval_ms = interval_ms
        self.state = SchedulerState.STOPPED
        self._token = None
        self._pending = None

    @property
    def running(self):
        return self.state is not SchedulerState.STOPPED

    def is_current(self, token):
        return token is not None and token is self._token

    def start(self):
        if self.running:
            self._cancel_pending()
        token = object()
        self._token = token
        self._arm(token)
        return TickHandle(self, token)

    def stop(self):
        if self.state is SchedulerState.STOPPED:
            return
        self._token = None
        self._cancel_pending()
        self.state = SchedulerState.STOPPED
        logger.debug("Tick scheduler stopped")

    def _arm(self, token):
        delay = next_delay_ms(self.time_source.now_ms(), self.interval_ms)
        self._pending = self.timer.call_later(delay, lambda: self._fire(token))
        self.state = SchedulerState.SCHEDULED
        logger.debug(f"Next tick in {delay}ms")

    def _cancel_pending(self):
        pending, self._pending = self._pending, None
        if pending is not None:
            self.timer.cancel(pending)

    def _fire(self, token):
        if not self.is_current(token) or self.state is not SchedulerState.SCHEDULED:
            return
        self._pending = None
        self.state = SchedulerState.TICKING
        try:
            self.on_fire()
        except Exception:
            logger.exception("Tick callback failed")
        # stop() or a restart during on_fire replaces the token
        if self.is_current(token):
            self._arm(token)
