"""
Clock Pro - drift-corrected, timezone-aware clock with a single alarm
"""

from .alarm import Alarm, AlarmTrigger, is_valid_time
from .clock_engine import ClockEngine, ClockState
from .errors import ClockError, InvalidAlarmTimeError, UnknownTimezoneError
from .events import ClockEvent, EventEmitter
from .scheduler import AsyncioTimer, SchedulerState, TickHandle, TickScheduler, TkTimer
from .time_source import SystemTimeSource, ZoneConverter, ZonedFields
from .time_value import HandAngles, TimeValue

__version__ = "2.0.0"

__all__ = [
    "Alarm", "AlarmTrigger", "is_valid_time",
    "ClockEngine", "ClockState",
    "ClockError", "InvalidAlarmTimeError", "UnknownTimezoneError",
    "ClockEvent", "EventEmitter",
    "AsyncioTimer", "SchedulerState", "TickHandle", "TickScheduler", "TkTimer",
    "SystemTimeSource", "ZoneConverter", "ZonedFields",
    "HandAngles", "TimeValue",
]
