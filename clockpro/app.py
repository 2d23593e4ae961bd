"""
Clock Pro - wiring and command line entry point
"""

import argparse
import asyncio
import logging

from .alarm import AlarmTrigger, is_valid_time
from .clock_engine import ClockEngine
from .config import TIMEZONES, TIME_FORMATS
from .events import ClockEvent
from .notifications import NotificationManager
from .scheduler import AsyncioTimer
from .settings import SettingsManager
from .storage import JsonFileStore, MemoryStore
from .time_source import SystemTimeSource

logger = logging.getLogger(__name__)


class ClockApp:
    """Liga relógio, alarme, preferências e notificações"""

    def __init__(self, store=None, timer=None, time_source=None, converter=None,
                 notifier=None, acknowledge=True):
        self.store = store if store is not None else MemoryStore()
        time_source = time_source or SystemTimeSource()

        # Managers
        self.settings = SettingsManager(self.store)
        self.engine = ClockEngine(time_source, converter, timer)
        self.alarm = AlarmTrigger(self.store, time_source)
        self.notifier = notifier or NotificationManager()
        self.acknowledge = acknowledge
        # (year, month, day, hour, minute) of the occurrence that already fired
        self._fired_key = None

        self.settings.bind(self.engine)
        self.engine.events.on(ClockEvent.TICK, self.check_alarm)
        self.alarm.events.on(ClockEvent.ALARM_SET, lambda alarm: self._forget_fired())
        self.alarm.events.on(ClockEvent.ALARM_CLEARED, self._forget_fired)

    def check_alarm(self, time):
        """Fires the alarm on its matching tick; returns True when it fired."""
        if self.alarm.is_playing or not self.alarm.should_trigger(time):
            return False
        # A drift correction can rewind the clock into a minute that already fired
        key = (time.year, time.month, time.day_of_month, time.raw_hours, time.raw_minutes)
        if key == self._fired_key:
            return False
        self._fired_key = key

        alarm = self.alarm.get_alarm()
        logger.info(f"Alarm fired at {alarm.time}")
        self.alarm.set_playing(True)
        self.notifier.show("Alarm!", alarm.time)
        # The notification is the whole alert; acknowledge right away
        if self.acknowledge:
            self.alarm.set_playing(False)
        return True

    def _forget_fired(self):
        self._fired_key = None

    def start(self, on_tick=None, timer=None):
        return self.engine.start(on_tick, timer=timer)

    def stop(self):
        self.engine.stop()

    async def run(self, duration=None, on_tick=None):
        """Ticks on the running event loop for ``duration`` seconds, or until cancelled."""
        self.start(on_tick, timer=AsyncioTimer(asyncio.get_running_loop()))
        try:
            if duration is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(duration)
        finally:
            self.stop()


# ===================== CLI =====================

def build_parser():
    parser = argparse.ArgumentParser(prog="clockpro", description="Clock Pro - clock and alarm")
    parser.add_argument("--timezone", help='IANA timezone id, or "local"')
    parser.add_argument("--format", choices=TIME_FORMATS, help="time format")
    parser.add_argument("--alarm", metavar="HH:MM", help="set the alarm")
    parser.add_argument("--clear-alarm", action="store_true", help="remove the alarm")
    parser.add_argument("--config", metavar="PATH", help="config file (default ~/.clockpro/clock_config.json)")
    parser.add_argument("--duration", type=float, metavar="SECONDS", help="stop after this many seconds")
    parser.add_argument("--list-timezones", action="store_true", help="print the known timezones and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def print_tick(time):
    print(f"{time.time_text()}  {time.date_text()}", flush=True)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_timezones:
        for tz in TIMEZONES:
            print(f"{tz['id']:<22}{tz['label']}")
        return 0

    if args.alarm is not None and not is_valid_time(args.alarm):
        parser.error(f"invalid alarm time {args.alarm!r}, expected HH:MM")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = ClockApp(store=JsonFileStore(args.config))
    if args.timezone:
        app.settings.set_timezone(args.timezone)
    if args.format:
        app.settings.set_time_format(args.format)
    if args.clear_alarm:
        app.alarm.clear_alarm()
    if args.alarm:
        app.alarm.set_alarm(args.alarm)

    try:
        asyncio.run(app.run(duration=args.duration, on_tick=print_tick))
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0
