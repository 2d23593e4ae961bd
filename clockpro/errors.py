"""Erros do motor do relógio"""


class ClockError(Exception):
    """Base class for clock engine errors."""


class InvalidAlarmTimeError(ClockError, ValueError):
    """Alarm time is not a valid HH:MM string."""

    def __init__(self, time):
        self.time = time
        super().__init__(f"Invalid time format {time!r}. Expected HH:MM")


class UnknownTimezoneError(ClockError, LookupError):
    """Zone id not found in the timezone database."""

    def __init__(self, zone_id):
        self.zone_id = zone_id
        super().__init__(f"Unknown timezone: {zone_id!r}")
