"""
TimeValue - immutable snapshot of the clock for a single tick
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTH_NAMES = ("January", "February", "March", "April", "May", "June",
               "July", "August", "September", "October", "November", "December")


@dataclass(frozen=True)
class TimeValue:
    """Wall-clock fields for one tick.

    ``raw_hours`` is always 0-23, whatever the display format; alarm matching
    and hand angles use it. ``display_hours`` is what a 12h/24h face shows.
    """
    raw_hours: int
    raw_minutes: int
    raw_seconds: int
    display_hours: int
    period: Optional[str]
    day_name: str
    month_name: str
    day_of_month: int
    month: int
    year: int

    @property
    def hours(self) -> str:
        return f"{self.display_hours:02d}"

    @property
    def minutes(self) -> str:
        return f"{self.raw_minutes:02d}"

    @property
    def seconds(self) -> str:
        return f"{self.raw_seconds:02d}"

    def time_text(self) -> str:
        text = f"{self.hours}:{self.minutes}:{self.seconds}"
        if self.period:
            text += f" {self.period}"
        return text

    def date_text(self) -> str:
        return f"{self.day_name}, {self.month_name} {self.day_of_month}, {self.year}"


@dataclass(frozen=True)
class HandAngles:
    hour: float
    minute: float
    second: float


def build_time_value(fields, use_24h=False) -> TimeValue:
    """Builds a TimeValue from zone-converted calendar fields.

    ``fields`` carries year, month, day, hour, minute and second as already
    converted into the target zone; the weekday comes from a naive date
    rebuilt from them.
    """
    hours = fields.hour
    if use_24h:
        period = None
        display_hours = hours
    else:
        period = "PM" if hours >= 12 else "AM"
        display_hours = hours % 12 or 12  # midnight and noon show as 12

    day = date(fields.year, fields.month, fields.day)
    return TimeValue(
        raw_hours=hours,
        raw_minutes=fields.minute,
        raw_seconds=fields.second,
        display_hours=display_hours,
        period=period,
        day_name=DAY_NAMES[day.weekday()],
        month_name=MONTH_NAMES[day.month - 1],
        day_of_month=day.day,
        month=day.month,
        year=day.year,
    )


def hand_angles(time_value: TimeValue) -> HandAngles:
    """Analog hand angles in degrees, each in [0, 360)."""
    seconds = time_value.raw_seconds
    minutes = time_value.raw_minutes
    # 0-23 reduced mod 12: one sweep per 12 hours in both display formats
    hours = time_value.raw_hours % 12

    return HandAngles(
        hour=(hours / 12) * 360 + (minutes / 60) * 30,
        minute=(minutes / 60) * 360 + (seconds / 60) * 6,
        second=(seconds / 60) * 360,
    )
