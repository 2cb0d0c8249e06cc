"""
Domain models for booking validation and slot generation.

All models are immutable value objects. Times are civil wall-clock times in
the provider's local calendar; nothing here is timezone-aware.
"""

import re
from dataclasses import dataclass
from datetime import date as date_type

import pendulum
from pendulum import Date

MINUTES_PER_DAY = 1440

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A 24h wall-clock time with minute precision.

    Invariant: 0 <= hour <= 23 and 0 <= minute <= 59.
    """
    hour: int
    minute: int = 0

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Minute must be between 0 and 59, got {self.minute}")

    @classmethod
    def parse(cls, value: "str | TimeOfDay") -> "TimeOfDay":
        """
        Parse an ``HH:MM`` string. A trailing ``:SS`` part is accepted and
        ignored, since database time columns usually carry seconds.
        """
        if isinstance(value, TimeOfDay):
            return value

        match = _TIME_PATTERN.match(value.strip())
        if not match:
            raise ValueError(f"Invalid time '{value}', expected HH:MM")

        return cls(hour=int(match.group(1)), minute=int(match.group(2)))

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        """Build a time from minutes since midnight, wrapping past midnight."""
        minutes %= MINUTES_PER_DAY
        return cls(hour=minutes // 60, minute=minutes % 60)

    def to_minutes(self) -> int:
        """Return minutes since midnight (0-1439)."""
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def parse_date(value: "str | date_type") -> Date:
    """
    Convert a ``YYYY-MM-DD`` string or a ``date`` into a civil ``pendulum.Date``.
    """
    if isinstance(value, Date):
        return value
    if isinstance(value, date_type):
        return pendulum.date(value.year, value.month, value.day)
    return pendulum.from_format(value.strip(), "YYYY-MM-DD").date()


def day_of_week(value: date_type) -> int:
    """Return the weekday of a civil date, 0=Sunday .. 6=Saturday."""
    return value.isoweekday() % 7


@dataclass(frozen=True)
class MinuteRange:
    """
    Half-open range ``[start, end)`` in minutes since midnight.

    Back-to-back ranges (one ends exactly where the other starts) do not
    overlap.
    """
    start: int
    end: int

    def overlaps(self, other: "MinuteRange") -> bool:
        """Check if this range overlaps with another."""
        return self.start < other.end and self.end > other.start

    def contains(self, other: "MinuteRange") -> bool:
        """Check if ``other`` lies completely inside this range."""
        return other.start >= self.start and other.end <= self.end


def _coerce_time(value):
    return None if value is None else TimeOfDay.parse(value)


@dataclass(frozen=True)
class Appointment:
    """
    A booked appointment or a candidate booking under evaluation.

    Spans ``[start_time, start_time + duration_minutes)`` on ``date``. The end
    is not wrapped at midnight; checks are scoped to a single date.
    """
    date: Date
    start_time: TimeOfDay
    duration_minutes: int

    def __post_init__(self):
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "start_time", TimeOfDay.parse(self.start_time))
        if self.duration_minutes <= 0:
            raise ValueError(
                f"duration_minutes must be greater than zero, got {self.duration_minutes}"
            )

    def time_range(self) -> MinuteRange:
        start = self.start_time.to_minutes()
        return MinuteRange(start=start, end=start + self.duration_minutes)


@dataclass(frozen=True)
class AvailabilityRule:
    """
    A recurring weekly open window for one day of the week (0=Sunday).

    Several rules may exist for the same day; they are independent
    alternatives and are never merged. ``start_time < end_time`` is not
    checked here.
    """
    day_of_week: int
    start_time: TimeOfDay
    end_time: TimeOfDay

    def __post_init__(self):
        if self.day_of_week not in range(7):
            raise ValueError(f"day_of_week must be between 0 and 6, got {self.day_of_week}")
        object.__setattr__(self, "start_time", TimeOfDay.parse(self.start_time))
        object.__setattr__(self, "end_time", TimeOfDay.parse(self.end_time))

    def time_range(self) -> MinuteRange:
        return MinuteRange(start=self.start_time.to_minutes(), end=self.end_time.to_minutes())


@dataclass(frozen=True)
class BlockedException:
    """
    An ad-hoc block on a specific date (holiday, time off).

    Without a time range the whole date is blocked.
    """
    date: Date
    start_time: TimeOfDay | None = None
    end_time: TimeOfDay | None = None

    def __post_init__(self):
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "start_time", _coerce_time(self.start_time))
        object.__setattr__(self, "end_time", _coerce_time(self.end_time))

    @property
    def is_whole_day(self) -> bool:
        return self.start_time is None or self.end_time is None

    def time_range(self) -> MinuteRange | None:
        if self.is_whole_day:
            return None
        return MinuteRange(start=self.start_time.to_minutes(), end=self.end_time.to_minutes())


@dataclass(frozen=True)
class TimeSlot:
    """
    An offered booking window of exactly the requested duration.
    """
    start_time: TimeOfDay
    end_time: TimeOfDay

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: HH:MM - HH:MM
        """
        return f"{self.start_time} - {self.end_time}"

    def __str__(self) -> str:
        return self.format_display()
