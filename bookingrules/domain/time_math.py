"""
Interval arithmetic primitives shared by the validators and the slot generator.
"""

from .models import MINUTES_PER_DAY, TimeOfDay


def time_to_minutes(value: "str | TimeOfDay") -> int:
    """
    Convert an ``HH:MM`` time to minutes since midnight.

    Example: "14:30" -> 870
    """
    return TimeOfDay.parse(value).to_minutes()


def minutes_to_time(minutes: int) -> TimeOfDay:
    """
    Convert minutes since midnight to a time, wrapping at 24h.

    Example: 870 -> 14:30, 1470 -> 00:30
    """
    return TimeOfDay.from_minutes(minutes)


def calculate_appointment_end_time(start_time: "str | TimeOfDay", duration_minutes: int) -> TimeOfDay:
    """
    Calculate the end time of an appointment for display.

    Appointments crossing midnight wrap around: 23:00 + 90 min -> 00:30.
    """
    return minutes_to_time((time_to_minutes(start_time) + duration_minutes) % MINUTES_PER_DAY)


def format_time_for_display(value: "str | TimeOfDay") -> str:
    return str(TimeOfDay.parse(value))


def format_time_slot_range(start_time: "str | TimeOfDay", end_time: "str | TimeOfDay") -> str:
    """Format a slot range as ``"HH:MM - HH:MM"``."""
    return f"{format_time_for_display(start_time)} - {format_time_for_display(end_time)}"
