"""
Tests for interval arithmetic helpers.
"""

import pytest

from bookingrules.domain.models import TimeOfDay
from bookingrules.domain.time_math import (
    calculate_appointment_end_time,
    format_time_for_display,
    format_time_slot_range,
    minutes_to_time,
    time_to_minutes,
)


@pytest.mark.parametrize(
    "value, expected",
    [("00:00", 0), ("09:30", 570), ("14:30", 870), ("23:59", 1439)],
)
def test_time_to_minutes(value, expected):
    assert time_to_minutes(value) == expected


def test_minutes_to_time_wraps():
    """Values past 1439 wrap modulo one day."""
    assert minutes_to_time(870) == TimeOfDay(14, 30)
    assert minutes_to_time(1440) == TimeOfDay(0, 0)
    assert minutes_to_time(1530) == TimeOfDay(1, 30)


class TestCalculateAppointmentEndTime:
    """Tests for end time calculation."""

    def test_same_day(self):
        assert str(calculate_appointment_end_time("09:00", 45)) == "09:45"

    def test_crossing_midnight(self):
        """23:00 + 90 minutes wraps to 00:30."""
        assert str(calculate_appointment_end_time("23:00", 90)) == "00:30"

    def test_ending_exactly_at_midnight(self):
        assert str(calculate_appointment_end_time("23:30", 30)) == "00:00"

    def test_accepts_time_of_day(self):
        assert calculate_appointment_end_time(TimeOfDay(10, 15), 60) == TimeOfDay(11, 15)


def test_format_time_slot_range():
    assert format_time_slot_range("09:00", "09:30") == "09:00 - 09:30"
    assert format_time_slot_range(TimeOfDay(13, 0), TimeOfDay(14, 0)) == "13:00 - 14:00"


def test_format_time_for_display_pads():
    assert format_time_for_display("9:05") == "09:05"
