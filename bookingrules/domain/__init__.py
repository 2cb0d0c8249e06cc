"""
Domain layer - Pure business logic without external dependencies.
"""

from .booking_rules import (
    detect_time_slot_conflict,
    is_time_slot_blocked,
    validate_booking,
    validate_not_past_date,
    validate_within_business_hours,
)
from .exceptions import BookingError, BusinessRuleError, ErrorCode, ScheduleDataError
from .models import Appointment, AvailabilityRule, BlockedException, TimeOfDay, TimeSlot
from .slot_calculator import SlotCalculator, calculate_available_time_slots
from .time_math import (
    calculate_appointment_end_time,
    format_time_slot_range,
    minutes_to_time,
    time_to_minutes,
)

__all__ = [
    "Appointment",
    "AvailabilityRule",
    "BlockedException",
    "BookingError",
    "BusinessRuleError",
    "ErrorCode",
    "ScheduleDataError",
    "SlotCalculator",
    "TimeOfDay",
    "TimeSlot",
    "calculate_appointment_end_time",
    "calculate_available_time_slots",
    "detect_time_slot_conflict",
    "format_time_slot_range",
    "is_time_slot_blocked",
    "minutes_to_time",
    "time_to_minutes",
    "validate_booking",
    "validate_not_past_date",
    "validate_within_business_hours",
]
