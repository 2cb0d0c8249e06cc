"""
Domain-specific exception hierarchy for the booking rules engine.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable, machine-readable codes for business-rule violations."""

    BOOKING_PAST_DATE = "BOOKING_PAST_DATE"
    BOOKING_TIME_CONFLICT = "BOOKING_TIME_CONFLICT"
    BOOKING_OUTSIDE_BUSINESS_HOURS = "BOOKING_OUTSIDE_BUSINESS_HOURS"
    BOOKING_SLOT_UNAVAILABLE = "BOOKING_SLOT_UNAVAILABLE"


# Shown to end users; never include technical details here.
ERROR_MESSAGES = {
    ErrorCode.BOOKING_PAST_DATE: "Appointments cannot be booked on past dates",
    ErrorCode.BOOKING_TIME_CONFLICT: "This time is already taken",
    ErrorCode.BOOKING_OUTSIDE_BUSINESS_HOURS: "This time is outside business hours",
    ErrorCode.BOOKING_SLOT_UNAVAILABLE: "This time is unavailable",
}


def user_message(code: ErrorCode) -> str:
    """Return the user-facing message for an error code."""
    return ERROR_MESSAGES[ErrorCode(code)]


class BookingError(Exception):
    """Base class for all application-level errors."""


class BusinessRuleError(BookingError):
    """
    Raised when a proposed booking violates a business rule.

    Identical inputs always produce the same verdict, so these are never
    retried.
    """

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = ErrorCode(code)
        self.message = message or user_message(self.code)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class ScheduleDataError(BookingError):
    """Raised when schedule data cannot be read or parsed."""
