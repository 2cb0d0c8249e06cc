"""
Business rules for validating a proposed booking.

Pure functions over in-memory collections: no I/O, no clock, no shared state.
Validators raise ``BusinessRuleError`` on the first violated rule; the
``detect_*``/``is_*`` helpers only answer yes or no.
"""

from datetime import date as date_type
from typing import Iterable, List

from .exceptions import BusinessRuleError, ErrorCode
from .models import Appointment, AvailabilityRule, BlockedException, day_of_week, parse_date


def validate_not_past_date(appointment_date: "str | date_type", today: "str | date_type") -> None:
    """
    Reject bookings on dates before ``today``.

    Only civil dates are compared, so today itself is always bookable.

    Raises:
        BusinessRuleError: BOOKING_PAST_DATE
    """
    if parse_date(appointment_date) < parse_date(today):
        raise BusinessRuleError(ErrorCode.BOOKING_PAST_DATE)


def detect_time_slot_conflict(
    candidate: Appointment,
    existing_appointments: Iterable[Appointment]
) -> bool:
    """
    Check whether the candidate overlaps any existing appointment on its date.

    Intervals are half-open, so back-to-back appointments do not conflict.
    Returns on the first overlap found.
    """
    candidate_range = candidate.time_range()

    for existing in existing_appointments:
        if existing.date != candidate.date:
            continue

        if candidate_range.overlaps(existing.time_range()):
            return True

    return False


def rules_for_date(
    appointment_date: date_type,
    availability: Iterable[AvailabilityRule]
) -> List[AvailabilityRule]:
    """Return the rules that apply to the weekday of ``appointment_date``, in order."""
    weekday = day_of_week(appointment_date)
    return [rule for rule in availability if rule.day_of_week == weekday]


def validate_within_business_hours(
    candidate: Appointment,
    availability: Iterable[AvailabilityRule]
) -> None:
    """
    Require the candidate to fit entirely inside one availability rule.

    Rules are alternatives: a candidate spanning two adjacent rules is
    rejected even if together they would cover it.

    Raises:
        BusinessRuleError: BOOKING_OUTSIDE_BUSINESS_HOURS
    """
    day_rules = rules_for_date(candidate.date, availability)

    if not day_rules:
        raise BusinessRuleError(
            ErrorCode.BOOKING_OUTSIDE_BUSINESS_HOURS,
            "No business hours on this day of the week",
        )

    candidate_range = candidate.time_range()
    fits_in_rule = any(rule.time_range().contains(candidate_range) for rule in day_rules)

    if not fits_in_rule:
        raise BusinessRuleError(ErrorCode.BOOKING_OUTSIDE_BUSINESS_HOURS)


def is_time_slot_blocked(
    candidate: Appointment,
    blocked_exceptions: Iterable[BlockedException]
) -> bool:
    """
    Check whether a blocked exception covers the candidate.

    A whole-day exception blocks every time on its date; a ranged exception
    blocks only overlapping candidates.
    """
    candidate_range = candidate.time_range()

    for exception in blocked_exceptions:
        if exception.date != candidate.date:
            continue

        if exception.is_whole_day:
            return True

        if candidate_range.overlaps(exception.time_range()):
            return True

    return False


def validate_booking(
    candidate: Appointment,
    availability: Iterable[AvailabilityRule],
    existing_appointments: Iterable[Appointment],
    blocked_exceptions: Iterable[BlockedException],
    today: "str | date_type",
) -> None:
    """
    Run every booking rule in order and fail on the first violation.

    Order: past date, conflict, business hours, blocked exception.

    Raises:
        BusinessRuleError: with the code of the first violated rule
    """
    validate_not_past_date(candidate.date, today)

    if detect_time_slot_conflict(candidate, existing_appointments):
        raise BusinessRuleError(ErrorCode.BOOKING_TIME_CONFLICT)

    validate_within_business_hours(candidate, availability)

    if is_time_slot_blocked(candidate, blocked_exceptions):
        raise BusinessRuleError(ErrorCode.BOOKING_SLOT_UNAVAILABLE)
