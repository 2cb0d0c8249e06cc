"""
Tests for booking validation rules.
"""

import pytest

from bookingrules.domain.booking_rules import (
    detect_time_slot_conflict,
    is_time_slot_blocked,
    validate_booking,
    validate_not_past_date,
    validate_within_business_hours,
)
from bookingrules.domain.exceptions import BusinessRuleError, ErrorCode
from bookingrules.domain.models import Appointment, AvailabilityRule, BlockedException

MONDAY = "2026-01-19"
TUESDAY = "2026-01-20"
TODAY = "2026-01-10"


def _appt(date: str, time: str, duration: int) -> Appointment:
    return Appointment(date=date, start_time=time, duration_minutes=duration)


class TestValidateNotPastDate:
    """Tests for the past-date guard."""

    def test_past_date_raises_error(self):
        with pytest.raises(BusinessRuleError) as exc_info:
            validate_not_past_date("2026-01-09", today=TODAY)

        assert exc_info.value.code == ErrorCode.BOOKING_PAST_DATE

    def test_today_is_bookable(self):
        validate_not_past_date(TODAY, today=TODAY)

    def test_future_date_is_bookable(self):
        validate_not_past_date("2030-12-31", today=TODAY)


class TestDetectTimeSlotConflict:
    """Tests for conflict detection against booked appointments."""

    existing = [
        _appt(MONDAY, "10:00", 60),
        _appt(MONDAY, "14:00", 30),
        _appt(TUESDAY, "10:00", 45),
    ]

    @pytest.mark.parametrize(
        "time, duration",
        [
            ("10:00", 30),  # exact start
            ("10:30", 45),  # starts inside, ends after
            ("09:30", 45),  # starts before, ends inside
            ("09:00", 180),  # swallows the appointment
            ("14:10", 10),  # fully inside
        ],
    )
    def test_detects_overlap(self, time, duration):
        assert detect_time_slot_conflict(_appt(MONDAY, time, duration), self.existing)

    def test_back_to_back_is_not_a_conflict(self):
        """Half-open intervals: touching ends do not overlap."""
        assert not detect_time_slot_conflict(_appt(MONDAY, "11:00", 30), self.existing)
        assert not detect_time_slot_conflict(_appt(MONDAY, "09:00", 60), self.existing)
        assert not detect_time_slot_conflict(_appt(MONDAY, "13:30", 30), self.existing)

    def test_other_dates_are_ignored(self):
        assert not detect_time_slot_conflict(_appt("2026-01-21", "10:00", 60), self.existing)

    def test_no_existing_appointments(self):
        assert not detect_time_slot_conflict(_appt(MONDAY, "10:00", 60), [])


class TestValidateWithinBusinessHours:
    """Tests for business-hours containment."""

    rules = [
        AvailabilityRule(day_of_week=1, start_time="09:00", end_time="12:00"),
        AvailabilityRule(day_of_week=1, start_time="12:00", end_time="15:00"),
    ]

    def test_inside_a_rule(self):
        validate_within_business_hours(_appt(MONDAY, "09:00", 180), self.rules)
        validate_within_business_hours(_appt(MONDAY, "12:00", 60), self.rules)

    def test_overrunning_rule_end(self):
        """11:30-12:30 against a single 09:00-12:00 rule is rejected."""
        rules = [AvailabilityRule(day_of_week=1, start_time="09:00", end_time="12:00")]

        with pytest.raises(BusinessRuleError) as exc_info:
            validate_within_business_hours(_appt(MONDAY, "11:30", 60), rules)

        assert exc_info.value.code == ErrorCode.BOOKING_OUTSIDE_BUSINESS_HOURS

    def test_straddling_adjacent_rules_is_rejected(self):
        """Rules are alternatives; they are never merged."""
        with pytest.raises(BusinessRuleError) as exc_info:
            validate_within_business_hours(_appt(MONDAY, "11:30", 60), self.rules)

        assert exc_info.value.code == ErrorCode.BOOKING_OUTSIDE_BUSINESS_HOURS

    def test_day_without_rules(self):
        with pytest.raises(BusinessRuleError) as exc_info:
            validate_within_business_hours(_appt(TUESDAY, "10:00", 30), self.rules)

        assert exc_info.value.code == ErrorCode.BOOKING_OUTSIDE_BUSINESS_HOURS

    def test_before_opening(self):
        with pytest.raises(BusinessRuleError):
            validate_within_business_hours(_appt(MONDAY, "08:30", 60), self.rules)


class TestIsTimeSlotBlocked:
    """Tests for blocked exceptions."""

    def test_whole_day_exception_blocks_any_time(self):
        exceptions = [BlockedException(date=MONDAY)]

        assert is_time_slot_blocked(_appt(MONDAY, "00:00", 15), exceptions)
        assert is_time_slot_blocked(_appt(MONDAY, "23:00", 60), exceptions)
        assert not is_time_slot_blocked(_appt(TUESDAY, "10:00", 30), exceptions)

    def test_ranged_exception_blocks_overlaps_only(self):
        exceptions = [BlockedException(date=MONDAY, start_time="11:00", end_time="11:30")]

        assert is_time_slot_blocked(_appt(MONDAY, "11:00", 30), exceptions)
        assert is_time_slot_blocked(_appt(MONDAY, "10:45", 30), exceptions)
        assert not is_time_slot_blocked(_appt(MONDAY, "10:30", 30), exceptions)
        assert not is_time_slot_blocked(_appt(MONDAY, "11:30", 30), exceptions)

    def test_no_exceptions(self):
        assert not is_time_slot_blocked(_appt(MONDAY, "10:00", 30), [])


class TestValidateBooking:
    """Tests for the composite validator and its ordering."""

    rules = [AvailabilityRule(day_of_week=1, start_time="09:00", end_time="12:00")]
    existing = [_appt(MONDAY, "10:00", 30)]
    exceptions = [BlockedException(date=MONDAY, start_time="11:00", end_time="11:30")]

    def _validate(self, candidate, today=TODAY):
        validate_booking(candidate, self.rules, self.existing, self.exceptions, today=today)

    def test_valid_booking(self):
        self._validate(_appt(MONDAY, "09:00", 60))

    def test_past_date_checked_first(self):
        with pytest.raises(BusinessRuleError) as exc_info:
            self._validate(_appt(MONDAY, "10:00", 30), today="2026-01-20")

        assert exc_info.value.code == ErrorCode.BOOKING_PAST_DATE

    def test_conflict_checked_before_business_hours(self):
        """A conflicting booking that also overruns hours reports the conflict."""
        with pytest.raises(BusinessRuleError) as exc_info:
            self._validate(_appt(MONDAY, "10:00", 180))

        assert exc_info.value.code == ErrorCode.BOOKING_TIME_CONFLICT

    def test_outside_business_hours(self):
        with pytest.raises(BusinessRuleError) as exc_info:
            self._validate(_appt(MONDAY, "11:45", 30))

        assert exc_info.value.code == ErrorCode.BOOKING_OUTSIDE_BUSINESS_HOURS

    def test_blocked_slot(self):
        with pytest.raises(BusinessRuleError) as exc_info:
            self._validate(_appt(MONDAY, "11:00", 30))

        assert exc_info.value.code == ErrorCode.BOOKING_SLOT_UNAVAILABLE
