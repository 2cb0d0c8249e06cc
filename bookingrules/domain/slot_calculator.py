"""
Core business logic for calculating available booking slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

from datetime import date as date_type
from typing import Iterable, Iterator, List

from .booking_rules import detect_time_slot_conflict, is_time_slot_blocked, rules_for_date
from .models import Appointment, AvailabilityRule, BlockedException, TimeSlot, parse_date
from .time_math import minutes_to_time


class SlotCalculator:
    """
    Enumerates bookable slots for one date.

    Algorithm:
    1. Select the availability rules for the date's weekday
    2. For each rule, in the given order, step from the rule start by
       ``interval_minutes`` while a slot of the service duration still fits
    3. Keep a slot only if it conflicts with no appointment and no blocked
       exception covers it

    Rules are not merged or sorted, so overlapping rules may yield duplicate
    slots. Callers that need a unique, sorted list must post-process.
    """

    def __init__(self, interval_minutes: int = 30):
        if interval_minutes <= 0:
            raise ValueError("interval_minutes must be greater than zero")
        self.interval_minutes = interval_minutes

    def iter_available_slots(
        self,
        date: "str | date_type",
        service_duration_minutes: int,
        availability: Iterable[AvailabilityRule],
        existing_appointments: Iterable[Appointment],
        blocked_exceptions: Iterable[BlockedException]
    ) -> Iterator[TimeSlot]:
        """
        Lazily yield available slots in rule order, then chronologically.

        Calling again restarts the enumeration from the beginning.
        """
        if service_duration_minutes <= 0:
            raise ValueError("service_duration_minutes must be greater than zero")

        slot_date = parse_date(date)
        appointments = list(existing_appointments)
        exceptions = list(blocked_exceptions)

        return self._generate(
            slot_date,
            service_duration_minutes,
            rules_for_date(slot_date, availability),
            appointments,
            exceptions,
        )

    def find_available_slots(
        self,
        date: "str | date_type",
        service_duration_minutes: int,
        availability: Iterable[AvailabilityRule],
        existing_appointments: Iterable[Appointment],
        blocked_exceptions: Iterable[BlockedException]
    ) -> List[TimeSlot]:
        """
        Find all available slots for a date.

        Args:
            date: The civil date to enumerate
            service_duration_minutes: Length of every offered slot
            availability: Weekly availability rules
            existing_appointments: Already booked, non-cancelled appointments
            blocked_exceptions: Ad-hoc blocks (holidays, time off)

        Returns:
            List of TimeSlot objects; empty when the weekday has no rule
        """
        return list(
            self.iter_available_slots(
                date,
                service_duration_minutes,
                availability,
                existing_appointments,
                blocked_exceptions,
            )
        )

    def _generate(
        self,
        slot_date: date_type,
        duration: int,
        day_rules: List[AvailabilityRule],
        appointments: List[Appointment],
        exceptions: List[BlockedException]
    ) -> Iterator[TimeSlot]:
        for rule in day_rules:
            window = rule.time_range()
            current = window.start

            while current + duration <= window.end:
                candidate = Appointment(
                    date=slot_date,
                    start_time=minutes_to_time(current),
                    duration_minutes=duration,
                )

                if not detect_time_slot_conflict(candidate, appointments) and not is_time_slot_blocked(
                    candidate, exceptions
                ):
                    yield TimeSlot(
                        start_time=candidate.start_time,
                        end_time=minutes_to_time(current + duration),
                    )

                current += self.interval_minutes


def calculate_available_time_slots(
    date: "str | date_type",
    interval_minutes: int,
    service_duration_minutes: int,
    availability: Iterable[AvailabilityRule],
    existing_appointments: Iterable[Appointment],
    blocked_exceptions: Iterable[BlockedException]
) -> List[TimeSlot]:
    """Enumerate the open slots of one date. See ``SlotCalculator``."""
    return SlotCalculator(interval_minutes=interval_minutes).find_available_slots(
        date,
        service_duration_minutes,
        availability,
        existing_appointments,
        blocked_exceptions,
    )
