"""
Application services for validating bookings and listing open slots.

The service coordinates loading schedule data via a schedule source adapter
and delegates every decision to the domain-level rules and ``SlotCalculator``.
This keeps the CLI thin and improves testability by allowing the storage
dependency to be mocked via a simple protocol.

The checks here are an optimistic pre-check. Two callers may both see a slot
as free and both book it; the storage layer must enforce uniqueness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as date_type
from typing import List, Protocol

from ..domain.booking_rules import validate_booking
from ..domain.exceptions import BusinessRuleError
from ..domain.models import Appointment, AvailabilityRule, BlockedException, TimeSlot, parse_date
from ..domain.slot_calculator import SlotCalculator

logger = logging.getLogger(__name__)


class ScheduleSourceProtocol(Protocol):
    """Protocol describing the schedule storage behaviour needed by the service."""

    async def get_availability_rules(self) -> List[AvailabilityRule]:
        """Return the provider's active availability rules."""

    async def get_appointments(self, date: date_type) -> List[Appointment]:
        """Return non-cancelled appointments on ``date``."""

    async def get_blocked_exceptions(self) -> List[BlockedException]:
        """Return the provider's blocked exceptions."""


@dataclass(frozen=True)
class ScheduleSnapshot:
    """The three read-only collections one decision is made against."""
    availability: List[AvailabilityRule]
    appointments: List[Appointment]
    exceptions: List[BlockedException]


class BookingService:
    """
    Orchestrates schedule retrieval, booking validation and slot listing.

    Dependency inversion toward a protocol makes it easy to plug in the file
    store or a stub implementation in tests.
    """

    def __init__(
        self,
        schedule_source: ScheduleSourceProtocol,
        slot_calculator: SlotCalculator,
    ) -> None:
        self._schedule_source = schedule_source
        self._slot_calculator = slot_calculator

    async def load_snapshot(self, date: "str | date_type") -> ScheduleSnapshot:
        """Read all three collections fresh; nothing is cached between calls."""
        target = parse_date(date)

        availability = await self._schedule_source.get_availability_rules()
        appointments = await self._schedule_source.get_appointments(target)
        exceptions = await self._schedule_source.get_blocked_exceptions()

        logger.debug(
            "Loaded snapshot for %s: %d rules, %d appointments, %d exceptions",
            target,
            len(availability),
            len(appointments),
            len(exceptions),
        )

        return ScheduleSnapshot(
            availability=list(availability),
            appointments=list(appointments),
            exceptions=list(exceptions),
        )

    async def validate_booking(self, candidate: Appointment, *, today: "str | date_type") -> None:
        """
        Validate a proposed booking against the current schedule.

        Raises:
            BusinessRuleError: with the code of the first violated rule
        """
        snapshot = await self.load_snapshot(candidate.date)

        try:
            validate_booking(
                candidate,
                snapshot.availability,
                snapshot.appointments,
                snapshot.exceptions,
                today=today,
            )
        except BusinessRuleError as exc:
            logger.info(
                "Booking rejected on %s at %s: %s",
                candidate.date,
                candidate.start_time,
                exc.code.value,
            )
            raise

    async def find_slots(
        self,
        *,
        date: "str | date_type",
        service_duration_minutes: int,
    ) -> List[TimeSlot]:
        """
        Load a fresh snapshot and compute the open slots of a date.
        """
        snapshot = await self.load_snapshot(date)

        return self.calculate_slots(
            snapshot=snapshot,
            date=date,
            service_duration_minutes=service_duration_minutes,
        )

    def calculate_slots(
        self,
        *,
        snapshot: ScheduleSnapshot,
        date: "str | date_type",
        service_duration_minutes: int,
    ) -> List[TimeSlot]:
        """Calculate available time slots from a snapshot."""
        return self._slot_calculator.find_available_slots(
            date,
            service_duration_minutes,
            snapshot.availability,
            snapshot.appointments,
            snapshot.exceptions,
        )
