"""
File-backed schedule source for running without a database.

Reads availability rules, appointments and blocked exceptions from a YAML
(or JSON) document:

    availability:
      - {day_of_week: 1, start_time: "09:00", end_time: "12:00"}
    appointments:
      - {date: "2026-01-19", start_time: "10:00", duration_minutes: 30}
    exceptions:
      - {date: "2026-01-20"}
"""

from __future__ import annotations

import logging
from datetime import date as date_type
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..domain.exceptions import ScheduleDataError
from ..domain.models import Appointment, AvailabilityRule, BlockedException, TimeOfDay, parse_date

logger = logging.getLogger(__name__)

CANCELLED_STATUSES = {"cancelled", "canceled"}


def _normalize_time(value: Any) -> Any:
    """
    YAML 1.1 reads an unquoted ``09:30`` as the base-60 integer 570, which
    is exactly minutes since midnight.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < 1440:
            raise ValueError(f"Time out of range: {value}")
        return str(TimeOfDay.from_minutes(value))
    return value


class AvailabilityRecord(BaseModel):
    """Stored availability rule."""
    day_of_week: int
    start_time: str
    end_time: str
    active: bool = True

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def normalize_times(cls, value: Any) -> Any:
        return _normalize_time(value)

    def to_domain(self) -> AvailabilityRule:
        return AvailabilityRule(
            day_of_week=self.day_of_week,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class AppointmentRecord(BaseModel):
    """Stored appointment."""
    date: date_type
    start_time: str
    duration_minutes: int
    status: str = "confirmed"
    client_name: str = ""

    @field_validator("start_time", mode="before")
    @classmethod
    def normalize_times(cls, value: Any) -> Any:
        return _normalize_time(value)

    @property
    def is_cancelled(self) -> bool:
        return self.status.lower() in CANCELLED_STATUSES

    def to_domain(self) -> Appointment:
        return Appointment(
            date=self.date,
            start_time=self.start_time,
            duration_minutes=self.duration_minutes,
        )


class ExceptionRecord(BaseModel):
    """Stored blocked exception."""
    date: date_type
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: str = ""

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def normalize_times(cls, value: Any) -> Any:
        return _normalize_time(value)

    def to_domain(self) -> BlockedException:
        return BlockedException(
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class ScheduleDocument(BaseModel):
    """Root of a schedule file."""
    availability: List[AvailabilityRecord] = Field(default_factory=list)
    appointments: List[AppointmentRecord] = Field(default_factory=list)
    exceptions: List[ExceptionRecord] = Field(default_factory=list)


class ScheduleFileStore:
    """
    Schedule source backed by a single YAML/JSON file.

    The file is re-read on every call so that each decision sees the current
    data; nothing is cached between calls.
    """

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: Path to the schedule file
        """
        self.path = Path(path)

    async def get_availability_rules(self) -> List[AvailabilityRule]:
        """Return active availability rules in file order."""
        document = self._load_document()
        return self._convert(
            [record for record in document.availability if record.active]
        )

    async def get_appointments(self, date: "str | date_type") -> List[Appointment]:
        """Return non-cancelled appointments booked on ``date``."""
        document = self._load_document()
        target = parse_date(date)

        appointments = self._convert(
            [record for record in document.appointments if not record.is_cancelled]
        )
        return [appointment for appointment in appointments if appointment.date == target]

    async def get_blocked_exceptions(self) -> List[BlockedException]:
        """Return all blocked exceptions."""
        document = self._load_document()
        return self._convert(document.exceptions)

    def _load_document(self) -> ScheduleDocument:
        """Load and validate the schedule file."""
        if not self.path.exists():
            raise ScheduleDataError(f"Schedule file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data: Dict[str, Any] = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ScheduleDataError(f"Could not read schedule file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ScheduleDataError("Schedule file must contain a mapping at the root level.")

        try:
            document = ScheduleDocument(**data)
        except ValidationError as exc:
            raise ScheduleDataError(f"Invalid schedule file {self.path}: {exc}") from exc

        logger.debug(
            "Loaded schedule %s: %d rules, %d appointments, %d exceptions",
            self.path,
            len(document.availability),
            len(document.appointments),
            len(document.exceptions),
        )
        return document

    def _convert(self, records) -> list:
        """Convert stored records to domain objects, reporting bad values."""
        try:
            return [record.to_domain() for record in records]
        except ValueError as exc:
            raise ScheduleDataError(f"Invalid value in schedule file {self.path}: {exc}") from exc
