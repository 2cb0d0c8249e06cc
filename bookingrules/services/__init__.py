"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_service import BookingService, ScheduleSnapshot, ScheduleSourceProtocol

__all__ = ["BookingService", "ScheduleSnapshot", "ScheduleSourceProtocol"]
