"""
Adapters layer - Schedule data sources.
"""

from .schedule_store import ScheduleFileStore

__all__ = ["ScheduleFileStore"]
