# services/booking-service/src/apps/core/services/conflict_service.py
"""
Conflict Detector

Per-company time-slot overlap checks. Intervals are half-open: a booking
ending at 10:30 does not collide with one starting at 10:30.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

from apps.core.models import Booking


@dataclass(frozen=True)
class TimeInterval:
    start: datetime
    end: datetime

    def overlaps(self, other: 'TimeInterval') -> bool:
        return self.start < other.end and self.end > other.start


class ConflictDetector:
    """Answers whether a company's schedule is free for an interval."""

    def find_conflicts(
        self,
        company_id: uuid.UUID,
        start: datetime,
        end: datetime,
        exclude_booking_id: uuid.UUID = None
    ):
        return Booking.get_conflicts(company_id, start, end, exclude_booking_id)

    def has_conflict(
        self,
        company_id: uuid.UUID,
        start: datetime,
        end: datetime,
        exclude_booking_id: uuid.UUID = None
    ) -> bool:
        """True if any live booking of the company overlaps [start, end)."""
        return self.find_conflicts(company_id, start, end, exclude_booking_id).exists()
