# services/booking-service/src/apps/core/services/validation.py
"""
Booking Validator

Structural checks on a booking record. Every violated rule is reported;
nothing is raised and nothing is written.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, List

from dateutil.relativedelta import relativedelta
from django.utils import timezone

from apps.core.models import Booking


# Booking limits
BOOKING_PAST_GRACE = timedelta(minutes=5)
BOOKING_MAX_ADVANCE = relativedelta(years=1)
BOOKING_MIN_DURATION_MINUTES = 15
BOOKING_MAX_DURATION_MINUTES = 8 * 60


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, message: str) -> None:
        self.errors.append(message)


class BookingValidator:
    """
    Validates a booking against the platform's structural rules.

    The clock is injected so results depend only on the booking's fields
    and the supplied "now".
    """

    def __init__(self, clock: Callable = timezone.now):
        self.clock = clock

    def validate(self, booking: Booking, check_start_window: bool = True) -> ValidationResult:
        """
        Validate ``booking``.

        ``check_start_window`` controls the past-grace and advance-limit
        checks on the start time; edits that leave the start untouched skip
        them so an already-started slot can still have its notes changed.
        """
        result = ValidationResult()
        now = self.clock()

        start = booking.start_date_time
        end = booking.end_date_time

        if start is None:
            result.add("Start date time is required.")
        elif check_start_window:
            if start < now - BOOKING_PAST_GRACE:
                result.add("Start date time cannot be in the past.")
            if start > now + BOOKING_MAX_ADVANCE:
                result.add("Start date time cannot be more than 1 year in the future.")

        if end is None:
            result.add("End date time is required.")
        elif start is not None and end <= start:
            result.add("End date time must be after start date time.")

        if start is not None and end is not None:
            duration = end - start
            if duration < timedelta(minutes=BOOKING_MIN_DURATION_MINUTES):
                result.add(
                    f"Booking duration must be at least {BOOKING_MIN_DURATION_MINUTES} minutes."
                )
            if duration > timedelta(minutes=BOOKING_MAX_DURATION_MINUTES):
                result.add(
                    f"Booking duration cannot exceed {BOOKING_MAX_DURATION_MINUTES // 60} hours."
                )

        required_ids = (
            ('user_id', "User ID is required."),
            ('company_id', "Company ID is required."),
            ('service_option_id', "Service option ID is required."),
            ('vehicle_id', "Vehicle ID is required."),
            ('address_id', "Address ID is required."),
        )
        for attr, message in required_ids:
            if not getattr(booking, attr, None):
                result.add(message)

        notes = booking.notes
        if notes and notes.strip() and len(notes) > Booking.NOTES_MAX_LENGTH:
            result.add(f"Notes cannot exceed {Booking.NOTES_MAX_LENGTH} characters.")

        return result
