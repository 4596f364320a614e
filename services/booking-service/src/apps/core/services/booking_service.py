# services/booking-service/src/apps/core/services/booking_service.py
"""
Booking Service

Core business logic for the booking lifecycle.
"""

import uuid
import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional

from django.db import transaction
from django.utils import timezone

from apps.core.locks import lock_company_schedule
from apps.core.models import Booking, Company, ServiceOption, Vehicle, UserAddress
from apps.core.state_machine import can_transition

from .conflict_service import ConflictDetector
from .ownership import OwnershipGuard
from .validation import BookingValidator

logger = logging.getLogger(__name__)


SLOT_UNAVAILABLE_MESSAGE = "The selected time slot is not available. Please choose a different time."
UPDATED_SLOT_UNAVAILABLE_MESSAGE = "The updated time slot is not available. Please choose a different time."


class BookingService:
    """
    Service for managing bookings.

    Handles:
    - Booking creation and rescheduling
    - Conflict detection
    - Status transitions
    - Paid-flag updates from the payment subsystem
    - User and company listings

    Every mutation runs in one transaction, re-reads the booking with a row
    lock and, when the schedule is touched, holds the company's schedule
    lock across the conflict check and the write.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = timezone.now,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
        validator: BookingValidator = None,
        conflict_detector: ConflictDetector = None,
        ownership: OwnershipGuard = None,
    ):
        self.clock = clock
        self.id_factory = id_factory
        self.validator = validator or BookingValidator(clock=clock)
        self.conflict_detector = conflict_detector or ConflictDetector()
        self.ownership = ownership or OwnershipGuard()

    # ==========================================================================
    # Booking CRUD
    # ==========================================================================

    @transaction.atomic
    def create_booking(
        self,
        user_id: uuid.UUID,
        service_option_id: uuid.UUID,
        vehicle_id: uuid.UUID,
        address_id: uuid.UUID,
        start_date_time: datetime,
        notes: str = None,
    ) -> Booking:
        """Create a pending booking for the user's vehicle at the user's address."""
        from . import BookingValidationError, BookingConflictError

        booking = Booking(
            id=self.id_factory(),
            user_id=user_id,
            service_option_id=service_option_id,
            vehicle_id=vehicle_id,
            address_id=address_id,
            start_date_time=start_date_time,
            notes=notes,
        )

        self.ownership.vehicle_for_user(vehicle_id, user_id)
        self.ownership.address_for_user(address_id, user_id)

        service_option = ServiceOption.objects.filter(id=service_option_id).first()
        if service_option is None:
            logger.warning(f"Service option {service_option_id} not found")
            raise BookingValidationError("Service option not found")

        if not service_option.company_id:
            logger.warning(f"Service option {service_option_id} has no company")
            raise BookingValidationError("Service option must have a company")

        booking.company_id = service_option.company_id
        if start_date_time is not None:
            booking.end_date_time = start_date_time + timedelta(
                minutes=service_option.duration_minutes
            )

        lock_company_schedule(booking.company_id)

        if start_date_time is not None and self.conflict_detector.has_conflict(
            booking.company_id,
            booking.start_date_time,
            booking.end_date_time,
        ):
            logger.warning(
                f"Time slot conflict for company {booking.company_id} at {start_date_time}"
            )
            raise BookingConflictError(SLOT_UNAVAILABLE_MESSAGE)

        booking.status = Booking.Status.PENDING
        booking.is_paid = False

        self._validate(booking)

        booking.save(force_insert=True)

        logger.info(
            f"Created booking {booking.id} for user {user_id} with company {booking.company_id}"
        )

        return booking

    @transaction.atomic
    def update_booking(
        self,
        booking_id: uuid.UUID,
        user_id: uuid.UUID,
        **changes
    ) -> Booking:
        """Reschedule a booking and/or change its notes."""
        from . import BookingStateError, BookingConflictError

        booking = self.ownership.booking_for_user(booking_id, user_id, for_update=True)

        if not booking.is_editable:
            logger.warning(f"Cannot update booking {booking_id} with status {booking.status}")
            raise BookingStateError(f"Cannot update booking with status {booking.status}")

        duration = booking.end_date_time - booking.start_date_time
        service_option = ServiceOption.objects.filter(id=booking.service_option_id).first()
        if service_option is not None:
            duration = timedelta(minutes=service_option.duration_minutes)

        new_start = changes.get('start_date_time')
        rescheduled = new_start is not None and new_start != booking.start_date_time
        if rescheduled:
            booking.start_date_time = new_start
        if 'notes' in changes:
            booking.notes = changes['notes']

        booking.end_date_time = booking.start_date_time + duration

        lock_company_schedule(booking.company_id)

        if self.conflict_detector.has_conflict(
            booking.company_id,
            booking.start_date_time,
            booking.end_date_time,
            exclude_booking_id=booking.id,
        ):
            logger.warning(f"Time slot conflict when updating booking {booking_id}")
            raise BookingConflictError(UPDATED_SLOT_UNAVAILABLE_MESSAGE)

        self._validate(booking, check_start_window=rescheduled)

        booking.save(update_fields=['start_date_time', 'end_date_time', 'notes', 'updated_at'])

        logger.info(f"Updated booking {booking_id}")

        return booking

    # ==========================================================================
    # Status Transitions
    # ==========================================================================

    @transaction.atomic
    def cancel_booking(self, booking_id: uuid.UUID, user_id: uuid.UUID) -> Booking:
        """Cancel a booking on behalf of its owner."""
        booking = self.ownership.booking_for_user(booking_id, user_id, for_update=True)

        self._transition(
            booking,
            Booking.Status.CANCELLED,
            f"Cannot cancel booking with status {booking.status}",
        )

        logger.info(f"Cancelled booking {booking_id} by user {user_id}")

        return booking

    @transaction.atomic
    def confirm_booking(self, booking_id: uuid.UUID, company_id: uuid.UUID) -> Booking:
        booking = self.ownership.booking_for_company(booking_id, company_id, for_update=True)

        self._transition(
            booking,
            Booking.Status.CONFIRMED,
            "Only pending bookings can be confirmed",
        )

        logger.info(f"Confirmed booking {booking_id} by company {company_id}")

        return booking

    @transaction.atomic
    def start_service(self, booking_id: uuid.UUID, company_id: uuid.UUID) -> Booking:
        booking = self.ownership.booking_for_company(booking_id, company_id, for_update=True)

        self._transition(
            booking,
            Booking.Status.IN_PROGRESS,
            "Only confirmed bookings can be started",
        )

        logger.info(f"Started service for booking {booking_id}")

        return booking

    @transaction.atomic
    def complete_service(self, booking_id: uuid.UUID, company_id: uuid.UUID) -> Booking:
        booking = self.ownership.booking_for_company(booking_id, company_id, for_update=True)

        self._transition(
            booking,
            Booking.Status.COMPLETED,
            "Only in-progress bookings can be completed",
        )

        logger.info(f"Completed service for booking {booking_id}")

        return booking

    @transaction.atomic
    def set_paid(self, booking_id: uuid.UUID, is_paid: bool) -> Booking:
        """Flip the paid flag; nothing else on the booking changes."""
        from . import BookingNotFoundError

        booking = Booking.objects.select_for_update().filter(id=booking_id).first()
        if booking is None:
            raise BookingNotFoundError(f"Booking {booking_id} not found")

        if booking.is_paid != is_paid:
            booking.is_paid = is_paid
            booking.save(update_fields=['is_paid', 'updated_at'])
            logger.info(f"Booking {booking_id} marked {'paid' if is_paid else 'unpaid'}")

        return booking

    # ==========================================================================
    # Availability
    # ==========================================================================

    def is_time_slot_available(
        self,
        company_id: uuid.UUID,
        start: datetime,
        end: datetime,
        exclude_booking_id: uuid.UUID = None
    ) -> bool:
        return not self.conflict_detector.has_conflict(
            company_id, start, end, exclude_booking_id
        )

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_booking(
        self,
        booking_id: uuid.UUID,
        user_id: uuid.UUID = None,
        company_id: uuid.UUID = None
    ) -> Booking:
        """A booking visible to the given user (as owner) or company (as provider)."""
        from . import BookingNotFoundError

        booking = Booking.objects.filter(id=booking_id).first()
        if booking is None or not (
            (user_id and booking.user_id == user_id)
            or (company_id and booking.company_id == company_id)
        ):
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        return booking

    def get_booking_details(
        self,
        booking_id: uuid.UUID,
        user_id: uuid.UUID = None,
        company_id: uuid.UUID = None
    ) -> Booking:
        booking = self.get_booking(booking_id, user_id=user_id, company_id=company_id)
        self.attach_details([booking])
        return booking

    def list_user_bookings(self, user_id: uuid.UUID) -> List[Booking]:
        bookings = list(Booking.objects.for_user(user_id).order_by('-start_date_time'))
        return self.attach_details(bookings)

    def list_upcoming_user_bookings(self, user_id: uuid.UUID) -> List[Booking]:
        bookings = list(
            Booking.objects.for_user(user_id)
            .filter(start_date_time__gt=self.clock())
            .order_by('start_date_time')
        )
        return self.attach_details(bookings)

    def list_past_user_bookings(self, user_id: uuid.UUID) -> List[Booking]:
        bookings = list(
            Booking.objects.for_user(user_id)
            .filter(end_date_time__lt=self.clock())
            .order_by('-start_date_time')
        )
        return self.attach_details(bookings)

    def list_company_bookings(self, company_id: uuid.UUID):
        """Queryset of the company's bookings; callers filter and paginate."""
        return Booking.objects.for_company(company_id).order_by('-start_date_time')

    def attach_details(self, bookings: Iterable[Booking]) -> List[Booking]:
        """
        Decorate bookings with display fields from the reference registries.

        Sets ``company_name``, ``service_name``, ``price``, ``vehicle_info``
        and ``address_info`` on each booking. Missing references leave the
        field as None.
        """
        bookings = list(bookings)
        if not bookings:
            return bookings

        companies = Company.objects.in_bulk({b.company_id for b in bookings})
        options = ServiceOption.objects.in_bulk({b.service_option_id for b in bookings})
        vehicles = Vehicle.objects.in_bulk({b.vehicle_id for b in bookings})
        addresses = UserAddress.objects.in_bulk({b.address_id for b in bookings})

        for booking in bookings:
            company = companies.get(booking.company_id)
            option = options.get(booking.service_option_id)
            vehicle = vehicles.get(booking.vehicle_id)
            address = addresses.get(booking.address_id)

            booking.company_name = company.name if company else None
            booking.service_name = option.name if option else None
            booking.price = option.price if option else None
            booking.vehicle_info = vehicle.description if vehicle else None
            booking.address_info = address.address_line if address else None

        return bookings

    # ==========================================================================
    # Helper Methods
    # ==========================================================================

    def _transition(self, booking: Booking, target: str, message: str) -> None:
        from . import BookingStateError

        if not can_transition(booking.status, target):
            logger.warning(
                f"Rejected transition of booking {booking.id} from {booking.status} to {target}"
            )
            raise BookingStateError(message)

        booking.status = target
        booking.save(update_fields=['status', 'updated_at'])

    def _validate(self, booking: Booking, check_start_window: bool = True) -> None:
        from . import BookingValidationError

        result = self.validator.validate(booking, check_start_window=check_start_window)
        if not result.is_valid:
            logger.warning(f"Booking validation failed: {', '.join(result.errors)}")
            raise BookingValidationError(
                f"Booking validation failed: {', '.join(result.errors)}",
                errors=result.errors,
            )
