# services/booking-service/src/apps/core/services/ownership.py
"""
Ownership Guard

Loads referenced entities on behalf of an acting user or company. A row
that does not exist and a row owned by someone else are reported the same
way so callers cannot discover other tenants' ids.
"""

import uuid
import logging

from apps.core.models import Booking, Vehicle, UserAddress

logger = logging.getLogger(__name__)


class OwnershipGuard:

    def vehicle_for_user(self, vehicle_id: uuid.UUID, user_id: uuid.UUID) -> Vehicle:
        from . import ResourceNotFoundError

        vehicle = Vehicle.objects.filter(id=vehicle_id, user_id=user_id).first()
        if vehicle is None:
            logger.warning(f"Vehicle {vehicle_id} not available to user {user_id}")
            raise ResourceNotFoundError("Vehicle not found or doesn't belong to you")
        return vehicle

    def address_for_user(self, address_id: uuid.UUID, user_id: uuid.UUID) -> UserAddress:
        from . import ResourceNotFoundError

        address = UserAddress.objects.filter(id=address_id, user_id=user_id).first()
        if address is None:
            logger.warning(f"Address {address_id} not available to user {user_id}")
            raise ResourceNotFoundError("Address not found or doesn't belong to you")
        return address

    def booking_for_user(
        self,
        booking_id: uuid.UUID,
        user_id: uuid.UUID,
        for_update: bool = False
    ) -> Booking:
        return self._get_booking(booking_id, for_update, user_id=user_id)

    def booking_for_company(
        self,
        booking_id: uuid.UUID,
        company_id: uuid.UUID,
        for_update: bool = False
    ) -> Booking:
        return self._get_booking(booking_id, for_update, company_id=company_id)

    def _get_booking(self, booking_id, for_update, **owner) -> Booking:
        from . import BookingNotFoundError

        queryset = Booking.objects.all()
        if for_update:
            queryset = queryset.select_for_update()

        booking = queryset.filter(id=booking_id, **owner).first()
        if booking is None:
            logger.warning(f"Booking {booking_id} not available to {owner}")
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        return booking
