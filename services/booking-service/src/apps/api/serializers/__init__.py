# services/booking-service/src/apps/api/serializers/__init__.py
"""
Booking API Serializers
"""

from .booking_serializers import (
    BookingSerializer,
    BookingDetailSerializer,
    BookingCreateSerializer,
    BookingUpdateSerializer,
    AvailabilityQuerySerializer,
)

from .payment_serializers import (
    PaymentSerializer,
    PaymentCreateSerializer,
    PaymentStatusUpdateSerializer,
)

from .registry_serializers import (
    VehicleSerializer,
    UserAddressSerializer,
    CompanySerializer,
    ServiceOptionSerializer,
)


__all__ = [
    # Booking
    'BookingSerializer',
    'BookingDetailSerializer',
    'BookingCreateSerializer',
    'BookingUpdateSerializer',
    'AvailabilityQuerySerializer',

    # Payment
    'PaymentSerializer',
    'PaymentCreateSerializer',
    'PaymentStatusUpdateSerializer',

    # Registries
    'VehicleSerializer',
    'UserAddressSerializer',
    'CompanySerializer',
    'ServiceOptionSerializer',
]
