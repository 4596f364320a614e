# services/booking-service/src/apps/api/views/__init__.py
"""
Booking API Views
"""

from .booking_views import BookingViewSet
from .payment_views import PaymentViewSet
from .registry_views import (
    CompanyViewSet,
    ServiceOptionViewSet,
    UserAddressViewSet,
    VehicleViewSet,
)


__all__ = [
    'BookingViewSet',
    'PaymentViewSet',
    'VehicleViewSet',
    'UserAddressViewSet',
    'CompanyViewSet',
    'ServiceOptionViewSet',
]
