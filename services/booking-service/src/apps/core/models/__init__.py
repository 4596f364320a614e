# services/booking-service/src/apps/core/models/__init__.py
"""
Booking Service Models
"""

from .booking import Booking
from .catalog import Company, ServiceOption, Vehicle, UserAddress
from .payment import Payment

__all__ = [
    'Booking',
    'Company',
    'ServiceOption',
    'Vehicle',
    'UserAddress',
    'Payment',
]
