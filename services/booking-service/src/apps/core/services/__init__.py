# services/booking-service/src/apps/core/services/__init__.py
"""
Booking Service Business Logic
"""

from .validation import BookingValidator, ValidationResult
from .conflict_service import ConflictDetector, TimeInterval
from .ownership import OwnershipGuard
from .booking_service import BookingService
from .payment_service import PaymentService
from .registry_service import RegistryService


# Custom Exceptions
class BookingServiceError(Exception):
    """Base exception for booking service errors."""
    pass


class ResourceNotFoundError(BookingServiceError):
    """Referenced entity does not exist or is not owned by the caller."""
    pass


class BookingNotFoundError(ResourceNotFoundError):
    """Booking not found."""
    pass


class PaymentNotFoundError(ResourceNotFoundError):
    """Payment not found."""
    pass


class BookingConflictError(BookingServiceError):
    """Booking conflicts with existing reservation."""
    pass


class BookingValidationError(BookingServiceError):
    """Booking validation failed."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class BookingStateError(BookingServiceError):
    """Invalid booking state transition."""
    pass


class RegistryInUseError(BookingStateError):
    """Registry entry still referenced by a live booking."""
    pass


class PaymentError(BookingServiceError):
    """Payment operation error."""
    pass


class PaymentValidationError(BookingValidationError, PaymentError):
    """Payment validation failed."""
    pass


class PaymentStateError(BookingStateError, PaymentError):
    """Invalid payment status change."""
    pass


__all__ = [
    # Services
    'BookingService',
    'BookingValidator',
    'ValidationResult',
    'ConflictDetector',
    'TimeInterval',
    'OwnershipGuard',
    'PaymentService',
    'RegistryService',

    # Exceptions
    'BookingServiceError',
    'ResourceNotFoundError',
    'BookingNotFoundError',
    'PaymentNotFoundError',
    'BookingConflictError',
    'BookingValidationError',
    'BookingStateError',
    'RegistryInUseError',
    'PaymentError',
    'PaymentValidationError',
    'PaymentStateError',
]
