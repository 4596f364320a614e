# services/booking-service/src/apps/api/views/mixins.py
"""
View mixins shared by the booking and payment viewsets.
"""

import logging

from shared.common.exceptions import (
    InvalidStateException,
    NotFoundException,
    TimeSlotConflictException,
    ValidationException,
)

from apps.core.services import (
    BookingConflictError,
    BookingStateError,
    BookingValidationError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


class ServiceErrorMixin:
    """
    Translates service-layer errors into API exceptions.

    Not-found and not-owned both become an empty 404; the remaining
    business rejections become 400s rendered by the shared exception
    handler.
    """

    def handle_exception(self, exc):
        return super().handle_exception(self.translate_service_error(exc))

    def translate_service_error(self, exc):
        if isinstance(exc, ResourceNotFoundError):
            return NotFoundException()

        if isinstance(exc, BookingValidationError):
            logger.warning(f"{self.__class__.__name__} rejected request: {exc}")
            return ValidationException(errors=exc.errors, detail=str(exc))

        if isinstance(exc, BookingConflictError):
            logger.warning(f"{self.__class__.__name__} rejected request: {exc}")
            return TimeSlotConflictException(detail=str(exc))

        if isinstance(exc, BookingStateError):
            logger.warning(f"{self.__class__.__name__} rejected request: {exc}")
            return InvalidStateException(detail=str(exc))

        return exc
