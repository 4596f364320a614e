# services/booking-service/src/apps/core/services/payment_service.py
"""
Payment Service

Payment records against bookings. Completing a payment marks the booking
paid; refunding it marks the booking unpaid.
"""

import uuid
import logging
from decimal import Decimal, InvalidOperation
from typing import List

from django.db import IntegrityError, transaction

from apps.core.models import Booking, Payment

from .booking_service import BookingService

logger = logging.getLogger(__name__)


PAYMENT_EXISTS_MESSAGE = "Payment already exists for this booking."


class PaymentService:
    """Service for payment records and the booking paid-flag hook."""

    def __init__(self, booking_service: BookingService = None):
        self.booking_service = booking_service or BookingService()

    @transaction.atomic
    def create_payment(
        self,
        booking_id: uuid.UUID,
        user_id: uuid.UUID,
        amount,
        method: str = Payment.Method.CARD,
        transaction_id: str = None,
    ) -> Payment:
        from . import PaymentValidationError, BookingNotFoundError

        errors = self._validate(booking_id, user_id, amount, method, transaction_id)
        if errors:
            logger.warning(f"Payment validation failed - {', '.join(errors)}")
            raise PaymentValidationError(
                f"Payment validation failed: {', '.join(errors)}",
                errors=errors,
            )

        # Locking the booking serialises concurrent payments for it
        booking = (
            Booking.objects.select_for_update()
            .filter(id=booking_id, user_id=user_id)
            .first()
        )
        if booking is None:
            logger.warning(f"Booking {booking_id} not available to user {user_id} for payment")
            raise BookingNotFoundError(f"Booking {booking_id} not found")

        if Payment.objects.filter(booking_id=booking_id).exists():
            logger.warning(f"Payment already exists for booking {booking_id}")
            raise PaymentValidationError(PAYMENT_EXISTS_MESSAGE)

        try:
            with transaction.atomic():
                payment = Payment.objects.create(
                    booking_id=booking_id,
                    user_id=user_id,
                    amount=Decimal(str(amount)),
                    method=method,
                    status=Payment.Status.PENDING,
                    transaction_id=transaction_id,
                )
        except IntegrityError:
            logger.warning(f"Concurrent payment created for booking {booking_id}")
            raise PaymentValidationError(PAYMENT_EXISTS_MESSAGE)

        logger.info(f"Created payment {payment.id} for booking {booking_id}")

        return payment

    @transaction.atomic
    def update_status(self, payment_id: uuid.UUID, status: str) -> Payment:
        """
        Move a payment to ``status``.

        Completed payments can only become refunded; refunded payments are
        final. Reaching completed marks the booking paid.
        """
        from . import PaymentStateError, PaymentValidationError

        if status not in Payment.Status.values:
            raise PaymentValidationError("Invalid payment status.")

        payment = self._get_for_update(payment_id)

        if payment.status == Payment.Status.REFUNDED:
            logger.warning(f"Cannot change status of refunded payment {payment_id}")
            raise PaymentStateError("Cannot modify refunded payments.")

        if payment.status == Payment.Status.COMPLETED and status != Payment.Status.REFUNDED:
            logger.warning(f"Cannot change payment {payment_id} from completed to {status}")
            raise PaymentStateError("Completed payments can only be refunded.")

        payment.status = status
        payment.save(update_fields=['status', 'updated_at'])

        if status == Payment.Status.COMPLETED:
            self.booking_service.set_paid(payment.booking_id, True)
        elif status == Payment.Status.REFUNDED:
            self.booking_service.set_paid(payment.booking_id, False)

        logger.info(f"Payment {payment_id} status updated to {status}")

        return payment

    @transaction.atomic
    def refund(self, payment_id: uuid.UUID, user_id: uuid.UUID) -> Payment:
        from . import PaymentStateError, PaymentNotFoundError

        payment = self._get_for_update(payment_id)

        if payment.user_id != user_id:
            logger.warning(f"User {user_id} does not own payment {payment_id}")
            raise PaymentNotFoundError(f"Payment {payment_id} not found")

        if payment.status != Payment.Status.COMPLETED:
            logger.warning(f"Payment {payment_id} is not completed (status: {payment.status})")
            raise PaymentStateError("Only completed payments can be refunded.")

        payment.status = Payment.Status.REFUNDED
        payment.save(update_fields=['status', 'updated_at'])

        self.booking_service.set_paid(payment.booking_id, False)

        logger.info(f"Payment {payment_id} refunded")

        return payment

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_payment(self, payment_id: uuid.UUID, user_id: uuid.UUID) -> Payment:
        from . import PaymentNotFoundError

        payment = Payment.objects.filter(id=payment_id, user_id=user_id).first()
        if payment is None:
            raise PaymentNotFoundError(f"Payment {payment_id} not found")
        return payment

    def get_booking_payment(self, booking_id: uuid.UUID, user_id: uuid.UUID) -> Payment:
        from . import PaymentNotFoundError

        payment = Payment.objects.filter(booking_id=booking_id, user_id=user_id).first()
        if payment is None:
            raise PaymentNotFoundError(f"No payment for booking {booking_id}")
        return payment

    def list_user_payments(self, user_id: uuid.UUID):
        return Payment.objects.filter(user_id=user_id).order_by('-created_at')

    # ==========================================================================
    # Helper Methods
    # ==========================================================================

    def _get_for_update(self, payment_id: uuid.UUID) -> Payment:
        from . import PaymentNotFoundError

        payment = Payment.objects.select_for_update().filter(id=payment_id).first()
        if payment is None:
            logger.warning(f"Payment {payment_id} not found")
            raise PaymentNotFoundError(f"Payment {payment_id} not found")
        return payment

    def _validate(self, booking_id, user_id, amount, method, transaction_id) -> List[str]:
        errors = []

        try:
            amount = Decimal(str(amount)) if amount is not None else None
        except (InvalidOperation, ValueError):
            amount = None

        if amount is None or amount <= 0:
            errors.append("Payment amount must be greater than zero.")
        elif amount > Payment.MAX_AMOUNT:
            errors.append("Payment amount cannot exceed 999,999.99.")

        if not booking_id:
            errors.append("Booking ID is required.")

        if not user_id:
            errors.append("User ID is required.")

        if method not in Payment.Method.values:
            errors.append("Invalid payment method.")

        if transaction_id and transaction_id.strip() and len(transaction_id) > Payment.TRANSACTION_ID_MAX_LENGTH:
            errors.append(
                f"Transaction ID cannot exceed {Payment.TRANSACTION_ID_MAX_LENGTH} characters."
            )

        return errors
