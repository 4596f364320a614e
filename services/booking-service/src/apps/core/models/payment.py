# services/booking-service/src/apps/core/models/payment.py
"""
Payment Model

A payment record against a booking. No gateway is involved; the record's
status is moved by the payments API and drives the booking's paid flag.
"""

import uuid
from decimal import Decimal

from django.db import models


class Payment(models.Model):
    """Payment transaction for a booking."""

    class Method(models.TextChoices):
        CARD = 'card', 'Card'
        WALLET = 'wallet', 'Wallet'
        CASH_ON_ARRIVAL = 'cash_on_arrival', 'Cash on Arrival'
        THIRD_PARTY = 'third_party', 'Third Party'

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'
        FAILED = 'failed', 'Failed'
        REFUNDED = 'refunded', 'Refunded'

    MAX_AMOUNT = Decimal('999999.99')
    TRANSACTION_ID_MAX_LENGTH = 200

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking_id = models.UUIDField(unique=True)
    user_id = models.UUIDField(db_index=True)

    amount = models.DecimalField(max_digits=18, decimal_places=2)
    method = models.CharField(max_length=20, choices=Method.choices, default=Method.CARD)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)

    # Reference from the payment provider
    transaction_id = models.CharField(max_length=TRANSACTION_ID_MAX_LENGTH, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-created_at']

    def __str__(self):
        return f"Payment {self.id} for booking {self.booking_id}: {self.amount} ({self.status})"
