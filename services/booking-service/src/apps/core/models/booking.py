# services/booking-service/src/apps/core/models/booking.py
"""
Booking Model

A reserved wash slot with a company for one of a user's vehicles at one of
the user's addresses.
"""

import uuid
from datetime import datetime

from django.db import models
from django.db.models import Q


class BookingQuerySet(models.QuerySet):
    """Query helpers shared by the conflict detector and listings."""

    def for_company(self, company_id: uuid.UUID):
        return self.filter(company_id=company_id)

    def for_user(self, user_id: uuid.UUID):
        return self.filter(user_id=user_id)

    def blocking(self):
        """Bookings that still occupy their slot."""
        return self.filter(status__in=Booking.BLOCKING_STATUSES)

    def overlapping(self, start: datetime, end: datetime):
        """Half-open overlap with [start, end); touching endpoints do not overlap."""
        return self.filter(Q(start_date_time__lt=end) & Q(end_date_time__gt=start))


class Booking(models.Model):
    """
    Booking for a car washing service.

    References to the user, company, service option, vehicle and address
    are stored as plain ids; the owning registries are looked up by id when
    needed.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        IN_PROGRESS = 'in_progress', 'In Progress'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'
        NO_SHOW = 'no_show', 'No Show'

    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED, Status.IN_PROGRESS)
    TERMINAL_STATUSES = (Status.COMPLETED, Status.CANCELLED, Status.NO_SHOW)
    EDITABLE_STATUSES = (Status.PENDING, Status.CONFIRMED)

    NOTES_MAX_LENGTH = 500

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # References
    user_id = models.UUIDField()
    company_id = models.UUIDField()
    service_option_id = models.UUIDField()
    vehicle_id = models.UUIDField()
    address_id = models.UUIDField()

    # Slot
    start_date_time = models.DateTimeField()
    end_date_time = models.DateTimeField()

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )

    notes = models.TextField(blank=True, null=True)
    is_paid = models.BooleanField(default=False)

    # Audit
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        db_table = 'bookings'
        ordering = ['-start_date_time']
        indexes = [
            models.Index(
                fields=['company_id', 'status', 'start_date_time', 'end_date_time'],
                name='booking_company_slot_idx',
            ),
            models.Index(fields=['user_id', 'start_date_time'], name='booking_user_start_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date_time__gt=models.F('start_date_time')),
                name='booking_valid_interval',
            ),
        ]

    def __str__(self):
        return f"Booking {self.id}: {self.start_date_time:%Y-%m-%d %H:%M} ({self.status})"

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def duration_minutes(self) -> float:
        """Scheduled duration in minutes."""
        return (self.end_date_time - self.start_date_time).total_seconds() / 60

    @property
    def is_editable(self) -> bool:
        """Only pending or confirmed bookings can be rescheduled."""
        return self.status in self.EDITABLE_STATUSES

    # ==========================================================================
    # Class Methods
    # ==========================================================================

    @classmethod
    def get_conflicts(
        cls,
        company_id: uuid.UUID,
        start: datetime,
        end: datetime,
        exclude_booking_id: uuid.UUID = None
    ) -> BookingQuerySet:
        """Live bookings of the company overlapping [start, end)."""
        queryset = cls.objects.for_company(company_id).blocking().overlapping(start, end)

        if exclude_booking_id:
            queryset = queryset.exclude(id=exclude_booking_id)

        return queryset
