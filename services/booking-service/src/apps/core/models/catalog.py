# services/booking-service/src/apps/core/models/catalog.py
"""
Reference registries

Companies, their service options, and the vehicles and addresses users
keep on file. Bookings read these by id; they are never mutated by the
booking lifecycle.
"""

import uuid
from decimal import Decimal

from django.db import models


class Company(models.Model):
    """Car washing service company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=30, blank=True, null=True)
    description = models.TextField(blank=True, null=True)

    class Meta:
        db_table = 'companies'
        ordering = ['name']
        verbose_name_plural = 'companies'

    def __str__(self):
        return self.name


class ServiceOption(models.Model):
    """
    A priced, timed wash offering.

    ``company_id`` is optional in the catalog: generic options exist, but
    only company-scoped options can be booked.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company_id = models.UUIDField(blank=True, null=True, db_index=True)
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True, null=True)
    duration_minutes = models.PositiveIntegerField(default=30)
    price = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'service_options'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.duration_minutes} min)"


class Vehicle(models.Model):
    """Vehicle owned by a user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(db_index=True)
    make = models.CharField(max_length=150, blank=True, null=True)
    model = models.CharField(max_length=150, blank=True, null=True)
    year = models.CharField(max_length=50, blank=True, null=True)
    license_plate = models.CharField(max_length=50, blank=True, null=True)

    class Meta:
        db_table = 'vehicles'

    def __str__(self):
        return self.description or str(self.id)

    @property
    def description(self) -> str:
        """e.g. '2020 Toyota Corolla'."""
        parts = [self.year, self.make, self.model]
        return ' '.join(p for p in parts if p).strip()


class UserAddress(models.Model):
    """Saved address where a user wants the wash performed."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(db_index=True)
    address_line = models.CharField(max_length=300)
    city = models.CharField(max_length=120, blank=True, null=True)
    area = models.CharField(max_length=120, blank=True, null=True)

    class Meta:
        db_table = 'user_addresses'

    def __str__(self):
        return self.address_line
