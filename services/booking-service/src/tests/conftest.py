# services/booking-service/src/tests/conftest.py
"""
Pytest Configuration and Fixtures

Provides common fixtures for booking service tests.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    """Provide API client for testing."""
    return APIClient()


@pytest.fixture
def now():
    """A fixed 'current time' for clock injection."""
    return timezone.now().replace(second=0, microsecond=0)


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def slot_start(now):
    """Tomorrow at 10:00 UTC."""
    return (now + timedelta(days=1)).replace(hour=10, minute=0)


@pytest.fixture
def user_id():
    """Provide a test user ID."""
    return uuid.uuid4()


@pytest.fixture
def other_user_id():
    return uuid.uuid4()


@pytest.fixture
def company():
    from apps.core.models import Company

    return Company.objects.create(name='Sparkle Wash', phone='+966500000000')


@pytest.fixture
def company_id(company):
    return company.id


@pytest.fixture
def other_company():
    from apps.core.models import Company

    return Company.objects.create(name='Foam Masters')


@pytest.fixture
def service_option(company):
    """30-minute exterior wash offered by the test company."""
    from apps.core.models import ServiceOption

    return ServiceOption.objects.create(
        company_id=company.id,
        name='Exterior Wash',
        duration_minutes=30,
        price=Decimal('25.00'),
    )


@pytest.fixture
def vehicle(user_id):
    from apps.core.models import Vehicle

    return Vehicle.objects.create(
        user_id=user_id,
        make='Toyota',
        model='Corolla',
        year='2020',
        license_plate='ABC 1234',
    )


@pytest.fixture
def address(user_id):
    from apps.core.models import UserAddress

    return UserAddress.objects.create(
        user_id=user_id,
        address_line='12 King Fahd Road',
        city='Riyadh',
    )


@pytest.fixture
def user_headers(user_id):
    """Headers identifying the acting user."""
    return {'HTTP_X_USER_ID': str(user_id)}


@pytest.fixture
def company_headers(company_id):
    """Headers identifying the acting company."""
    return {'HTTP_X_COMPANY_ID': str(company_id)}


@pytest.fixture
def create_booking(user_id, company, service_option, vehicle, address, slot_start):
    """Factory fixture for creating bookings directly in storage."""
    from apps.core.models import Booking

    def _create_booking(**kwargs):
        start = kwargs.pop('start_date_time', slot_start)
        defaults = {
            'user_id': user_id,
            'company_id': company.id,
            'service_option_id': service_option.id,
            'vehicle_id': vehicle.id,
            'address_id': address.id,
            'start_date_time': start,
            'end_date_time': start + timedelta(minutes=service_option.duration_minutes),
            'status': Booking.Status.PENDING,
        }
        defaults.update(kwargs)

        return Booking.objects.create(**defaults)

    return _create_booking


@pytest.fixture
def create_payment(user_id):
    """Factory fixture for creating payments directly in storage."""
    from apps.core.models import Payment

    def _create_payment(booking, **kwargs):
        defaults = {
            'booking_id': booking.id,
            'user_id': user_id,
            'amount': Decimal('25.00'),
            'method': Payment.Method.CARD,
            'status': Payment.Status.PENDING,
        }
        defaults.update(kwargs)

        return Payment.objects.create(**defaults)

    return _create_payment
