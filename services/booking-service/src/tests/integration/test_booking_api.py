# services/booking-service/src/tests/integration/test_booking_api.py
"""
Integration Tests for Booking API

Tests API endpoints with full request/response cycle.
"""

import uuid
from datetime import timedelta

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from apps.core.models import Booking, Vehicle


BOOKINGS_URL = '/api/v1/bookings/'


def detail_url(booking_id, suffix=''):
    return f'{BOOKINGS_URL}{booking_id}/{suffix}'


@pytest.fixture
def booking_data(service_option, vehicle, address, slot_start):
    return {
        'service_option_id': str(service_option.id),
        'vehicle_id': str(vehicle.id),
        'address_id': str(address.id),
        'start_date_time': slot_start.isoformat(),
        'notes': 'Gate code 1234',
    }


@pytest.mark.django_db
class TestCreateBookingAPI:

    def setup_method(self):
        self.client = APIClient()

    def test_create_booking(self, user_headers, booking_data, company_id):
        response = self.client.post(BOOKINGS_URL, booking_data, format='json', **user_headers)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == Booking.Status.PENDING
        assert response.data['is_paid'] is False
        assert response.data['duration_minutes'] == 30
        assert str(response.data['company_id']) == str(company_id)
        assert response.data['company_name'] == 'Sparkle Wash'
        assert response.data['vehicle_info'] == '2020 Toyota Corolla'
        assert response.data['price'] == '25.00'

    def test_requires_principal(self, booking_data):
        response = self.client.post(BOOKINGS_URL, booking_data, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_company_principal_cannot_create(self, company_headers, booking_data):
        response = self.client.post(BOOKINGS_URL, booking_data, format='json', **company_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_malformed_user_header(self, booking_data):
        response = self.client.post(
            BOOKINGS_URL, booking_data, format='json', HTTP_X_USER_ID='not-a-uuid'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_missing_fields(self, user_headers):
        response = self.client.post(BOOKINGS_URL, {}, format='json', **user_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'
        assert 'vehicle_id' in response.data['errors']

    def test_conflict_returns_400(self, user_headers, booking_data, slot_start):
        self.client.post(BOOKINGS_URL, booking_data, format='json', **user_headers)

        booking_data['start_date_time'] = (slot_start + timedelta(minutes=15)).isoformat()
        response = self.client.post(BOOKINGS_URL, booking_data, format='json', **user_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'TIME_SLOT_CONFLICT'
        assert response.data['message'] == (
            "The selected time slot is not available. Please choose a different time."
        )

    def test_foreign_vehicle_returns_empty_404(self, user_headers, booking_data, other_user_id):
        foreign = Vehicle.objects.create(user_id=other_user_id, make='Kia')
        booking_data['vehicle_id'] = str(foreign.id)

        response = self.client.post(BOOKINGS_URL, booking_data, format='json', **user_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b''

    def test_validation_failure_lists_errors(self, user_headers, booking_data):
        booking_data['notes'] = 'x' * 501

        response = self.client.post(BOOKINGS_URL, booking_data, format='json', **user_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'
        assert response.data['errors'] == ["Notes cannot exceed 500 characters."]


@pytest.mark.django_db
class TestBookingDetailAPI:

    def setup_method(self):
        self.client = APIClient()

    def test_owner_can_retrieve(self, user_headers, create_booking):
        booking = create_booking()

        response = self.client.get(detail_url(booking.id), **user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(booking.id)
        assert response.data['address_info'] == '12 King Fahd Road'

    def test_company_can_retrieve(self, company_headers, create_booking):
        booking = create_booking()

        response = self.client.get(detail_url(booking.id), **company_headers)

        assert response.status_code == status.HTTP_200_OK

    def test_stranger_gets_404(self, create_booking):
        booking = create_booking()

        response = self.client.get(detail_url(booking.id), HTTP_X_USER_ID=str(uuid.uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reschedule(self, user_headers, create_booking, slot_start):
        booking = create_booking()
        new_start = slot_start + timedelta(hours=2)

        response = self.client.patch(
            detail_url(booking.id),
            {'start_date_time': new_start.isoformat()},
            format='json',
            **user_headers
        )

        assert response.status_code == status.HTTP_200_OK
        booking.refresh_from_db()
        assert booking.start_date_time == new_start
        assert booking.end_date_time == new_start + timedelta(minutes=30)

    def test_update_in_progress_rejected(self, user_headers, create_booking):
        booking = create_booking(status=Booking.Status.IN_PROGRESS)

        response = self.client.put(
            detail_url(booking.id), {'notes': 'too late'}, format='json', **user_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'INVALID_STATE_TRANSITION'
        assert response.data['message'] == "Cannot update booking with status in_progress"


@pytest.mark.django_db
class TestBookingWorkflowAPI:

    def setup_method(self):
        self.client = APIClient()

    def test_full_lifecycle(self, company_headers, create_booking):
        booking = create_booking()

        for suffix, message in [
            ('confirm/', 'Booking confirmed successfully'),
            ('start/', 'Service started successfully'),
            ('complete/', 'Service completed successfully'),
        ]:
            response = self.client.put(detail_url(booking.id, suffix), **company_headers)
            assert response.status_code == status.HTTP_200_OK
            assert response.data == {'message': message}

        booking.refresh_from_db()
        assert booking.status == Booking.Status.COMPLETED

    def test_confirm_twice(self, company_headers, create_booking):
        booking = create_booking()
        self.client.put(detail_url(booking.id, 'confirm/'), **company_headers)

        response = self.client.put(detail_url(booking.id, 'confirm/'), **company_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Only pending bookings can be confirmed'

    def test_other_company_gets_404(self, create_booking, other_company):
        booking = create_booking()

        response = self.client.put(
            detail_url(booking.id, 'confirm/'), HTTP_X_COMPANY_ID=str(other_company.id)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_user_cannot_confirm(self, user_headers, create_booking):
        booking = create_booking()

        response = self.client.put(detail_url(booking.id, 'confirm/'), **user_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_cancel(self, user_headers, create_booking):
        booking = create_booking()

        response = self.client.put(detail_url(booking.id, 'cancel/'), **user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'message': 'Booking cancelled successfully'}

    def test_cancel_completed_rejected(self, user_headers, create_booking):
        booking = create_booking(status=Booking.Status.COMPLETED)

        response = self.client.put(detail_url(booking.id, 'cancel/'), **user_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Cannot cancel booking with status completed'


@pytest.mark.django_db
class TestAvailabilityAndListingsAPI:

    def setup_method(self):
        self.client = APIClient()

    def test_check_availability(self, user_headers, create_booking, company_id, slot_start):
        booking = create_booking()
        params = {
            'company_id': str(company_id),
            'start_time': (slot_start + timedelta(minutes=15)).isoformat(),
            'end_time': (slot_start + timedelta(minutes=45)).isoformat(),
        }

        response = self.client.get(f'{BOOKINGS_URL}check-availability/', params, **user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_available'] is False
        assert str(response.data['company_id']) == str(company_id)

        params['exclude_booking_id'] = str(booking.id)
        response = self.client.get(f'{BOOKINGS_URL}check-availability/', params, **user_headers)

        assert response.data['is_available'] is True

    def test_check_availability_rejects_inverted_interval(self, user_headers, company_id, slot_start):
        response = self.client.get(
            f'{BOOKINGS_URL}check-availability/',
            {
                'company_id': str(company_id),
                'start_time': slot_start.isoformat(),
                'end_time': (slot_start - timedelta(minutes=30)).isoformat(),
            },
            **user_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_my_bookings(self, user_headers, create_booking, slot_start):
        create_booking()
        create_booking(
            start_date_time=slot_start + timedelta(days=1),
            end_date_time=slot_start + timedelta(days=1, minutes=30),
        )
        create_booking(user_id=uuid.uuid4())

        response = self.client.get(f'{BOOKINGS_URL}my-bookings/', **user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2

    def test_upcoming_and_history(self, user_headers, create_booking, now):
        past_start = now - timedelta(days=3)
        create_booking(
            start_date_time=past_start,
            end_date_time=past_start + timedelta(minutes=30),
            status=Booking.Status.COMPLETED,
        )
        create_booking()

        upcoming = self.client.get(f'{BOOKINGS_URL}my-bookings/upcoming/', **user_headers)
        history = self.client.get(f'{BOOKINGS_URL}my-bookings/history/', **user_headers)

        assert len(upcoming.data) == 1
        assert upcoming.data[0]['status'] == Booking.Status.PENDING
        assert len(history.data) == 1
        assert history.data[0]['status'] == Booking.Status.COMPLETED

    def test_company_listing_filters_and_paginates(
        self, company_headers, create_booking, slot_start, other_company
    ):
        create_booking()
        create_booking(
            start_date_time=slot_start + timedelta(hours=1),
            end_date_time=slot_start + timedelta(hours=1, minutes=30),
            status=Booking.Status.CONFIRMED,
        )
        create_booking(company_id=other_company.id)

        response = self.client.get(f'{BOOKINGS_URL}company/', **company_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

        response = self.client.get(
            f'{BOOKINGS_URL}company/', {'status': 'confirmed'}, **company_headers
        )

        assert response.data['count'] == 1
        assert response.data['results'][0]['status'] == Booking.Status.CONFIRMED
