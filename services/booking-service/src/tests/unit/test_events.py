# services/booking-service/src/tests/unit/test_events.py
"""
Unit Tests for event publishing
"""

import json
import uuid
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from django.test import override_settings
from django.utils import timezone

from apps.core.events import EventPublisher, EventType, JSONEncoder, event_publisher
from apps.core.models import Booking, Payment


class TestEventPublisher:

    def test_encoder_handles_domain_types(self):
        value = {
            'id': uuid.UUID('00000000-0000-4000-8000-000000000002'),
            'amount': Decimal('25.50'),
            'at': timezone.now(),
        }

        decoded = json.loads(json.dumps(value, cls=JSONEncoder))

        assert decoded['id'] == '00000000-0000-4000-8000-000000000002'
        assert decoded['amount'] == '25.50'

    def test_envelope(self):
        company_id = uuid.uuid4()
        event = EventPublisher().build_event(EventType.BOOKING_CREATED, {'a': 1}, company_id)

        assert event['event_type'] == 'booking.created'
        assert event['service'] == 'booking-service'
        assert event['company_id'] == str(company_id)
        assert event['payload'] == {'a': 1}

    @override_settings(EVENT_PUBLISHING_ENABLED=False)
    def test_disabled(self):
        assert EventPublisher().publish(EventType.BOOKING_CREATED, {}) is False

    @override_settings(EVENT_BACKEND='redis')
    def test_redis_backend_publishes_to_channel(self):
        publisher = EventPublisher()
        publisher._redis = MagicMock()

        assert publisher.publish(EventType.BOOKING_CONFIRMED, {'booking_id': 'b1'})

        channel, body = publisher._redis.publish.call_args[0]
        assert channel == 'events:booking.confirmed'
        assert json.loads(body)['payload'] == {'booking_id': 'b1'}

    @override_settings(EVENT_BACKEND='redis')
    def test_backend_failure_is_reported_not_raised(self):
        publisher = EventPublisher()
        publisher._redis = MagicMock()
        publisher._redis.publish.side_effect = ConnectionError('redis down')

        assert publisher.publish(EventType.BOOKING_CONFIRMED, {}) is False


@pytest.mark.django_db
class TestBookingSignals:

    def _published(self, mock_publish):
        return [call.args[0] for call in mock_publish.call_args_list]

    def test_lifecycle_events_published_on_commit(
        self, create_booking, django_capture_on_commit_callbacks
    ):
        with patch.object(event_publisher, 'publish') as mock_publish:
            with django_capture_on_commit_callbacks(execute=True):
                booking = create_booking()

            with django_capture_on_commit_callbacks(execute=True):
                booking.status = Booking.Status.CONFIRMED
                booking.save()

        assert self._published(mock_publish) == [
            EventType.BOOKING_CREATED,
            EventType.BOOKING_CONFIRMED,
        ]

    def test_reschedule_and_paid_events(self, create_booking, django_capture_on_commit_callbacks):
        booking = create_booking()

        with patch.object(event_publisher, 'publish') as mock_publish:
            with django_capture_on_commit_callbacks(execute=True):
                booking.start_date_time += timedelta(hours=1)
                booking.end_date_time += timedelta(hours=1)
                booking.is_paid = True
                booking.save()

        assert self._published(mock_publish) == [
            EventType.BOOKING_RESCHEDULED,
            EventType.BOOKING_PAID,
        ]

    def test_nothing_published_without_commit(self, create_booking, django_capture_on_commit_callbacks):
        with patch.object(event_publisher, 'publish') as mock_publish:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                create_booking()

        assert len(callbacks) == 1
        mock_publish.assert_not_called()

    def test_payment_status_change_published_but_not_creation(
        self, create_booking, create_payment, django_capture_on_commit_callbacks
    ):
        booking = create_booking()

        with patch.object(event_publisher, 'publish') as mock_publish:
            with django_capture_on_commit_callbacks(execute=True):
                payment = create_payment(booking)

            assert EventType.PAYMENT_STATUS_CHANGED not in self._published(mock_publish)

            with django_capture_on_commit_callbacks(execute=True):
                payment.status = Payment.Status.COMPLETED
                payment.save()

        assert self._published(mock_publish) == [EventType.PAYMENT_STATUS_CHANGED]
        payload = mock_publish.call_args.args[1]
        assert payload['old_status'] == Payment.Status.PENDING
        assert payload['new_status'] == Payment.Status.COMPLETED
