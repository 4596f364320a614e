# services/booking-service/src/apps/core/events.py
"""
Booking Service Events

Event definitions and publishing for the booking service. Events are
published once the surrounding transaction commits, so a rolled-back
operation never announces anything.
"""

import json
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict
from uuid import UUID

import redis
from django.conf import settings
from django.db import transaction
from django.utils import timezone

logger = logging.getLogger(__name__)


class EventType:
    """Event type constants for booking service."""

    # Booking lifecycle events
    BOOKING_CREATED = 'booking.created'
    BOOKING_RESCHEDULED = 'booking.rescheduled'
    BOOKING_CONFIRMED = 'booking.confirmed'
    BOOKING_STARTED = 'booking.started'
    BOOKING_COMPLETED = 'booking.completed'
    BOOKING_CANCELLED = 'booking.cancelled'

    # Payment linkage events
    BOOKING_PAID = 'booking.paid'
    BOOKING_UNPAID = 'booking.unpaid'
    PAYMENT_STATUS_CHANGED = 'payment.status_changed'


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for event payloads."""

    def default(self, obj):
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


class EventPublisher:
    """
    Event publisher for booking service.

    Backends are selected by ``EVENT_BACKEND``: ``log`` (default) writes
    the envelope to the logger, ``redis`` publishes it on the pub/sub
    channel ``events:<event_type>``.
    """

    def __init__(self):
        self.service_name = getattr(settings, 'SERVICE_NAME', 'booking-service')
        self._redis = None

    @property
    def enabled(self) -> bool:
        return getattr(settings, 'EVENT_PUBLISHING_ENABLED', True)

    @property
    def backend(self) -> str:
        return getattr(settings, 'EVENT_BACKEND', 'log')

    def build_event(
        self,
        event_type: str,
        payload: Dict[str, Any],
        company_id: UUID = None
    ) -> Dict[str, Any]:
        return {
            'event_type': event_type,
            'service': self.service_name,
            'timestamp': timezone.now().isoformat(),
            'company_id': str(company_id) if company_id else None,
            'payload': payload,
        }

    def publish(
        self,
        event_type: str,
        payload: Dict[str, Any],
        company_id: UUID = None
    ) -> bool:
        """
        Publish an event immediately.

        Returns:
            True if published successfully, False otherwise
        """
        if not self.enabled:
            logger.debug(f"Event publishing disabled, skipping: {event_type}")
            return False

        event = self.build_event(event_type, payload, company_id)

        try:
            event_json = json.dumps(event, cls=JSONEncoder)

            logger.info(f"Publishing event: {event_type}", extra={
                'event_type': event_type,
                'company_id': event['company_id'],
            })

            self._publish_to_backend(event_type, event_json)

            return True

        except Exception as e:
            logger.error(f"Failed to publish event {event_type}: {e}")
            return False

    def publish_on_commit(
        self,
        event_type: str,
        payload: Dict[str, Any],
        company_id: UUID = None
    ) -> None:
        """Defer publishing until the current transaction commits."""
        transaction.on_commit(lambda: self.publish(event_type, payload, company_id))

    def _publish_to_backend(self, event_type: str, event_json: str):
        if self.backend == 'redis':
            self._publish_redis(event_type, event_json)
        else:
            logger.debug(f"Event payload: {event_json[:500]}")

    def _publish_redis(self, event_type: str, event_json: str):
        """Publish to Redis pub/sub."""
        if self._redis is None:
            self._redis = redis.Redis.from_url(
                getattr(settings, 'EVENT_REDIS_URL', 'redis://localhost:6379/0')
            )
        self._redis.publish(f"events:{event_type}", event_json)


# Global event publisher instance
event_publisher = EventPublisher()


def booking_payload(booking) -> Dict[str, Any]:
    return {
        'booking_id': booking.id,
        'user_id': booking.user_id,
        'company_id': booking.company_id,
        'service_option_id': booking.service_option_id,
        'vehicle_id': booking.vehicle_id,
        'address_id': booking.address_id,
        'status': booking.status,
        'start_date_time': booking.start_date_time,
        'end_date_time': booking.end_date_time,
        'is_paid': booking.is_paid,
    }


def publish_booking_event(event_type: str, booking, **extra):
    """Publish a booking lifecycle event after commit."""
    payload = booking_payload(booking)
    payload.update(extra)
    event_publisher.publish_on_commit(event_type, payload, company_id=booking.company_id)


def publish_payment_status_changed(payment, old_status: str):
    event_publisher.publish_on_commit(
        EventType.PAYMENT_STATUS_CHANGED,
        payload={
            'payment_id': payment.id,
            'booking_id': payment.booking_id,
            'user_id': payment.user_id,
            'amount': payment.amount,
            'method': payment.method,
            'old_status': old_status,
            'new_status': payment.status,
        },
    )
