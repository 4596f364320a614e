# services/booking-service/src/apps/core/signals.py
"""
Django Signals for Booking Service

Track status, schedule and paid-flag changes and publish the matching
events.
"""

import logging
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from .models import Booking, Payment
from .events import EventType, publish_booking_event, publish_payment_status_changed

logger = logging.getLogger(__name__)


STATUS_EVENTS = {
    Booking.Status.CONFIRMED: EventType.BOOKING_CONFIRMED,
    Booking.Status.IN_PROGRESS: EventType.BOOKING_STARTED,
    Booking.Status.COMPLETED: EventType.BOOKING_COMPLETED,
    Booking.Status.CANCELLED: EventType.BOOKING_CANCELLED,
}


# ==========================================================================
# Booking Signals
# ==========================================================================

@receiver(pre_save, sender=Booking)
def booking_pre_save(sender, instance, **kwargs):
    """Remember the stored state before save."""
    previous = (
        Booking.objects.filter(pk=instance.pk)
        .values('status', 'start_date_time', 'is_paid')
        .first()
    )
    instance._previous = previous


@receiver(post_save, sender=Booking)
def booking_post_save(sender, instance, created, **kwargs):
    """Publish booking lifecycle events."""
    previous = getattr(instance, '_previous', None)

    if created or previous is None:
        publish_booking_event(EventType.BOOKING_CREATED, instance)
        logger.info(f"Booking created: {instance.id}")
        return

    if previous['status'] != instance.status:
        event_type = STATUS_EVENTS.get(instance.status)
        if event_type:
            publish_booking_event(event_type, instance, previous_status=previous['status'])
            logger.info(f"Booking {instance.id} moved {previous['status']} -> {instance.status}")

    if previous['start_date_time'] != instance.start_date_time:
        publish_booking_event(
            EventType.BOOKING_RESCHEDULED,
            instance,
            previous_start_date_time=previous['start_date_time'],
        )

    if previous['is_paid'] != instance.is_paid:
        event_type = EventType.BOOKING_PAID if instance.is_paid else EventType.BOOKING_UNPAID
        publish_booking_event(event_type, instance)


# ==========================================================================
# Payment Signals
# ==========================================================================

@receiver(pre_save, sender=Payment)
def payment_pre_save(sender, instance, **kwargs):
    instance._old_status = (
        Payment.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
    )


@receiver(post_save, sender=Payment)
def payment_status_change(sender, instance, created, **kwargs):
    if created:
        return

    old_status = getattr(instance, '_old_status', None)
    if old_status == instance.status:
        return

    publish_payment_status_changed(instance, old_status)
