# services/booking-service/src/apps/core/state_machine.py
"""
Booking status transitions.
"""

from apps.core.models import Booking

Status = Booking.Status

ALLOWED_TRANSITIONS = {
    Status.PENDING: {Status.CONFIRMED, Status.CANCELLED},
    Status.CONFIRMED: {Status.IN_PROGRESS, Status.CANCELLED},
    Status.IN_PROGRESS: {Status.COMPLETED, Status.CANCELLED},
    Status.COMPLETED: set(),  # Terminal state
    Status.CANCELLED: set(),  # Terminal state
    Status.NO_SHOW: set(),  # Terminal state
}


def can_transition(current: str, target: str) -> bool:
    """Whether a booking in ``current`` may move to ``target``."""
    return target in ALLOWED_TRANSITIONS.get(current, set())


def allowed_targets(current: str) -> set:
    return set(ALLOWED_TRANSITIONS.get(current, set()))
