# services/booking-service/src/apps/core/locks.py
"""
Per-company schedule lock.

Serialises the conflict check and the write for one company. Must be
called inside ``transaction.atomic``; the lock is released on commit or
rollback.
"""

import uuid
import logging

from django.db import connection

logger = logging.getLogger(__name__)


def company_lock_key(company_id: uuid.UUID) -> int:
    """Signed 64-bit advisory lock key for a company id."""
    if not isinstance(company_id, uuid.UUID):
        company_id = uuid.UUID(str(company_id))
    return (company_id.int >> 64) - 2 ** 63


def lock_company_schedule(company_id: uuid.UUID) -> None:
    """Take the transaction-scoped schedule lock for ``company_id``."""
    if connection.vendor != 'postgresql':
        logger.debug(f"Schedule lock skipped for company {company_id} on {connection.vendor}")
        return

    with connection.cursor() as cursor:
        cursor.execute('SELECT pg_advisory_xact_lock(%s)', [company_lock_key(company_id)])
