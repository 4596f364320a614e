# shared/common/authentication.py
"""
Principal Authentication

The identity provider sits in front of the service and forwards the
acting user and/or company as request headers. This module turns those
headers into a request principal; it performs no credential checks.
"""

import logging
import uuid
from typing import Any, Optional, Tuple

from rest_framework import authentication, exceptions
from rest_framework.request import Request

logger = logging.getLogger(__name__)

USER_HEADER = 'X-User-ID'
COMPANY_HEADER = 'X-Company-ID'


class HeaderPrincipalAuthentication(authentication.BaseAuthentication):
    """
    Builds a Principal from the X-User-ID / X-Company-ID headers.

    Returns None (anonymous) when neither header is present so that
    permission classes decide the response.
    """

    def authenticate(self, request: Request) -> Optional[Tuple[Any, None]]:
        user_id = self._parse_header(request, USER_HEADER)
        company_id = self._parse_header(request, COMPANY_HEADER)

        if user_id is None and company_id is None:
            return None

        return (Principal(user_id=user_id, company_id=company_id), None)

    def _parse_header(self, request: Request, header: str) -> Optional[uuid.UUID]:
        raw = request.headers.get(header)
        if not raw:
            return None
        try:
            return uuid.UUID(raw)
        except ValueError:
            logger.warning(f"Malformed {header} header: {raw!r}")
            raise exceptions.AuthenticationFailed(f'Invalid {header} header')

    def authenticate_header(self, request: Request) -> str:
        return 'Principal'


class Principal:
    """
    Acting principal for a request.

    Either id may be None: a user acting on their own bookings carries
    ``user_id``, a company acting on its schedule carries ``company_id``.
    """

    is_active = True
    is_authenticated = True
    is_anonymous = False

    def __init__(self, user_id: Optional[uuid.UUID] = None, company_id: Optional[uuid.UUID] = None):
        self.user_id = user_id
        self.company_id = company_id

    @property
    def id(self):
        return self.user_id or self.company_id

    def __str__(self):
        return f"Principal(user={self.user_id}, company={self.company_id})"
