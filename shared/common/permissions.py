# shared/common/permissions.py
"""
Permission classes for the acting principal.
"""

from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.views import APIView


class BasePrincipalPermission(permissions.BasePermission):
    """Base permission class with utility methods"""

    def get_principal_attr(self, request: Request, name: str):
        user = getattr(request, 'user', None)
        if not user or not getattr(user, 'is_authenticated', False):
            return None
        return getattr(user, name, None)


class IsUserPrincipal(BasePrincipalPermission):
    """Request must carry an acting user id"""

    message = 'A user identity is required for this operation.'

    def has_permission(self, request: Request, view: APIView) -> bool:
        return self.get_principal_attr(request, 'user_id') is not None


class IsCompanyPrincipal(BasePrincipalPermission):
    """Request must carry an acting company id"""

    message = 'A company identity is required for this operation.'

    def has_permission(self, request: Request, view: APIView) -> bool:
        return self.get_principal_attr(request, 'company_id') is not None
