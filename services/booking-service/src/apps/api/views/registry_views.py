# services/booking-service/src/apps/api/views/registry_views.py
"""
Registry API Views

Users keep their vehicles and addresses on file; companies publish their
profile and the service options they offer.
"""

import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from shared.common.permissions import IsCompanyPrincipal, IsUserPrincipal

from apps.core.models import Company, ServiceOption, Vehicle, UserAddress
from apps.core.services import RegistryService
from apps.api.serializers import (
    CompanySerializer,
    ServiceOptionSerializer,
    UserAddressSerializer,
    VehicleSerializer,
)
from .booking_views import UUID_PATTERN
from .mixins import ServiceErrorMixin

logger = logging.getLogger(__name__)


class UserRegistryViewSet(ServiceErrorMixin, viewsets.ModelViewSet):
    """Base for registries owned by the acting user."""

    lookup_value_regex = UUID_PATTERN

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.registry_service = RegistryService()

    def get_permissions(self):
        return [IsAuthenticated(), IsUserPrincipal()]


class VehicleViewSet(UserRegistryViewSet):
    """The acting user's vehicles. Other users' vehicles answer 404."""

    serializer_class = VehicleSerializer

    def get_queryset(self):
        return Vehicle.objects.filter(
            user_id=self.request.user.user_id
        ).order_by('make', 'model', 'id')

    def perform_create(self, serializer):
        serializer.instance = self.registry_service.create_vehicle(
            self.request.user.user_id, **serializer.validated_data
        )

    def perform_destroy(self, instance):
        self.registry_service.delete_vehicle(instance)


class UserAddressViewSet(UserRegistryViewSet):
    """The acting user's saved addresses."""

    serializer_class = UserAddressSerializer

    def get_queryset(self):
        return UserAddress.objects.filter(
            user_id=self.request.user.user_id
        ).order_by('address_line', 'id')

    def perform_create(self, serializer):
        serializer.instance = self.registry_service.create_address(
            self.request.user.user_id, **serializer.validated_data
        )

    def perform_destroy(self, instance):
        self.registry_service.delete_address(instance)


class CompanyViewSet(ServiceErrorMixin, viewsets.ReadOnlyModelViewSet):
    """
    Company directory.

    Any principal may browse; a company manages its own profile under
    ``me/``.
    """

    queryset = Company.objects.all()
    serializer_class = CompanySerializer
    lookup_value_regex = UUID_PATTERN

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.registry_service = RegistryService()

    def get_permissions(self):
        if self.action == 'me':
            return [IsAuthenticated(), IsCompanyPrincipal()]
        return [IsAuthenticated()]

    @action(detail=False, methods=['get', 'put'])
    def me(self, request):
        """The acting company's profile; PUT creates or replaces it."""
        company_id = request.user.company_id

        if request.method == 'GET':
            company = self.registry_service.get_company(company_id)
            return Response(CompanySerializer(company).data)

        serializer = CompanySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        company = self.registry_service.save_company_profile(
            company_id, **serializer.validated_data
        )
        return Response(CompanySerializer(company).data)


class ServiceOptionViewSet(ServiceErrorMixin, viewsets.ModelViewSet):
    """
    Service options.

    Anyone may list and filter by ``company_id``; only the owning company
    may add, change or remove its options.
    """

    serializer_class = ServiceOptionSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['company_id']
    lookup_value_regex = UUID_PATTERN

    write_actions = {'create', 'update', 'partial_update', 'destroy'}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.registry_service = RegistryService()

    def get_permissions(self):
        if self.action in self.write_actions:
            return [IsAuthenticated(), IsCompanyPrincipal()]
        return [IsAuthenticated()]

    def get_queryset(self):
        queryset = ServiceOption.objects.all()
        if self.action in self.write_actions:
            queryset = queryset.filter(company_id=self.request.user.company_id)
        return queryset.order_by('name', 'id')

    def perform_create(self, serializer):
        serializer.instance = self.registry_service.create_service_option(
            self.request.user.company_id, **serializer.validated_data
        )

    def perform_destroy(self, instance):
        self.registry_service.delete_service_option(instance)
