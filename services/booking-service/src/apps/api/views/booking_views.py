# services/booking-service/src/apps/api/views/booking_views.py
"""
Booking API Views

Users create, reschedule and cancel their bookings; companies move their
bookings through the service lifecycle.
"""

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from shared.common.permissions import IsCompanyPrincipal, IsUserPrincipal

from apps.core.models import Booking
from apps.core.services import BookingService
from apps.api.serializers import (
    AvailabilityQuerySerializer,
    BookingCreateSerializer,
    BookingDetailSerializer,
    BookingUpdateSerializer,
)
from .filters import BookingFilter
from .mixins import ServiceErrorMixin
from .pagination import StandardResultsSetPagination

logger = logging.getLogger(__name__)


UUID_PATTERN = '[0-9a-fA-F-]{36}'


class BookingViewSet(ServiceErrorMixin, viewsets.GenericViewSet):
    """
    ViewSet for booking management.

    Every write goes through BookingService; the viewset only parses the
    request and renders the result.
    """

    queryset = Booking.objects.all()
    serializer_class = BookingDetailSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilter
    lookup_value_regex = UUID_PATTERN

    user_actions = {
        'create', 'update', 'partial_update', 'cancel',
        'my_bookings', 'upcoming', 'history',
    }
    company_actions = {'confirm', 'start', 'complete', 'company'}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.booking_service = BookingService()

    def get_permissions(self):
        if self.action in self.user_actions:
            return [IsAuthenticated(), IsUserPrincipal()]
        if self.action in self.company_actions:
            return [IsAuthenticated(), IsCompanyPrincipal()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        if self.action == 'create':
            return BookingCreateSerializer
        if self.action in ['update', 'partial_update']:
            return BookingUpdateSerializer
        return BookingDetailSerializer

    # ==========================================================================
    # CRUD
    # ==========================================================================

    def create(self, request, *args, **kwargs):
        """Create a new booking."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = self.booking_service.create_booking(
            user_id=request.user.user_id,
            **serializer.validated_data
        )
        self.booking_service.attach_details([booking])

        return Response(
            BookingDetailSerializer(booking).data,
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, *args, **kwargs):
        booking = self.booking_service.get_booking_details(
            kwargs['pk'],
            user_id=request.user.user_id,
            company_id=request.user.company_id,
        )
        return Response(BookingDetailSerializer(booking).data)

    def update(self, request, *args, **kwargs):
        """Reschedule a booking or change its notes."""
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        booking = self.booking_service.update_booking(
            kwargs['pk'],
            request.user.user_id,
            **serializer.validated_data
        )
        self.booking_service.attach_details([booking])

        return Response(BookingDetailSerializer(booking).data)

    def partial_update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return self.update(request, *args, **kwargs)

    # ==========================================================================
    # Workflow Actions
    # ==========================================================================

    @action(detail=True, methods=['put'])
    def cancel(self, request, pk=None):
        """Cancel a booking."""
        self.booking_service.cancel_booking(pk, request.user.user_id)
        return Response({'message': 'Booking cancelled successfully'})

    @action(detail=True, methods=['put'])
    def confirm(self, request, pk=None):
        """Confirm a pending booking."""
        self.booking_service.confirm_booking(pk, request.user.company_id)
        return Response({'message': 'Booking confirmed successfully'})

    @action(detail=True, methods=['put'])
    def start(self, request, pk=None):
        """Start the service for a confirmed booking."""
        self.booking_service.start_service(pk, request.user.company_id)
        return Response({'message': 'Service started successfully'})

    @action(detail=True, methods=['put'])
    def complete(self, request, pk=None):
        """Complete an in-progress service."""
        self.booking_service.complete_service(pk, request.user.company_id)
        return Response({'message': 'Service completed successfully'})

    # ==========================================================================
    # Availability
    # ==========================================================================

    @action(detail=False, methods=['get'], url_path='check-availability')
    def check_availability(self, request):
        """Whether a company's slot is free."""
        serializer = AvailabilityQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        is_available = self.booking_service.is_time_slot_available(
            data['company_id'],
            data['start_time'],
            data['end_time'],
            exclude_booking_id=data.get('exclude_booking_id'),
        )

        return Response({
            'is_available': is_available,
            'company_id': data['company_id'],
            'start_time': data['start_time'],
            'end_time': data['end_time'],
        })

    # ==========================================================================
    # Listings
    # ==========================================================================

    @action(detail=False, methods=['get'], url_path='my-bookings')
    def my_bookings(self, request):
        bookings = self.booking_service.list_user_bookings(request.user.user_id)
        return Response(BookingDetailSerializer(bookings, many=True).data)

    @action(detail=False, methods=['get'], url_path='my-bookings/upcoming')
    def upcoming(self, request):
        bookings = self.booking_service.list_upcoming_user_bookings(request.user.user_id)
        return Response(BookingDetailSerializer(bookings, many=True).data)

    @action(detail=False, methods=['get'], url_path='my-bookings/history')
    def history(self, request):
        bookings = self.booking_service.list_past_user_bookings(request.user.user_id)
        return Response(BookingDetailSerializer(bookings, many=True).data)

    @action(detail=False, methods=['get'])
    def company(self, request):
        """The acting company's bookings, filtered and paginated."""
        queryset = self.filter_queryset(
            self.booking_service.list_company_bookings(request.user.company_id)
        )

        page = self.paginate_queryset(queryset)
        if page is not None:
            self.booking_service.attach_details(page)
            return self.get_paginated_response(BookingDetailSerializer(page, many=True).data)

        bookings = self.booking_service.attach_details(queryset)
        return Response(BookingDetailSerializer(bookings, many=True).data)
