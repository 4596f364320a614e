# services/booking-service/src/apps/api/views/payment_views.py
"""
Payment API Views
"""

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from shared.common.permissions import IsUserPrincipal

from apps.core.models import Payment
from apps.core.services import PaymentService
from apps.api.serializers import (
    PaymentCreateSerializer,
    PaymentSerializer,
    PaymentStatusUpdateSerializer,
)
from .booking_views import UUID_PATTERN
from .mixins import ServiceErrorMixin

logger = logging.getLogger(__name__)


class PaymentViewSet(ServiceErrorMixin, viewsets.GenericViewSet):
    """
    ViewSet for payment records.

    Status changes are reported by whoever settles the payment; refunds
    are requested by the paying user.
    """

    queryset = Payment.objects.all()
    serializer_class = PaymentSerializer
    lookup_value_regex = UUID_PATTERN

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.payment_service = PaymentService()

    def get_permissions(self):
        if self.action == 'update_status':
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsUserPrincipal()]

    def create(self, request, *args, **kwargs):
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = self.payment_service.create_payment(
            user_id=request.user.user_id,
            **serializer.validated_data
        )

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        payment = self.payment_service.get_payment(pk, request.user.user_id)
        return Response(PaymentSerializer(payment).data)

    @action(detail=False, methods=['get'], url_path='my-payments')
    def my_payments(self, request):
        payments = self.payment_service.list_user_payments(request.user.user_id)
        return Response(PaymentSerializer(payments, many=True).data)

    @action(detail=False, methods=['get'], url_path=f'booking/(?P<booking_id>{UUID_PATTERN})')
    def for_booking(self, request, booking_id=None):
        payment = self.payment_service.get_booking_payment(booking_id, request.user.user_id)
        return Response(PaymentSerializer(payment).data)

    @action(detail=True, methods=['put'], url_path='status')
    def update_status(self, request, pk=None):
        serializer = PaymentStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = self.payment_service.update_status(pk, serializer.validated_data['status'])

        return Response(PaymentSerializer(payment).data)

    @action(detail=True, methods=['put', 'post'])
    def refund(self, request, pk=None):
        payment = self.payment_service.refund(pk, request.user.user_id)
        return Response(PaymentSerializer(payment).data)
