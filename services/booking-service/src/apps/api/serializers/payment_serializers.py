# services/booking-service/src/apps/api/serializers/payment_serializers.py
"""
Payment Serializers
"""

from rest_framework import serializers

from apps.core.models import Payment


class PaymentSerializer(serializers.ModelSerializer):

    method_display = serializers.CharField(source='get_method_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'booking_id', 'user_id',
            'amount', 'method', 'method_display',
            'status', 'status_display',
            'transaction_id',
            'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'booking_id', 'user_id', 'amount', 'method', 'status',
            'transaction_id', 'created_at', 'updated_at',
        ]


class PaymentCreateSerializer(serializers.Serializer):
    """Amount and transaction id limits are checked by the payment service."""

    booking_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=18, decimal_places=2)
    method = serializers.ChoiceField(choices=Payment.Method.choices, default=Payment.Method.CARD)
    transaction_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class PaymentStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Payment.Status.choices)
