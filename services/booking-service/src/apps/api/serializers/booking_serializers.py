# services/booking-service/src/apps/api/serializers/booking_serializers.py
"""
Booking Serializers
"""

from rest_framework import serializers

from apps.core.models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Base booking serializer."""

    status_display = serializers.CharField(
        source='get_status_display',
        read_only=True
    )
    duration_minutes = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            'id', 'user_id', 'company_id', 'service_option_id',
            'vehicle_id', 'address_id',
            'start_date_time', 'end_date_time', 'duration_minutes',
            'status', 'status_display',
            'notes', 'is_paid',
            'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'user_id', 'company_id', 'service_option_id',
            'vehicle_id', 'address_id',
            'start_date_time', 'end_date_time',
            'status', 'notes', 'is_paid',
            'created_at', 'updated_at',
        ]

    def get_duration_minutes(self, obj) -> int:
        return int(obj.duration_minutes)


class BookingDetailSerializer(BookingSerializer):
    """Booking with display fields from the company, catalog and user registries."""

    company_name = serializers.SerializerMethodField()
    service_name = serializers.SerializerMethodField()
    price = serializers.SerializerMethodField()
    vehicle_info = serializers.SerializerMethodField()
    address_info = serializers.SerializerMethodField()

    class Meta(BookingSerializer.Meta):
        fields = BookingSerializer.Meta.fields + [
            'company_name', 'service_name', 'price', 'vehicle_info', 'address_info',
        ]

    def get_company_name(self, obj):
        return getattr(obj, 'company_name', None)

    def get_service_name(self, obj):
        return getattr(obj, 'service_name', None)

    def get_price(self, obj):
        price = getattr(obj, 'price', None)
        return str(price) if price is not None else None

    def get_vehicle_info(self, obj):
        return getattr(obj, 'vehicle_info', None)

    def get_address_info(self, obj):
        return getattr(obj, 'address_info', None)


class BookingCreateSerializer(serializers.Serializer):
    """
    Request body for creating a booking.

    The company and end time are derived from the service option, so they
    are not accepted here.
    """

    service_option_id = serializers.UUIDField()
    vehicle_id = serializers.UUIDField()
    address_id = serializers.UUIDField()
    start_date_time = serializers.DateTimeField()
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class BookingUpdateSerializer(serializers.Serializer):
    """Request body for rescheduling a booking or changing its notes."""

    start_date_time = serializers.DateTimeField(required=False)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query parameters for the availability check."""

    company_id = serializers.UUIDField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    exclude_booking_id = serializers.UUIDField(required=False, allow_null=True)

    def validate(self, data):
        if data['end_time'] <= data['start_time']:
            raise serializers.ValidationError({
                'end_time': 'End time must be after start time'
            })
        return data
