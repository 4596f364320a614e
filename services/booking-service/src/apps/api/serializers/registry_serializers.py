# services/booking-service/src/apps/api/serializers/registry_serializers.py
"""
Registry Serializers

Vehicles, addresses, company profiles and service options.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.core.models import Company, ServiceOption, Vehicle, UserAddress


class VehicleSerializer(serializers.ModelSerializer):

    description = serializers.CharField(read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            'id', 'user_id', 'make', 'model', 'year', 'license_plate', 'description',
        ]
        read_only_fields = ['id', 'user_id']


class UserAddressSerializer(serializers.ModelSerializer):

    class Meta:
        model = UserAddress
        fields = ['id', 'user_id', 'address_line', 'city', 'area']
        read_only_fields = ['id', 'user_id']


class CompanySerializer(serializers.ModelSerializer):

    class Meta:
        model = Company
        fields = ['id', 'name', 'phone', 'description']
        read_only_fields = ['id']


class ServiceOptionSerializer(serializers.ModelSerializer):
    """Bookable offering; the company comes from the acting principal."""

    name = serializers.CharField(min_length=2, max_length=150)
    duration_minutes = serializers.IntegerField(min_value=1, max_value=24 * 60, required=False)
    price = serializers.DecimalField(
        max_digits=18,
        decimal_places=2,
        min_value=Decimal('0.00'),
        max_value=Decimal('999999.99'),
        required=False,
    )

    class Meta:
        model = ServiceOption
        fields = ['id', 'company_id', 'name', 'description', 'duration_minutes', 'price']
        read_only_fields = ['id', 'company_id']
