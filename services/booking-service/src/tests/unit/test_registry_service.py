# services/booking-service/src/tests/unit/test_registry_service.py
"""
Unit Tests for RegistryService
"""

import uuid

import pytest

from apps.core.models import Booking, Company, ServiceOption, UserAddress, Vehicle
from apps.core.services import (
    RegistryInUseError,
    RegistryService,
    ResourceNotFoundError,
)


@pytest.fixture
def registry_service():
    return RegistryService()


@pytest.mark.django_db
class TestVehiclesAndAddresses:

    def test_create_vehicle_for_user(self, registry_service, user_id):
        vehicle = registry_service.create_vehicle(
            user_id, make='Honda', model='Civic', year='2019'
        )

        assert vehicle.user_id == user_id
        assert vehicle.description == '2019 Honda Civic'

    def test_vehicle_with_live_booking_cannot_be_deleted(
        self, registry_service, create_booking, vehicle
    ):
        create_booking(status=Booking.Status.CONFIRMED)

        with pytest.raises(RegistryInUseError) as exc_info:
            registry_service.delete_vehicle(vehicle)

        assert str(exc_info.value) == "Cannot delete vehicle with active bookings"
        assert Vehicle.objects.filter(id=vehicle.id).exists()

    def test_vehicle_with_finished_bookings_can_be_deleted(
        self, registry_service, create_booking, vehicle
    ):
        vehicle_id = vehicle.id
        create_booking(status=Booking.Status.COMPLETED)

        registry_service.delete_vehicle(vehicle)

        assert not Vehicle.objects.filter(id=vehicle_id).exists()

    def test_address_with_live_booking_cannot_be_deleted(
        self, registry_service, create_booking, address
    ):
        create_booking()

        with pytest.raises(RegistryInUseError):
            registry_service.delete_address(address)

        assert UserAddress.objects.filter(id=address.id).exists()


@pytest.mark.django_db
class TestCompaniesAndServiceOptions:

    def test_company_profile_created_then_updated(self, registry_service):
        company_id = uuid.uuid4()

        registry_service.save_company_profile(company_id, name='Bubble Bay')
        company = registry_service.save_company_profile(
            company_id, name='Bubble Bay Express', phone='+966511111111'
        )

        assert company.id == company_id
        assert company.name == 'Bubble Bay Express'
        assert Company.objects.filter(id=company_id).count() == 1

    def test_unknown_company(self, registry_service):
        with pytest.raises(ResourceNotFoundError):
            registry_service.get_company(uuid.uuid4())

    def test_service_option_bound_to_company(self, registry_service, company_id):
        option = registry_service.create_service_option(
            company_id, name='Full Detail', duration_minutes=120
        )

        assert option.company_id == company_id
        assert option.duration_minutes == 120

    def test_removed_option_keeps_bookings(self, registry_service, create_booking, service_option):
        booking = create_booking()

        registry_service.delete_service_option(service_option)

        assert not ServiceOption.objects.filter(name='Exterior Wash').exists()
        assert Booking.objects.filter(id=booking.id).exists()
