# services/booking-service/src/apps/core/services/registry_service.py
"""
Registry Service

Writes to the reference registries bookings read from: users' vehicles
and addresses, company profiles and the service options companies offer.
"""

import uuid
import logging

from django.db import transaction

from apps.core.models import Booking, Company, ServiceOption, Vehicle, UserAddress

logger = logging.getLogger(__name__)


class RegistryService:
    """
    Service for the vehicle, address, company and service option registries.

    Vehicles and addresses are user-scoped; service options are scoped to
    the company offering them. Callers resolve ownership before handing an
    instance to the update and delete methods.
    """

    # ==========================================================================
    # Vehicles
    # ==========================================================================

    def create_vehicle(self, user_id: uuid.UUID, **fields) -> Vehicle:
        vehicle = Vehicle.objects.create(user_id=user_id, **fields)
        logger.info(f"Created vehicle {vehicle.id} for user {user_id}")
        return vehicle

    @transaction.atomic
    def delete_vehicle(self, vehicle: Vehicle) -> None:
        """Delete a vehicle unless a live booking still uses it."""
        from . import RegistryInUseError

        if Booking.objects.blocking().filter(vehicle_id=vehicle.id).exists():
            logger.warning(f"Cannot delete vehicle {vehicle.id} - has active bookings")
            raise RegistryInUseError("Cannot delete vehicle with active bookings")

        vehicle_id = vehicle.id
        vehicle.delete()
        logger.info(f"Deleted vehicle {vehicle_id}")

    # ==========================================================================
    # Addresses
    # ==========================================================================

    def create_address(self, user_id: uuid.UUID, **fields) -> UserAddress:
        address = UserAddress.objects.create(user_id=user_id, **fields)
        logger.info(f"Created address {address.id} for user {user_id}")
        return address

    @transaction.atomic
    def delete_address(self, address: UserAddress) -> None:
        from . import RegistryInUseError

        if Booking.objects.blocking().filter(address_id=address.id).exists():
            logger.warning(f"Cannot delete address {address.id} - has active bookings")
            raise RegistryInUseError("Cannot delete address with active bookings")

        address_id = address.id
        address.delete()
        logger.info(f"Deleted address {address_id}")

    # ==========================================================================
    # Companies
    # ==========================================================================

    def get_company(self, company_id: uuid.UUID) -> Company:
        from . import ResourceNotFoundError

        company = Company.objects.filter(id=company_id).first()
        if company is None:
            raise ResourceNotFoundError(f"Company {company_id} not found")
        return company

    @transaction.atomic
    def save_company_profile(self, company_id: uuid.UUID, **fields) -> Company:
        """Create or update the acting company's profile."""
        company, created = Company.objects.update_or_create(id=company_id, defaults=fields)
        logger.info(f"{'Created' if created else 'Updated'} profile for company {company_id}")
        return company

    # ==========================================================================
    # Service Options
    # ==========================================================================

    def create_service_option(self, company_id: uuid.UUID, **fields) -> ServiceOption:
        option = ServiceOption.objects.create(company_id=company_id, **fields)
        logger.info(f"Company {company_id} added service option {option.id}")
        return option

    def delete_service_option(self, option: ServiceOption) -> None:
        """
        Remove an offering.

        Existing bookings keep their slot; rescheduling them falls back to
        the booked duration.
        """
        option_id = option.id
        option.delete()
        logger.info(f"Company {option.company_id} removed service option {option_id}")
