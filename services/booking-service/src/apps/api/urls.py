# services/booking-service/src/apps/api/urls.py
"""
Booking API URL Configuration
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    BookingViewSet,
    CompanyViewSet,
    PaymentViewSet,
    ServiceOptionViewSet,
    UserAddressViewSet,
    VehicleViewSet,
)

app_name = 'api'

router = DefaultRouter()
router.register(r'bookings', BookingViewSet, basename='booking')
router.register(r'payments', PaymentViewSet, basename='payment')
router.register(r'vehicles', VehicleViewSet, basename='vehicle')
router.register(r'addresses', UserAddressViewSet, basename='address')
router.register(r'companies', CompanyViewSet, basename='company')
router.register(r'service-options', ServiceOptionViewSet, basename='service-option')

urlpatterns = [
    path('', include(router.urls)),
]
