"""
URL configuration for Booking Service
"""

from django.urls import path, include

from shared.common.health import get_health_urlpatterns

urlpatterns = [
    path('api/v1/', include('apps.api.urls')),
]

urlpatterns += get_health_urlpatterns()
