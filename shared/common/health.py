"""
Health Check Module.

Liveness and readiness endpoints for the service.
"""
import logging
import time
from typing import Dict, Any
from datetime import datetime, timezone

from django.db import connection
from django.core.cache import cache
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HealthStatus:
    """Health check status constants."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


def check_database() -> Dict[str, Any]:
    """Check database connectivity."""
    start = time.time()
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        latency = (time.time() - start) * 1000
        return {
            "name": "database",
            "status": HealthStatus.HEALTHY,
            "latency_ms": round(latency, 2),
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "name": "database",
            "status": HealthStatus.UNHEALTHY,
            "error": str(e),
        }


def check_cache() -> Dict[str, Any]:
    """Check cache connectivity."""
    start = time.time()
    try:
        cache_key = f"health_check_{time.time()}"
        cache.set(cache_key, "OK", 10)
        value = cache.get(cache_key)
        cache.delete(cache_key)

        if value != "OK":
            return {
                "name": "cache",
                "status": HealthStatus.DEGRADED,
                "error": "Cache read/write mismatch",
            }

        latency = (time.time() - start) * 1000
        return {
            "name": "cache",
            "status": HealthStatus.HEALTHY,
            "latency_ms": round(latency, 2),
        }
    except Exception as e:
        logger.warning(f"Cache health check failed: {e}")
        return {
            "name": "cache",
            "status": HealthStatus.DEGRADED,
            "error": str(e),
        }


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def liveness_check(request):
    """Returns 200 while the process is able to serve requests."""
    return Response({
        "status": HealthStatus.HEALTHY,
        "timestamp": _now(),
    })


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def readiness_check(request):
    """
    Readiness probe.

    The database is critical; a cache outage only degrades the service.
    """
    checks = [
        check_database(),
        check_cache(),
    ]

    statuses = [c["status"] for c in checks]
    if HealthStatus.UNHEALTHY in statuses:
        overall_status = HealthStatus.UNHEALTHY
        status_code = 503
    elif HealthStatus.DEGRADED in statuses:
        overall_status = HealthStatus.DEGRADED
        status_code = 200
    else:
        overall_status = HealthStatus.HEALTHY
        status_code = 200

    return Response(
        {
            "status": overall_status,
            "checks": checks,
            "timestamp": _now(),
        },
        status=status_code
    )


def get_health_urlpatterns():
    """
    Returns URL patterns for health check endpoints.

    Usage in urls.py:
        from shared.common.health import get_health_urlpatterns
        urlpatterns += get_health_urlpatterns()
    """
    from django.urls import path

    return [
        path('health/', liveness_check, name='health'),
        path('health/live/', liveness_check, name='liveness'),
        path('health/ready/', readiness_check, name='readiness'),
    ]
