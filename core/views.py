"""
Core views for health checks, service info and metrics.
"""

import time

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from core.deps import get_license_ledger
from core.domain.exceptions import StorageFault

# Process start, reported as uptime by the health check
_STARTED_AT = time.monotonic()

SERVICE_VERSION = "1.0.0"


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """
    Health check endpoint.

    Always answers 200 while the process is up; ``database`` reflects a live
    probe of the license store.
    """

    def get(self, _request):
        """Return service health status."""
        try:
            async_to_sync(get_license_ledger().ping)()
            database = "connected"
        except StorageFault:
            database = "disconnected"

        return JsonResponse(
            {
                "status": "OK",
                "database": database,
                "timestamp": timezone.now().isoformat(),
                "uptime": round(time.monotonic() - _STARTED_AT, 3),
                "service": settings.SERVICE_NAME,
            }
        )


@method_decorator(csrf_exempt, name="dispatch")
class ServiceInfoView(View):
    """Service banner listing the public endpoints."""

    def get(self, _request):
        return JsonResponse(
            {
                "service": settings.SERVICE_NAME,
                "version": SERVICE_VERSION,
                "status": "Running",
                "endpoints": {
                    "activate": "POST /activate",
                    "validate": "POST /validate",
                    "health": "GET /health",
                    "metrics": "GET /metrics",
                },
            }
        )


class MetricsView(View):
    """Prometheus exposition endpoint."""

    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
