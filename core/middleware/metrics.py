"""
Metrics middleware for Prometheus.

Requests are labelled by the matched URL route so unknown paths collapse
into a single ``unmatched`` series.
"""

import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import http_request_duration_seconds, http_requests_total

UNMATCHED_ENDPOINT = "unmatched"


def route_label(request: HttpRequest) -> str:
    """Return the URL pattern that served ``request``."""
    match = getattr(request, "resolver_match", None)
    if match is None:
        return UNMATCHED_ENDPOINT
    return "/" + match.route if match.route is not None else UNMATCHED_ENDPOINT


class MetricsMiddleware:
    """Counts requests and observes their latency per method, route and status."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception:
            self._observe(request, 500, time.perf_counter() - started)
            raise

        self._observe(request, response.status_code, time.perf_counter() - started)
        return response

    @staticmethod
    def _observe(request: HttpRequest, status_code: int, duration: float) -> None:
        endpoint = route_label(request)
        http_requests_total.labels(
            method=request.method, endpoint=endpoint, status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(
            duration
        )
