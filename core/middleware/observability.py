"""
Request correlation and access logging.

Every request gets a correlation id (taken from ``X-Correlation-ID`` when
the caller sends one) that is echoed back together with the request
duration and, when a span is active, the OpenTelemetry trace id.
"""

import logging
import time
import uuid
from typing import Callable, Dict, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)


def client_ip(request: HttpRequest) -> Optional[str]:
    """Return the caller address, honouring the first X-Forwarded-For hop."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR")


def current_trace_ids() -> Dict[str, str]:
    """Trace and span ids of the active span, or an empty dict."""
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return {}
    return {
        "trace_id": format_trace_id(context.trace_id),
        "span_id": format_span_id(context.span_id),
    }


class ObservabilityMiddleware:
    """Attaches correlation ids to requests and logs one line per request."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.META.get("HTTP_X_CORRELATION_ID") or str(uuid.uuid4())
        trace_ids = current_trace_ids()
        request.correlation_id = correlation_id  # type: ignore[attr-defined]
        request.trace_id = trace_ids.get("trace_id")  # type: ignore[attr-defined]

        context = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": client_ip(request),
            **trace_ids,
        }
        logger.debug("Request started", extra=context)

        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={**context, "error_type": type(exc).__name__, "duration_ms": self._ms(started)},
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - started
        self._log_completion(response.status_code, {**context, "duration_ms": self._ms(started)})

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        if request.trace_id:  # type: ignore[attr-defined]
            response["X-Trace-ID"] = request.trace_id  # type: ignore[attr-defined]
        return response

    @staticmethod
    def _ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)

    @staticmethod
    def _log_completion(status_code: int, context: dict) -> None:
        context["status_code"] = status_code
        if status_code >= 500:
            logger.error("Request completed with server error", extra=context)
        elif status_code >= 400:
            logger.warning("Request completed with client error", extra=context)
        else:
            logger.info("Request completed", extra=context)
