"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    DuplicateLicenseKeyError,
    LicenseNotFoundError,
    StorageFault,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, StorageFault):
        response = _handle_storage_fault(exc, context, trace_id)
    elif isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = {
            "error": {"code": code, "message": response.data.get("detail", exc.default_detail)}
        }
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", None) or getattr(request, "correlation_id", None)


def _endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request is not None else "unknown"


def _handle_storage_fault(
    exc: StorageFault, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """
    Answer a store failure with a generic 500.

    The body keeps the endpoint's outcome key so clients parse it like any
    other refusal. Details go to the log only.
    """
    logger.error(
        "License store failure: %s",
        exc.message,
        extra={"trace_id": trace_id, "error_code": exc.code},
        exc_info=exc,
    )
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    outcome_field = getattr(context.get("view"), "outcome_field", "success")
    return Response(
        {outcome_field: False, "message": INTERNAL_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, LicenseNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, DuplicateLicenseKeyError):
        status_code = status.HTTP_409_CONFLICT

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=exc)
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    outcome_field = getattr(context.get("view"), "outcome_field", None)
    if outcome_field:
        body = {outcome_field: False, "message": INTERNAL_ERROR_MESSAGE}
    else:
        body = {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}}
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
