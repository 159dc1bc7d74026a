"""
License client API views.

These endpoints are used by installed software to:
- Activate a license on a machine
- Validate a license periodically

Business refusals are answered with 200 and ``success``/``valid`` false.
Only malformed requests (400) and store failures (500) use error statuses.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.application.handlers.validate_license_handler import ValidateLicenseHandler
from api.v1.license.serializers import (
    ActivateRequestSerializer,
    ActivateResponseSerializer,
    ValidateRequestSerializer,
    ValidateResponseSerializer,
)
from core.deps import get_fraud_detector, get_license_ledger, license_policy
from core.infrastructure.events import event_bus
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import license_activations_total, license_validations_total
from core.middleware.observability import client_ip

tracer = get_tracer(__name__)

INCOMPLETE_ACTIVATION = {"success": False, "message": "Incomplete activation data."}
INCOMPLETE_VALIDATION = {"valid": False, "message": "Incomplete validation data."}


class ActivateLicenseView(APIView):
    """View for activating licenses."""

    # Outcome key used by the exception handler for error bodies
    outcome_field = "success"

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind a license key to a machine. The first successful activation "
            "binds the key; repeating it from the same machine is a no-op."
        ),
        tags=["License API"],
        request=ActivateRequestSerializer,
        responses={
            200: ActivateResponseSerializer,
            400: {"description": "Incomplete activation data"},
            500: {"description": "Internal server error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license for a machine."""
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        """Async handler for activate license."""
        with tracer.start_as_current_span("activate_license") as span:
            span.set_attribute("operation", "activate_license")

            serializer = ActivateRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                license_activations_total.labels(outcome="INCOMPLETE_REQUEST").inc()
                return Response(INCOMPLETE_ACTIVATION, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            span.set_attribute("license_key", data["licenseKey"])
            span.set_attribute("machine_id", data["machineId"])

            ledger = get_license_ledger()
            handler = ActivateLicenseHandler(
                ledger=ledger,
                fraud_detector=get_fraud_detector(),
                event_bus=event_bus,
                history_limit=license_policy()["HISTORY_LIMIT"],
            )
            command = ActivateLicenseCommand(
                license_key=data["licenseKey"],
                machine_id=data["machineId"],
                hardware_fingerprint=data["hardwareFingerprint"],
                client_ip=client_ip(request),
                requested_at=data.get("timestamp"),
            )

            result = await handler.handle(command)

            license_activations_total.labels(outcome=result.outcome).inc()
            span.set_attribute("activation.outcome", result.outcome)
            span.set_status(Status(StatusCode.OK))
            return Response(result.to_response(), status=status.HTTP_200_OK)


class ValidateLicenseView(APIView):
    """View for validating licenses."""

    outcome_field = "valid"

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Check that a license is active on the calling machine. Each valid "
            "check consumes one validation from the license quota."
        ),
        tags=["License API"],
        request=ValidateRequestSerializer,
        responses={
            200: ValidateResponseSerializer,
            400: {"description": "Incomplete validation data"},
            500: {"description": "Internal server error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license for a machine."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            span.set_attribute("operation", "validate_license")

            serializer = ValidateRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                license_validations_total.labels(outcome="INCOMPLETE_REQUEST").inc()
                return Response(INCOMPLETE_VALIDATION, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            span.set_attribute("license_key", data["licenseKey"])

            handler = ValidateLicenseHandler(ledger=get_license_ledger())
            command = ValidateLicenseCommand(
                license_key=data["licenseKey"],
                machine_id=data["machineId"],
                hardware_fingerprint=data["hardwareFingerprint"],
                client_ip=client_ip(request),
            )

            result = await handler.handle(command)

            license_validations_total.labels(outcome=result.outcome).inc()
            span.set_attribute("validation.outcome", result.outcome)
            if result.remaining_validations is not None:
                span.set_attribute("validation.remaining", result.remaining_validations)
            span.set_status(Status(StatusCode.OK))
            return Response(result.to_response(), status=status.HTTP_200_OK)
