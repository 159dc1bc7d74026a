"""
Integration tests for the activate and validate endpoints.
"""

from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from licenses.infrastructure.models import ActivationHistory
from licenses.infrastructure.models import License as LicenseModel

VALID_KEY = "GP-TESTKEY-0123456789ABCDEF-0000"
MACHINE_A = ("machine-a", "fingerprint-a")
MACHINE_B = ("machine-b", "fingerprint-b")


def activate_body(machine=MACHINE_A, key=VALID_KEY, **extra):
    body = {"licenseKey": key, "machineId": machine[0], "hardwareFingerprint": machine[1]}
    body.update(extra)
    return body


@pytest.mark.django_db
@pytest.mark.integration
class TestActivateAPI:
    """Integration tests for POST /activate."""

    def test_activate_success(self, api_client, license_factory):
        license_factory()

        response = api_client.post(
            reverse("activate-license"),
            activate_body(timestamp=1700000000000),
            format="json",
            HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1",
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "License activated successfully."}
        license = LicenseModel.objects.get(key=VALID_KEY)
        assert license.status == "active"
        assert license.machine_id == MACHINE_A[0]
        history = ActivationHistory.objects.get(license_key=VALID_KEY)
        assert history.action == "ACTIVATION_SUCCESS"
        assert history.ip_address == "203.0.113.9"

    def test_reactivation_same_machine(self, api_client, active_license):
        response = api_client.post(reverse("activate-license"), activate_body(), format="json")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "License already active on this machine."}

    def test_other_machine_refused_with_200(self, api_client, active_license):
        response = api_client.post(reverse("activate-license"), activate_body(MACHINE_B), format="json")

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "message": "This license is already in use on another machine.",
        }
        assert ActivationHistory.objects.filter(action="FRAUD_ATTEMPT").count() == 1

    def test_unknown_key(self, api_client):
        response = api_client.post(
            reverse("activate-license"), activate_body(key="GP-UNKNOWN"), format="json"
        )

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Invalid or expired license key."}

    def test_expired_key(self, api_client, license_factory):
        license_factory(expiration_date=timezone.now() - timedelta(days=1))

        response = api_client.post(reverse("activate-license"), activate_body(), format="json")

        assert response.json()["success"] is False
        assert LicenseModel.objects.get(key=VALID_KEY).status == "inactive"

    @pytest.mark.parametrize("missing", ["licenseKey", "machineId", "hardwareFingerprint"])
    def test_incomplete_request(self, api_client, missing):
        body = activate_body()
        del body[missing]

        response = api_client.post(reverse("activate-license"), body, format="json")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Incomplete activation data."}
        assert not ActivationHistory.objects.exists()

    def test_empty_field_is_incomplete(self, api_client):
        response = api_client.post(
            reverse("activate-license"), activate_body(key=""), format="json"
        )
        assert response.status_code == 400

    def test_overlong_key_is_refused_and_recorded(self, api_client):
        key = "GP-" + "X" * 120

        response = api_client.post(reverse("activate-license"), activate_body(key=key), format="json")

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Invalid or expired license key."}
        history = ActivationHistory.objects.get(license_key=key)
        assert history.action == "ACTIVATION_FAILED"

    def test_whitespace_only_key_is_present(self, api_client):
        response = api_client.post(reverse("activate-license"), activate_body(key="   "), format="json")

        assert response.status_code == 200
        assert ActivationHistory.objects.filter(license_key="   ").count() == 1

    def test_binding_values_are_stored_verbatim(self, api_client, license_factory):
        license_factory()
        machine = (" machine-a ", "f" * 300)

        response = api_client.post(reverse("activate-license"), activate_body(machine), format="json")

        assert response.json()["success"] is True
        license = LicenseModel.objects.get(key=VALID_KEY)
        assert (license.machine_id, license.hardware_fingerprint) == machine
        assert ActivationHistory.objects.get(license_key=VALID_KEY).machine_id == " machine-a "

    def test_storage_failure_returns_500(self, api_client, monkeypatch, failing_ledger):
        monkeypatch.setattr("api.v1.license.views.get_license_ledger", lambda: failing_ledger())

        response = api_client.post(reverse("activate-license"), activate_body(), format="json")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error."}

    def test_correlation_header(self, api_client):
        response = api_client.post(
            reverse("activate-license"),
            activate_body(key="GP-UNKNOWN"),
            format="json",
            HTTP_X_CORRELATION_ID="corr-123",
        )
        assert response["X-Correlation-ID"] == "corr-123"


@pytest.mark.django_db
@pytest.mark.integration
class TestValidateAPI:
    """Integration tests for POST /validate."""

    def test_validate_success(self, api_client, active_license):
        response = api_client.post(reverse("validate-license"), activate_body(), format="json")

        assert response.status_code == 200
        assert response.json() == {"valid": True, "remainingValidations": 999}
        assert LicenseModel.objects.get(key=VALID_KEY).validation_count == 1

    def test_validate_wrong_machine(self, api_client, active_license):
        response = api_client.post(reverse("validate-license"), activate_body(MACHINE_B), format="json")

        assert response.status_code == 200
        assert response.json() == {"valid": False, "message": "License is not valid for this machine."}
        assert ActivationHistory.objects.filter(action="VALIDATION_FAILED").count() == 1

    def test_validate_inactive(self, api_client, license_factory):
        license_factory()

        response = api_client.post(reverse("validate-license"), activate_body(), format="json")

        assert response.json()["valid"] is False

    def test_validation_quota(self, api_client, license_factory):
        license_factory(
            status="active",
            machine_id=MACHINE_A[0],
            hardware_fingerprint=MACHINE_A[1],
            max_validations=1,
        )
        url = reverse("validate-license")

        first = api_client.post(url, activate_body(), format="json").json()
        second = api_client.post(url, activate_body(), format="json").json()

        assert first == {"valid": True, "remainingValidations": 0}
        assert second == {"valid": False, "message": "Validation limit reached."}

    def test_overlong_machine_id_is_refused_and_recorded(self, api_client, active_license):
        machine = ("m" * 300, MACHINE_A[1])

        response = api_client.post(reverse("validate-license"), activate_body(machine), format="json")

        assert response.status_code == 200
        assert response.json() == {"valid": False, "message": "License is not valid for this machine."}
        history = ActivationHistory.objects.get(license_key=VALID_KEY)
        assert history.action == "VALIDATION_FAILED"
        assert history.machine_id == machine[0]

    def test_padded_machine_id_does_not_match_binding(self, api_client, active_license):
        machine = (f" {MACHINE_A[0]} ", MACHINE_A[1])

        response = api_client.post(reverse("validate-license"), activate_body(machine), format="json")

        assert response.json()["valid"] is False
        assert LicenseModel.objects.get(key=VALID_KEY).validation_count == 0

    def test_incomplete_request(self, api_client):
        response = api_client.post(
            reverse("validate-license"), {"licenseKey": VALID_KEY}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {"valid": False, "message": "Incomplete validation data."}

    def test_storage_failure_returns_500(self, api_client, monkeypatch, failing_ledger):
        monkeypatch.setattr("api.v1.license.views.get_license_ledger", lambda: failing_ledger())

        response = api_client.post(reverse("validate-license"), activate_body(), format="json")

        assert response.status_code == 500
        assert response.json() == {"valid": False, "message": "Internal server error."}
