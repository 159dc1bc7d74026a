"""
Wiring helpers for the HTTP layer and management commands.

Each call builds a fresh collaborator from settings; nothing is cached
at module level.
"""
from datetime import timedelta

from django.conf import settings

from activations.domain.services import FraudDetector
from licenses.infrastructure.repositories.django_license_ledger import DjangoLicenseLedger
from licenses.ports.license_ledger import LicenseLedger

DEFAULT_POLICY = {
    "FRAUD_ALERT_THRESHOLD": 3,
    "FRAUD_WINDOW_HOURS": 24,
    "HISTORY_LIMIT": 50,
    "DEFAULT_MAX_VALIDATIONS": 1000,
    "DEFAULT_MAX_TRANSFERS": 1,
    "KEY_PREFIX": "GP",
}


def license_policy() -> dict:
    """``settings.LICENSE_POLICY`` merged over the defaults."""
    return {**DEFAULT_POLICY, **getattr(settings, "LICENSE_POLICY", {})}


def get_license_ledger(using: str = "default") -> LicenseLedger:
    return DjangoLicenseLedger(using=using)


def get_fraud_detector() -> FraudDetector:
    policy = license_policy()
    return FraudDetector(
        threshold=policy["FRAUD_ALERT_THRESHOLD"],
        window=timedelta(hours=policy["FRAUD_WINDOW_HOURS"]),
    )
