"""
Pytest configuration and shared fixtures.
"""

import dataclasses
from datetime import timedelta
from typing import List, Optional

import pytest

from core.domain.events import DomainEvent, EventHandler, utcnow
from core.domain.exceptions import DuplicateLicenseKeyError, StorageFault
from core.domain.value_objects import HistoryAction, LicenseStatus
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.activation_history import ActivationHistoryRecord
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_ledger import DjangoLicenseLedger
from licenses.ports.license_ledger import LicenseLedger

VALID_KEY = "GP-TESTKEY-0123456789ABCDEF-0000"
MACHINE_A = ("machine-a", "fingerprint-a")
MACHINE_B = ("machine-b", "fingerprint-b")


class InMemoryLicenseLedger(LicenseLedger):
    """Dictionary-backed ledger for handler tests."""

    def __init__(self):
        self.licenses = {}
        self.history: List[ActivationHistoryRecord] = []

    def add(self, key: str = VALID_KEY, **fields) -> License:
        """Seed a license directly."""
        fields.setdefault("status", LicenseStatus.INACTIVE)
        fields.setdefault("created_at", utcnow())
        license = License(key=key, **fields)
        self.licenses[key] = license
        return license

    def add_history(self, key: str, action: HistoryAction, timestamp, success: bool = False):
        """Seed a history record with an explicit timestamp."""
        self.history.append(
            ActivationHistoryRecord(
                id=len(self.history) + 1,
                license_key=key,
                action=action,
                success=success,
                timestamp=timestamp,
            )
        )

    def actions_for(self, key: str = VALID_KEY) -> List[HistoryAction]:
        """Recorded actions for one key, oldest first."""
        return [record.action for record in self.history if record.license_key == key]

    async def lookup(self, key):
        return self.licenses.get(key)

    async def lookup_unexpired(self, key):
        license = self.licenses.get(key)
        if license is None or license.is_expired():
            return None
        return license

    async def activate(self, key, machine_id, hardware_fingerprint):
        license = self.licenses.get(key)
        if license is None or license.status != LicenseStatus.INACTIVE:
            return 0
        self.licenses[key] = dataclasses.replace(
            license,
            status=LicenseStatus.ACTIVE,
            machine_id=machine_id,
            hardware_fingerprint=hardware_fingerprint,
            activation_date=utcnow(),
        )
        return 1

    async def record_validation(self, key, machine_id, hardware_fingerprint):
        license = self.licenses.get(key)
        if (
            license is None
            or license.status != LicenseStatus.ACTIVE
            or license.machine_id != machine_id
            or license.hardware_fingerprint != hardware_fingerprint
        ):
            return 0
        self.licenses[key] = dataclasses.replace(
            license,
            validation_count=license.validation_count + 1,
            last_validation=utcnow(),
        )
        return 1

    async def append_history(
        self, key, machine_id, hardware_fingerprint, action, success, ip_address=None
    ):
        self.history.append(
            ActivationHistoryRecord(
                id=len(self.history) + 1,
                license_key=key,
                machine_id=machine_id,
                hardware_fingerprint=hardware_fingerprint,
                action=action,
                success=success,
                ip_address=ip_address,
                timestamp=utcnow(),
            )
        )

    async def issue(
        self,
        key,
        expiration_date=None,
        max_transfers=1,
        max_validations=1000,
        customer_email=None,
        customer_info=None,
    ):
        if key in self.licenses:
            raise DuplicateLicenseKeyError()
        self.add(
            key,
            expiration_date=expiration_date,
            max_transfers=max_transfers,
            max_validations=max_validations,
            customer_email=customer_email,
            customer_info=customer_info,
        )
        return 1

    async def recent_history(self, key, limit=50):
        records = [record for record in self.history if record.license_key == key]
        return sorted(records, key=lambda r: (r.timestamp, r.id), reverse=True)[:limit]

    async def revoke(self, key):
        license = self.licenses.get(key)
        if license is None or license.status == LicenseStatus.REVOKED:
            return 0
        self.licenses[key] = dataclasses.replace(license, status=LicenseStatus.REVOKED)
        return 1

    async def search(self, term):
        return sorted(
            (lic for key, lic in self.licenses.items() if term.lower() in key.lower()),
            key=lambda lic: lic.key,
        )

    async def list_licenses(self):
        return list(self.licenses.values())

    async def latest_history(self, limit=50):
        return sorted(self.history, key=lambda r: (r.timestamp, r.id), reverse=True)[:limit]

    async def ping(self):
        return None


class FailingLicenseLedger(InMemoryLicenseLedger):
    """In-memory ledger whose listed operations raise ``StorageFault``."""

    def __init__(self, fail_on: Optional[set] = None):
        super().__init__()
        self.fail_on = set(fail_on) if fail_on else set(LicenseLedger.__abstractmethods__)

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StorageFault(f"{operation} failed: database is unavailable")

    async def lookup(self, key):
        self._check("lookup")
        return await super().lookup(key)

    async def lookup_unexpired(self, key):
        self._check("lookup_unexpired")
        return await super().lookup_unexpired(key)

    async def activate(self, key, machine_id, hardware_fingerprint):
        self._check("activate")
        return await super().activate(key, machine_id, hardware_fingerprint)

    async def record_validation(self, key, machine_id, hardware_fingerprint):
        self._check("record_validation")
        return await super().record_validation(key, machine_id, hardware_fingerprint)

    async def append_history(self, *args, **kwargs):
        self._check("append_history")
        return await super().append_history(*args, **kwargs)

    async def issue(self, *args, **kwargs):
        self._check("issue")
        return await super().issue(*args, **kwargs)

    async def recent_history(self, key, limit=50):
        self._check("recent_history")
        return await super().recent_history(key, limit)

    async def revoke(self, key):
        self._check("revoke")
        return await super().revoke(key)

    async def search(self, term):
        self._check("search")
        return await super().search(term)

    async def list_licenses(self):
        self._check("list_licenses")
        return await super().list_licenses()

    async def latest_history(self, limit=50):
        self._check("latest_history")
        return await super().latest_history(limit)

    async def ping(self):
        self._check("ping")


class RecordingEventHandler(EventHandler):
    """Collects every event it receives."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    async def handle(self, event: DomainEvent) -> None:
        self.events.append(event)


@pytest.fixture
def memory_ledger():
    """Fixture for an in-memory LicenseLedger."""
    return InMemoryLicenseLedger()


@pytest.fixture
def failing_ledger():
    """Factory for ledgers that fail on the given operations (default: all)."""

    def make(fail_on=None):
        return FailingLicenseLedger(fail_on=fail_on)

    return make


@pytest.fixture
def ledger():
    """Fixture for the Django ORM LicenseLedger."""
    return DjangoLicenseLedger()


@pytest.fixture
def event_bus():
    """Fixture for an isolated event bus."""
    return InMemoryEventBus()


@pytest.fixture
def recorded_events(event_bus):
    """Subscribe a recording handler to every license event on ``event_bus``."""
    from activations.domain.events import LicenseActivated, SecurityAlertRaised
    from licenses.domain.events import LicenseIssued, LicenseRevoked

    handler = RecordingEventHandler()
    for event_type in (LicenseIssued, LicenseRevoked, LicenseActivated, SecurityAlertRaised):
        event_bus.subscribe(event_type, handler)
    return handler.events


@pytest.fixture
def license_factory(db):
    """Create License rows through the ORM."""
    from licenses.infrastructure.models import License as LicenseModel

    def create(key: str = VALID_KEY, **fields):
        return LicenseModel.objects.create(key=key, **fields)

    return create


@pytest.fixture
def active_license(license_factory):
    """A license already bound to machine A."""
    return license_factory(
        status="active",
        machine_id=MACHINE_A[0],
        hardware_fingerprint=MACHINE_A[1],
        activation_date=utcnow() - timedelta(days=1),
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
