"""
Django implementation of the LicenseLedger port.

This adapter converts between domain entities and Django ORM models.
State changes are single ``UPDATE ... WHERE`` statements whose row count
tells the caller whether the precondition still held.
"""
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, connections, transaction
from django.db.models import F, Q
from django.utils import timezone

from core.domain.exceptions import DuplicateLicenseKeyError
from core.domain.value_objects import HistoryAction, LicenseStatus
from core.infrastructure.database import translate_storage_errors
from licenses.domain.activation_history import ActivationHistoryRecord
from licenses.domain.license import License
from licenses.infrastructure.models import ActivationHistory as ActivationHistoryModel
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_ledger import LicenseLedger


class DjangoLicenseLedger(LicenseLedger):
    """
    Django ORM implementation of LicenseLedger.

    Args:
        using: Database alias to run queries against
    """

    def __init__(self, using: str = "default"):
        self.using = using

    def _licenses(self):
        return LicenseModel.objects.using(self.using)

    def _history(self):
        return ActivationHistoryModel.objects.using(self.using)

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            key=model.key,
            status=LicenseStatus(model.status),
            machine_id=model.machine_id,
            hardware_fingerprint=model.hardware_fingerprint,
            activation_date=model.activation_date,
            last_validation=model.last_validation,
            validation_count=model.validation_count,
            max_validations=model.max_validations,
            expiration_date=model.expiration_date,
            transfer_count=model.transfer_count,
            max_transfers=model.max_transfers,
            customer_email=model.customer_email,
            customer_info=model.customer_info,
            created_at=model.created_at,
        )

    def _history_to_domain(self, model: ActivationHistoryModel) -> ActivationHistoryRecord:
        return ActivationHistoryRecord(
            id=model.id,
            license_key=model.license_key,
            machine_id=model.machine_id,
            hardware_fingerprint=model.hardware_fingerprint,
            action=HistoryAction(model.action),
            success=model.success,
            ip_address=model.ip_address,
            timestamp=model.timestamp,
        )

    @sync_to_async
    @translate_storage_errors
    def lookup(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        model = self._licenses().filter(key=key).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    @translate_storage_errors
    def lookup_unexpired(self, key: str) -> Optional[License]:
        """
        Find a license by key unless it has expired.

        Args:
            key: License key string

        Returns:
            License entity or None if not found or expired
        """
        model = (
            self._licenses()
            .filter(key=key)
            .filter(Q(expiration_date__isnull=True) | Q(expiration_date__gt=timezone.now()))
            .first()
        )
        return self._to_domain(model) if model else None

    @sync_to_async
    @translate_storage_errors
    def activate(self, key: str, machine_id: str, hardware_fingerprint: str) -> int:
        """Bind the license only while it is still inactive."""
        return self._licenses().filter(key=key, status=LicenseStatus.INACTIVE.value).update(
            status=LicenseStatus.ACTIVE.value,
            machine_id=machine_id,
            hardware_fingerprint=hardware_fingerprint,
            activation_date=timezone.now(),
        )

    @sync_to_async
    @translate_storage_errors
    def record_validation(self, key: str, machine_id: str, hardware_fingerprint: str) -> int:
        """Increment the validation counter for a matching active binding."""
        return self._licenses().filter(
            key=key,
            status=LicenseStatus.ACTIVE.value,
            machine_id=machine_id,
            hardware_fingerprint=hardware_fingerprint,
        ).update(
            validation_count=F("validation_count") + 1,
            last_validation=timezone.now(),
        )

    @sync_to_async
    @translate_storage_errors
    def append_history(
        self,
        key: str,
        machine_id: Optional[str],
        hardware_fingerprint: Optional[str],
        action: HistoryAction,
        success: bool,
        ip_address: Optional[str] = None,
    ) -> None:
        self._history().create(
            license_key=key,
            machine_id=machine_id,
            hardware_fingerprint=hardware_fingerprint,
            action=action.value,
            success=success,
            ip_address=ip_address,
        )

    @sync_to_async
    @translate_storage_errors
    def issue(
        self,
        key: str,
        expiration_date: Optional[datetime] = None,
        max_transfers: int = 1,
        max_validations: int = 1000,
        customer_email: Optional[str] = None,
        customer_info: Optional[str] = None,
    ) -> int:
        """
        Insert a new inactive license.

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        try:
            with transaction.atomic(using=self.using):
                self._licenses().create(
                    key=key,
                    status=LicenseStatus.INACTIVE.value,
                    expiration_date=expiration_date,
                    max_transfers=max_transfers,
                    max_validations=max_validations,
                    customer_email=customer_email,
                    customer_info=customer_info,
                )
        except IntegrityError as exc:
            raise DuplicateLicenseKeyError(f"License key already exists: {key}") from exc
        return 1

    @sync_to_async
    @translate_storage_errors
    def recent_history(self, key: str, limit: int = 50) -> List[ActivationHistoryRecord]:
        models = self._history().filter(license_key=key).order_by("-timestamp", "-id")[:limit]
        return [self._history_to_domain(model) for model in models]

    @sync_to_async
    @translate_storage_errors
    def revoke(self, key: str) -> int:
        return (
            self._licenses()
            .filter(key=key)
            .exclude(status=LicenseStatus.REVOKED.value)
            .update(status=LicenseStatus.REVOKED.value)
        )

    @sync_to_async
    @translate_storage_errors
    def search(self, term: str) -> List[License]:
        models = self._licenses().filter(key__icontains=term).order_by("key")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    @translate_storage_errors
    def list_licenses(self) -> List[License]:
        return [self._to_domain(model) for model in self._licenses().all()]

    @sync_to_async
    @translate_storage_errors
    def latest_history(self, limit: int = 50) -> List[ActivationHistoryRecord]:
        models = self._history().order_by("-timestamp", "-id")[:limit]
        return [self._history_to_domain(model) for model in models]

    @sync_to_async
    @translate_storage_errors
    def ping(self) -> None:
        with connections[self.using].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
