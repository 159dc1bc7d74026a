"""
License domain entity.

This is the core domain entity representing a machine-bound license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.events import utcnow
from core.domain.value_objects import LicenseStatus, MachineBinding


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A license starts ``inactive``, becomes ``active`` when first bound to
    a machine and ends ``revoked``. Instances are snapshots read from the
    ledger; state changes go through the ledger's conditional updates.
    """

    key: str
    status: LicenseStatus
    machine_id: Optional[str] = None
    hardware_fingerprint: Optional[str] = None
    activation_date: Optional[datetime] = None
    last_validation: Optional[datetime] = None
    validation_count: int = 0
    max_validations: int = 1000
    expiration_date: Optional[datetime] = None
    transfer_count: int = 0
    max_transfers: int = 1
    customer_email: Optional[str] = None
    customer_info: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.key:
            raise ValueError("License key is required")
        if self.status == LicenseStatus.ACTIVE and not (
            self.machine_id and self.hardware_fingerprint
        ):
            raise ValueError("Active license must be bound to a machine")

    @property
    def is_active(self) -> bool:
        return self.status == LicenseStatus.ACTIVE

    @property
    def is_revoked(self) -> bool:
        return self.status == LicenseStatus.REVOKED

    @property
    def can_transfer(self) -> bool:
        """True while the transfer quota still allows a new binding."""
        return self.transfer_count < self.max_transfers

    @property
    def remaining_validations(self) -> int:
        """Validations left before the quota is reached, never negative."""
        return max(0, self.max_validations - self.validation_count)

    @property
    def binding(self) -> Optional[MachineBinding]:
        if not (self.machine_id and self.hardware_fingerprint):
            return None
        return MachineBinding(self.machine_id, self.hardware_fingerprint)

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if license has passed its expiration date.

        Args:
            current_time: Current time (defaults to now, UTC)

        Returns:
            True if an expiration date is set and lies in the past
        """
        if self.expiration_date is None:
            return False
        return self.expiration_date < (current_time or utcnow())

    def is_bound_to(self, binding: MachineBinding) -> bool:
        """Both the machine id and the fingerprint must match."""
        return (
            self.machine_id == binding.machine_id
            and self.hardware_fingerprint == binding.hardware_fingerprint
        )
