"""
License DTOs for administrative tooling.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from licenses.domain.activation_history import ActivationHistoryRecord
from licenses.domain.license import License


@dataclass
class IssuedLicenseDTO:
    """DTO for one issued key."""

    key: str
    expiration_date: Optional[datetime]
    max_transfers: int


@dataclass
class IssueLicensesResponseDTO:
    """DTO for an issuance batch."""

    licenses: List[IssuedLicenseDTO]
    customer_email: Optional[str] = None

    @property
    def keys(self) -> List[str]:
        return [item.key for item in self.licenses]


@dataclass
class RevokeLicenseResultDTO:
    """DTO for a revocation request."""

    license_key: str
    revoked: bool  # False when the license was already revoked
    message: str


@dataclass
class LicenseSearchResultDTO:
    """DTO for a key search: the first match and its recent history."""

    license: Optional[License]
    history: List[ActivationHistoryRecord] = field(default_factory=list)
    match_count: int = 0


@dataclass
class LicenseReportDTO:
    """DTO for the monitoring overview."""

    generated_at: datetime
    total: int
    active: int
    inactive: int
    revoked: int
    expired: int
    active_licenses: List[License]
    suspicious_activities: List[ActivationHistoryRecord]
    expiring_soon: List[License]
