"""
License domain events.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseIssued(DomainEvent):
    """A new inactive license was written to the ledger."""

    customer_email: Optional[str] = None
    # None for perpetual licenses
    expiration_date: Optional[datetime] = None


@dataclass(frozen=True, kw_only=True)
class LicenseRevoked(DomainEvent):
    """A license was administratively revoked."""

    actor: str = "ADMIN"
