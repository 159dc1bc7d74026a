"""
Activation domain events.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseActivated(DomainEvent):
    """A license was bound to a machine for the first time."""

    machine_id: str
    hardware_fingerprint: str
    client_ip: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class SecurityAlertRaised(DomainEvent):
    """
    Repeated activation attempts from other machines crossed the alert threshold.

    The alert is a signal only. It never changes the response or the
    license state.
    """

    attempt_count: int
    machine_id: str
    client_ip: Optional[str] = None
