"""
Activation history record.

One entry per activation or validation attempt. The history is append-only.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import HistoryAction


@dataclass(frozen=True)
class ActivationHistoryRecord:
    """A single attempt against a license key."""

    license_key: str
    action: HistoryAction
    success: bool
    timestamp: datetime
    machine_id: Optional[str] = None
    hardware_fingerprint: Optional[str] = None
    ip_address: Optional[str] = None
    id: Optional[int] = None

    @property
    def is_suspicious(self) -> bool:
        return self.action in SUSPICIOUS_ACTIONS


SUSPICIOUS_ACTIONS = frozenset(
    {HistoryAction.FRAUD_ATTEMPT, HistoryAction.TRANSFER_LIMIT_EXCEEDED}
)
