"""
ActivateLicenseCommand.

Command to bind a license to a machine.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license on one machine."""

    license_key: str
    machine_id: str
    hardware_fingerprint: str
    client_ip: Optional[str] = None
    requested_at: Optional[str] = None  # client clock as sent, informational only
