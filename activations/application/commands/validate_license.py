"""
ValidateLicenseCommand.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to check that a license is active on the calling machine."""

    license_key: str
    machine_id: str
    hardware_fingerprint: str
    client_ip: Optional[str] = None
