"""
RevokeLicenseCommand.
"""

from dataclasses import dataclass


@dataclass
class RevokeLicenseCommand:
    """Command to revoke a license. Revocation is terminal."""

    license_key: str
    actor: str = "ADMIN"
