"""
IssueLicensesCommand.

Command to generate and store a batch of new license keys.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class IssueLicensesCommand:
    """
    Command to issue license keys.

    Every issued license starts inactive and unbound.
    """

    count: int
    customer_email: Optional[str] = None
    expiration_months: Optional[int] = None  # None issues perpetual licenses
    max_transfers: int = 1
    max_validations: int = 1000
    key_prefix: str = "GP"
