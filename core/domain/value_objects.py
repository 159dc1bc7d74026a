"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class MachineBinding(ValueObject):
    """
    The machine identity a license is bound to.

    Both the machine id and the hardware fingerprint are opaque strings
    supplied by the client. A license is bound only when both match.
    """

    machine_id: str
    hardware_fingerprint: str

    def __post_init__(self):
        """Validate binding fields."""
        if not self.machine_id:
            raise ValueError("Machine ID cannot be empty")
        if not self.hardware_fingerprint:
            raise ValueError("Hardware fingerprint cannot be empty")

    def __str__(self) -> str:
        """Return binding as string."""
        return f"{self.machine_id}/{self.hardware_fingerprint}"


class LicenseStatus(Enum):
    """License status value object."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class HistoryAction(Enum):
    """Actions written to the activation history."""

    ACTIVATION_SUCCESS = "ACTIVATION_SUCCESS"
    ACTIVATION_FAILED = "ACTIVATION_FAILED"
    REACTIVATION = "REACTIVATION"
    FRAUD_ATTEMPT = "FRAUD_ATTEMPT"
    TRANSFER_LIMIT_EXCEEDED = "TRANSFER_LIMIT_EXCEEDED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SERVER_ERROR = "SERVER_ERROR"
    # Written by administrative tooling only
    REVOKED = "REVOKED"

    def __str__(self) -> str:
        """Return action as string."""
        return self.value
