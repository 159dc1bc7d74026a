"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass
from typing import Optional

# Validation outcomes that have no history action of their own
VALIDATION_OK = "VALID"
VALIDATION_QUOTA_EXCEEDED = "QUOTA_EXCEEDED"


@dataclass
class ActivationResultDTO:
    """DTO for activate license response."""

    success: bool
    message: str
    outcome: str  # history action recorded for this request

    def to_response(self) -> dict:
        return {"success": self.success, "message": self.message}


@dataclass
class ValidationResultDTO:
    """DTO for validate license response."""

    valid: bool
    outcome: str
    message: Optional[str] = None
    remaining_validations: Optional[int] = None

    def to_response(self) -> dict:
        """Serialize with the wire field names; unset fields are omitted."""
        data = {"valid": self.valid}
        if self.message is not None:
            data["message"] = self.message
        if self.remaining_validations is not None:
            data["remainingValidations"] = self.remaining_validations
        return data
