"""
ValidateLicenseHandler.

Handler for periodic license checks from a bound machine. Each matching
check consumes one validation from the license quota.
"""

import logging

from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.dto.activation_dto import (
    VALIDATION_OK,
    VALIDATION_QUOTA_EXCEEDED,
    ValidationResultDTO,
)
from licenses.application.services.history_recorder import HistoryRecorder
from core.domain.value_objects import HistoryAction, MachineBinding
from licenses.ports.license_ledger import LicenseLedger

logger = logging.getLogger(__name__)

MSG_INVALID_OR_EXPIRED = "Invalid or expired license key."
MSG_NOT_VALID_FOR_MACHINE = "License is not valid for this machine."
MSG_QUOTA_REACHED = "Validation limit reached."


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(self, ledger: LicenseLedger):
        self.ledger = ledger
        self.history = HistoryRecorder(ledger)

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResultDTO:
        """
        Handle validate license command.

        The counter increment is never reverted, so a license over its
        quota keeps counting while every further check is refused.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResultDTO

        Raises:
            StorageFault: If the ledger fails
        """
        binding = MachineBinding(command.machine_id, command.hardware_fingerprint)
        license = await self.ledger.lookup_unexpired(command.license_key)

        if license is None:
            return await self._invalid(command, MSG_INVALID_OR_EXPIRED)

        if not (license.is_active and license.is_bound_to(binding)):
            return await self._invalid(command, MSG_NOT_VALID_FOR_MACHINE)

        changed = await self.ledger.record_validation(
            command.license_key, binding.machine_id, binding.hardware_fingerprint
        )
        if not changed:
            # Revoked or rebound between lookup and update
            logger.warning(
                "Validation counter not updated",
                extra={"license_key": command.license_key, "machine_id": binding.machine_id},
            )
            return await self._invalid(command, MSG_NOT_VALID_FOR_MACHINE)

        updated = await self.ledger.lookup(command.license_key)
        validation_count = (
            updated.validation_count if updated is not None else license.validation_count + 1
        )
        max_validations = updated.max_validations if updated is not None else license.max_validations

        if validation_count > max_validations:
            logger.info(
                "Validation quota exceeded",
                extra={"license_key": command.license_key, "validation_count": validation_count},
            )
            return ValidationResultDTO(
                valid=False,
                outcome=VALIDATION_QUOTA_EXCEEDED,
                message=MSG_QUOTA_REACHED,
            )

        return ValidationResultDTO(
            valid=True,
            outcome=VALIDATION_OK,
            remaining_validations=max(0, max_validations - validation_count),
        )

    async def _invalid(self, command: ValidateLicenseCommand, message: str) -> ValidationResultDTO:
        await self.history.record(
            command.license_key,
            command.machine_id,
            command.hardware_fingerprint,
            HistoryAction.VALIDATION_FAILED,
            False,
            command.client_ip,
        )
        return ValidationResultDTO(
            valid=False,
            outcome=HistoryAction.VALIDATION_FAILED.value,
            message=message,
        )
