"""
ActivateLicenseHandler.

Handler for binding a license to a machine. Decides the transition from a
fresh ledger read, records the attempt in the history and raises the fraud
signal when another machine keeps trying an active key.
"""

import logging
from typing import Optional

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivationResultDTO
from licenses.application.services.history_recorder import HistoryRecorder
from activations.domain.events import LicenseActivated, SecurityAlertRaised
from activations.domain.services import FraudDetector
from core.domain.events import EventBus, utcnow
from core.domain.exceptions import StorageFault
from core.domain.value_objects import HistoryAction, MachineBinding
from core.metrics import security_alerts_total
from licenses.domain.license import License
from licenses.ports.license_ledger import LicenseLedger

logger = logging.getLogger(__name__)

MSG_INVALID_OR_EXPIRED = "Invalid or expired license key."
MSG_ALREADY_ACTIVE = "License already active on this machine."
MSG_IN_USE_ELSEWHERE = "This license is already in use on another machine."
MSG_REVOKED = "License has been revoked."
MSG_TRANSFER_LIMIT = "License transfer limit reached."
MSG_ACTIVATED = "License activated successfully."
MSG_ACTIVATION_FAILED = "License activation failed."


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        ledger: LicenseLedger,
        fraud_detector: Optional[FraudDetector] = None,
        event_bus: Optional[EventBus] = None,
        history_limit: int = 50,
    ):
        """Initialize handler with the ledger and policy collaborators."""
        self.ledger = ledger
        self.fraud_detector = fraud_detector or FraudDetector()
        self.event_bus = event_bus
        self.history_limit = history_limit
        self.history = HistoryRecorder(ledger)

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Business refusals are returned as unsuccessful results, not raised.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO

        Raises:
            StorageFault: If the ledger fails; a SERVER_ERROR record is
                attempted first
        """
        try:
            return await self._activate(command)
        except StorageFault:
            await self._record(command, HistoryAction.SERVER_ERROR, False)
            raise

    async def _activate(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        binding = MachineBinding(command.machine_id, command.hardware_fingerprint)
        license = await self.ledger.lookup_unexpired(command.license_key)

        if license is None:
            return await self._refuse(command, HistoryAction.ACTIVATION_FAILED, MSG_INVALID_OR_EXPIRED)

        if license.is_active:
            if license.is_bound_to(binding):
                await self._record(command, HistoryAction.REACTIVATION, True)
                return ActivationResultDTO(
                    success=True,
                    message=MSG_ALREADY_ACTIVE,
                    outcome=HistoryAction.REACTIVATION.value,
                )
            await self._record(command, HistoryAction.FRAUD_ATTEMPT, False)
            await self._check_fraud(command, license)
            return ActivationResultDTO(
                success=False,
                message=MSG_IN_USE_ELSEWHERE,
                outcome=HistoryAction.FRAUD_ATTEMPT.value,
            )

        if license.is_revoked:
            return await self._refuse(command, HistoryAction.ACTIVATION_FAILED, MSG_REVOKED)

        if not license.can_transfer:
            return await self._refuse(command, HistoryAction.TRANSFER_LIMIT_EXCEEDED, MSG_TRANSFER_LIMIT)

        changed = await self.ledger.activate(
            command.license_key, binding.machine_id, binding.hardware_fingerprint
        )
        if not changed:
            # Another request bound the license between lookup and update
            logger.info("Activation lost race", extra={"license_key": command.license_key})
            return await self._refuse(command, HistoryAction.ACTIVATION_FAILED, MSG_ACTIVATION_FAILED)

        await self._record(command, HistoryAction.ACTIVATION_SUCCESS, True)
        logger.info(
            "License activated",
            extra={"license_key": command.license_key, "machine_id": binding.machine_id},
        )
        if self.event_bus is not None:
            await self.event_bus.publish(
                LicenseActivated(
                    license_key=command.license_key,
                    machine_id=binding.machine_id,
                    hardware_fingerprint=binding.hardware_fingerprint,
                    client_ip=command.client_ip,
                )
            )
        return ActivationResultDTO(
            success=True,
            message=MSG_ACTIVATED,
            outcome=HistoryAction.ACTIVATION_SUCCESS.value,
        )

    async def _check_fraud(self, command: ActivateLicenseCommand, license: License) -> None:
        """Raise the security alert when recent fraud attempts cross the threshold."""
        history = await self.ledger.recent_history(license.key, limit=self.history_limit)
        attempts = self.fraud_detector.count_recent_attempts(history, utcnow())
        if not self.fraud_detector.exceeds_threshold(attempts):
            return

        security_alerts_total.inc()
        logger.warning(
            "Security alert: repeated activation attempts from other machines",
            extra={
                "license_key": license.key,
                "attempt_count": attempts,
                "machine_id": command.machine_id,
                "client_ip": command.client_ip,
            },
        )
        if self.event_bus is not None:
            await self.event_bus.publish(
                SecurityAlertRaised(
                    license_key=license.key,
                    attempt_count=attempts,
                    machine_id=command.machine_id,
                    client_ip=command.client_ip,
                )
            )

    async def _refuse(
        self, command: ActivateLicenseCommand, action: HistoryAction, message: str
    ) -> ActivationResultDTO:
        await self._record(command, action, False)
        return ActivationResultDTO(success=False, message=message, outcome=action.value)

    async def _record(self, command: ActivateLicenseCommand, action: HistoryAction, success: bool) -> None:
        await self.history.record(
            command.license_key,
            command.machine_id,
            command.hardware_fingerprint,
            action,
            success,
            command.client_ip,
        )
