"""
RevokeLicenseHandler.

Administrative revocation. The license moves to ``revoked`` and a
``REVOKED`` record is appended to its history.
"""

import logging
from typing import Optional

from core.domain.events import EventBus
from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import HistoryAction
from core.metrics import licenses_revoked_total
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.dto.license_dto import RevokeLicenseResultDTO
from licenses.application.services.history_recorder import HistoryRecorder
from licenses.domain.events import LicenseRevoked
from licenses.ports.license_ledger import LicenseLedger

logger = logging.getLogger(__name__)


class RevokeLicenseHandler:
    """Handler for RevokeLicenseCommand."""

    def __init__(self, ledger: LicenseLedger, event_bus: Optional[EventBus] = None):
        self.ledger = ledger
        self.event_bus = event_bus
        self.history = HistoryRecorder(ledger)

    async def handle(self, command: RevokeLicenseCommand) -> RevokeLicenseResultDTO:
        """
        Handle revoke license command.

        Raises:
            LicenseNotFoundError: If no license has this key
        """
        license = await self.ledger.lookup(command.license_key)
        if license is None:
            raise LicenseNotFoundError(f"License {command.license_key} not found")

        if license.is_revoked:
            return RevokeLicenseResultDTO(
                license_key=command.license_key,
                revoked=False,
                message="License is already revoked.",
            )

        changed = await self.ledger.revoke(command.license_key)
        if not changed:
            # Revoked concurrently by someone else
            return RevokeLicenseResultDTO(
                license_key=command.license_key,
                revoked=False,
                message="License is already revoked.",
            )

        # Best effort: the revocation above is already committed
        await self.history.record(
            command.license_key,
            command.actor,
            command.actor,
            HistoryAction.REVOKED,
            True,
        )
        licenses_revoked_total.inc()
        logger.warning(
            "License revoked",
            extra={"license_key": command.license_key, "actor": command.actor},
        )

        if self.event_bus is not None:
            await self.event_bus.publish(
                LicenseRevoked(license_key=command.license_key, actor=command.actor)
            )

        return RevokeLicenseResultDTO(
            license_key=command.license_key,
            revoked=True,
            message="License revoked.",
        )
