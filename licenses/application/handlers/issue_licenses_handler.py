"""
IssueLicensesHandler.

Handles the issue licenses command.
"""

import calendar
import logging
from datetime import datetime
from typing import Optional

from core.domain.events import EventBus, utcnow
from core.domain.value_objects import Email
from core.metrics import licenses_issued_total
from licenses.application.commands.issue_licenses import IssueLicensesCommand
from licenses.application.dto.license_dto import IssuedLicenseDTO, IssueLicensesResponseDTO
from licenses.domain.events import LicenseIssued
from licenses.domain.license_key import generate_license_key
from licenses.ports.license_ledger import LicenseLedger

logger = logging.getLogger(__name__)


def add_months(start: datetime, months: int) -> datetime:
    """
    Shift a datetime by whole calendar months.

    The day is clamped to the last day of the target month, so
    31 January plus one month is 28 or 29 February.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


class IssueLicensesHandler:
    """Handler for IssueLicensesCommand."""

    def __init__(self, ledger: LicenseLedger, event_bus: Optional[EventBus] = None):
        """Initialize handler with the ledger and an optional event bus."""
        self.ledger = ledger
        self.event_bus = event_bus

    async def handle(self, command: IssueLicensesCommand) -> IssueLicensesResponseDTO:
        """
        Handle issue licenses command.

        Args:
            command: IssueLicensesCommand

        Returns:
            IssueLicensesResponseDTO with the generated keys

        Raises:
            ValueError: If the count, quota or email is invalid
            DuplicateLicenseKeyError: If a generated key already exists
        """
        if command.count < 1:
            raise ValueError("Count must be at least 1")
        if command.max_transfers < 0:
            raise ValueError("Max transfers cannot be negative")
        if command.expiration_months is not None and command.expiration_months < 1:
            raise ValueError("Expiration must be at least 1 month")

        customer_email = str(Email(command.customer_email)) if command.customer_email else None
        expiration_date = None
        if command.expiration_months:
            expiration_date = add_months(utcnow(), command.expiration_months)

        issued = []
        for _ in range(command.count):
            key = generate_license_key(prefix=command.key_prefix)
            await self.ledger.issue(
                key,
                expiration_date=expiration_date,
                max_transfers=command.max_transfers,
                max_validations=command.max_validations,
                customer_email=customer_email,
            )
            licenses_issued_total.inc()
            issued.append(
                IssuedLicenseDTO(
                    key=key,
                    expiration_date=expiration_date,
                    max_transfers=command.max_transfers,
                )
            )
            if self.event_bus is not None:
                await self.event_bus.publish(
                    LicenseIssued(
                        license_key=key,
                        customer_email=customer_email,
                        expiration_date=expiration_date,
                    )
                )

        logger.info(
            "Issued %d license(s)",
            len(issued),
            extra={"customer_email": customer_email, "max_transfers": command.max_transfers},
        )
        return IssueLicensesResponseDTO(licenses=issued, customer_email=customer_email)
