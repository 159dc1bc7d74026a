"""
LicenseReportHandler.

Builds the monitoring overview shown by the ``license_report`` command.
"""

from datetime import timedelta

from core.domain.events import utcnow
from licenses.application.dto.license_dto import LicenseReportDTO
from licenses.application.queries.license_report import LicenseReportQuery
from licenses.ports.license_ledger import LicenseLedger


class LicenseReportHandler:
    """Handler for LicenseReportQuery."""

    def __init__(self, ledger: LicenseLedger):
        self.ledger = ledger

    async def handle(self, query: LicenseReportQuery) -> LicenseReportDTO:
        """
        Handle license report query.

        Counts are mutually exclusive: an expired license is counted as
        expired whatever its status, except revoked licenses which are
        always counted as revoked.

        Args:
            query: LicenseReportQuery

        Returns:
            LicenseReportDTO
        """
        now = utcnow()
        licenses = await self.ledger.list_licenses()
        history = await self.ledger.latest_history(limit=query.history_window)

        revoked = [lic for lic in licenses if lic.is_revoked]
        live = [lic for lic in licenses if not lic.is_revoked]
        expired = [lic for lic in live if lic.is_expired(now)]
        current = [lic for lic in live if not lic.is_expired(now)]
        active = [lic for lic in current if lic.is_active]

        horizon = now + timedelta(days=query.expiring_within_days)
        expiring_soon = sorted(
            (
                lic
                for lic in current
                if lic.expiration_date is not None and lic.expiration_date <= horizon
            ),
            key=lambda lic: lic.expiration_date,
        )

        suspicious = [record for record in history if record.is_suspicious]

        return LicenseReportDTO(
            generated_at=now,
            total=len(licenses),
            active=len(active),
            inactive=len(current) - len(active),
            revoked=len(revoked),
            expired=len(expired),
            active_licenses=active,
            suspicious_activities=suspicious[: query.suspicious_limit],
            expiring_soon=expiring_soon,
        )
