"""
Django management command to print a monitoring overview.

Shows license totals, active bindings, recent suspicious activity and
licenses that expire soon.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from core.deps import get_license_ledger
from licenses.application.handlers.license_report_handler import LicenseReportHandler
from licenses.application.queries.license_report import LicenseReportQuery


class Command(BaseCommand):
    """Command to print the license report."""

    help = "Print license totals, active licenses, suspicious activity and upcoming expirations"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=30,
            help="Expiration horizon in days (default: 30)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = LicenseReportHandler(ledger=get_license_ledger())
        report = async_to_sync(handler.handle)(
            LicenseReportQuery(expiring_within_days=options["days"])
        )

        # pylint: disable=no-member
        self.stdout.write(self.style.MIGRATE_HEADING("License report"))
        self.stdout.write(f"Generated: {report.generated_at.isoformat(timespec='seconds')}")
        self.stdout.write(
            f"Total: {report.total}  Active: {report.active}  Inactive: {report.inactive}  "
            f"Expired: {report.expired}  Revoked: {report.revoked}"
        )

        self.stdout.write(self.style.MIGRATE_HEADING("\nActive licenses"))
        for license in report.active_licenses:
            self.stdout.write(
                f"  {license.key}  {license.machine_id}  "
                f"validations {license.validation_count}/{license.max_validations}"
            )
        if not report.active_licenses:
            self.stdout.write("  none")

        self.stdout.write(self.style.MIGRATE_HEADING("\nSuspicious activity"))
        for record in report.suspicious_activities:
            self.stdout.write(
                self.style.WARNING(
                    f"  {record.timestamp.isoformat(timespec='seconds')}  {record.action.value}  "
                    f"{record.license_key}  {record.machine_id or '-'}  {record.ip_address or '-'}"
                )
            )
        if not report.suspicious_activities:
            self.stdout.write("  none")

        self.stdout.write(
            self.style.MIGRATE_HEADING(f"\nExpiring within {options['days']} days")
        )
        for license in report.expiring_soon:
            self.stdout.write(
                f"  {license.key}  {license.expiration_date.date().isoformat()}  "
                f"{license.customer_email or '-'}"
            )
        if not report.expiring_soon:
            self.stdout.write("  none")
