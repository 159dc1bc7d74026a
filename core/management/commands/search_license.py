"""
Django management command to look up a license by partial key.

Prints the first match and its most recent history entries.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from core.deps import get_license_ledger
from licenses.application.handlers.search_licenses_handler import SearchLicensesHandler
from licenses.application.queries.search_licenses import SearchLicensesQuery


def _fmt(value) -> str:
    if value is None:
        return "-"
    if hasattr(value, "isoformat"):
        return value.isoformat(timespec="seconds")
    return str(value)


class Command(BaseCommand):
    """Command to search licenses."""

    help = "Search licenses by key substring"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("term", type=str, help="Part of the license key")
        parser.add_argument(
            "--history",
            type=int,
            default=20,
            help="Number of history entries to show (default: 20)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = SearchLicensesHandler(ledger=get_license_ledger())
        result = async_to_sync(handler.handle)(
            SearchLicensesQuery(term=options["term"], history_limit=options["history"])
        )

        if result.license is None:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING(f"No license matches '{options['term']}'"))
            return

        license = result.license
        if result.match_count > 1:
            self.stdout.write(f"{result.match_count} matches, showing the first")
        self.stdout.write(f"Key:              {license.key}")
        self.stdout.write(f"Status:           {license.status.value}")
        self.stdout.write(f"Machine:          {_fmt(license.machine_id)}")
        self.stdout.write(f"Fingerprint:      {_fmt(license.hardware_fingerprint)}")
        self.stdout.write(f"Activated:        {_fmt(license.activation_date)}")
        self.stdout.write(f"Last validation:  {_fmt(license.last_validation)}")
        self.stdout.write(
            f"Validations:      {license.validation_count}/{license.max_validations}"
        )
        self.stdout.write(f"Transfers:        {license.transfer_count}/{license.max_transfers}")
        self.stdout.write(f"Expires:          {_fmt(license.expiration_date)}")
        self.stdout.write(f"Customer:         {_fmt(license.customer_email)}")

        self.stdout.write(f"\nHistory ({len(result.history)}):")
        for record in result.history:
            flag = "ok  " if record.success else "FAIL"
            self.stdout.write(
                f"  {_fmt(record.timestamp)} {flag} {record.action.value:<24} "
                f"{_fmt(record.machine_id)} {_fmt(record.ip_address)}"
            )
