"""
Django management command to revoke a license.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.deps import get_license_ledger
from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.revoke_license_handler import RevokeLicenseHandler


class Command(BaseCommand):
    """Command to revoke a license."""

    help = "Revoke a license key. Revocation cannot be undone."

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_key", type=str, help="License key to revoke")

    def handle(self, *args, **options):
        """Execute the command."""
        handler = RevokeLicenseHandler(ledger=get_license_ledger(), event_bus=event_bus)
        try:
            result = async_to_sync(handler.handle)(
                RevokeLicenseCommand(license_key=options["license_key"])
            )
        except LicenseNotFoundError as exc:
            raise CommandError(exc.message) from exc

        # pylint: disable=no-member
        if result.revoked:
            self.stdout.write(self.style.SUCCESS(f"{result.message} {result.license_key}"))
        else:
            self.stdout.write(self.style.WARNING(f"{result.message} {result.license_key}"))
