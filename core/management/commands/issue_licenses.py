"""
Django management command to issue new license keys.

Keys are created inactive and unbound; the first activation binds them.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.deps import get_license_ledger, license_policy
from core.domain.exceptions import DomainException
from core.infrastructure.events import event_bus
from licenses.application.commands.issue_licenses import IssueLicensesCommand
from licenses.application.handlers.issue_licenses_handler import IssueLicensesHandler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to issue license keys."""

    help = "Generate license keys and store them as inactive licenses"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("count", type=int, help="Number of keys to generate")
        parser.add_argument(
            "--email",
            type=str,
            default=None,
            help="Customer email attached to every key",
        )
        parser.add_argument(
            "--expires",
            type=int,
            default=None,
            metavar="MONTHS",
            help="Expire the licenses after this many months (default: perpetual)",
        )
        parser.add_argument(
            "--transfers",
            type=int,
            default=None,
            help="Maximum transfers per license",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        policy = license_policy()
        command = IssueLicensesCommand(
            count=options["count"],
            customer_email=options["email"],
            expiration_months=options["expires"],
            max_transfers=(
                options["transfers"]
                if options["transfers"] is not None
                else policy["DEFAULT_MAX_TRANSFERS"]
            ),
            max_validations=policy["DEFAULT_MAX_VALIDATIONS"],
            key_prefix=policy["KEY_PREFIX"],
        )
        handler = IssueLicensesHandler(ledger=get_license_ledger(), event_bus=event_bus)

        try:
            result = async_to_sync(handler.handle)(command)
        except (ValueError, DomainException) as exc:
            raise CommandError(str(exc)) from exc

        for item in result.licenses:
            self.stdout.write(item.key)

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"\nIssued {len(result.licenses)} license(s)"))
        if result.customer_email:
            self.stdout.write(f"  Customer:      {result.customer_email}")
        expiration = result.licenses[0].expiration_date
        self.stdout.write(
            f"  Expires:       {expiration.date().isoformat() if expiration else 'never'}"
        )
        self.stdout.write(f"  Max transfers: {command.max_transfers}")
