"""
Django admin configuration for licenses app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin, messages
from django.utils.html import format_html

from core.deps import get_license_ledger
from core.infrastructure.events import event_bus
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.revoke_license_handler import RevokeLicenseHandler
from licenses.infrastructure.models import ActivationHistory, License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "key",
        "status_display",
        "machine_id",
        "validation_count",
        "max_validations",
        "transfer_count",
        "max_transfers",
        "expiration_date",
        "customer_email",
        "created_at",
    ]
    list_filter = ["status", "expiration_date", "created_at"]
    search_fields = ["key", "customer_email", "machine_id"]
    # State changes go through the ledger, never through the form
    readonly_fields = [
        "key",
        "status",
        "machine_id",
        "hardware_fingerprint",
        "activation_date",
        "last_validation",
        "validation_count",
        "transfer_count",
        "created_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("key", "status", "customer_email", "customer_info"),
            },
        ),
        (
            "Binding",
            {
                "fields": ("machine_id", "hardware_fingerprint", "activation_date"),
            },
        ),
        (
            "Quotas",
            {
                "fields": (
                    "validation_count",
                    "max_validations",
                    "last_validation",
                    "transfer_count",
                    "max_transfers",
                ),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expiration_date", "created_at"),
            },
        ),
    )
    actions = ["revoke_selected"]

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "inactive": "gray",
            "active": "green",
            "revoked": "red",
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    @admin.action(description="Revoke selected licenses")
    def revoke_selected(self, request, queryset):
        """Revoke through the ledger so each revocation is recorded in the history."""
        handler = RevokeLicenseHandler(ledger=get_license_ledger(), event_bus=event_bus)
        revoked = 0
        for key in queryset.values_list("key", flat=True):
            result = async_to_sync(handler.handle)(RevokeLicenseCommand(license_key=key))
            revoked += int(result.revoked)
        self.message_user(request, f"Revoked {revoked} license(s).", messages.SUCCESS)


@admin.register(ActivationHistory)
class ActivationHistoryAdmin(admin.ModelAdmin):
    """Admin interface for the activation history (read-only)."""

    list_display = [
        "timestamp",
        "license_key",
        "action",
        "success",
        "machine_id",
        "ip_address",
    ]
    list_filter = ["action", "success", "timestamp"]
    search_fields = ["license_key", "machine_id", "ip_address"]

    def has_add_permission(self, request):
        """History is append-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """History is append-only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """History records are never deleted."""
        return False
