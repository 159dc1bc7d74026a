"""
Unit tests for RevokeLicenseHandler.
"""
import pytest
from prometheus_client import REGISTRY

from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import HistoryAction, LicenseStatus
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.revoke_license_handler import RevokeLicenseHandler
from licenses.domain.events import LicenseRevoked

KEY = "GP-REVOKE-0123456789ABCDEF-0000"


@pytest.mark.asyncio
class TestRevokeLicenseHandler:
    """Tests for RevokeLicenseHandler."""

    async def test_revoke_active_license(self, memory_ledger, event_bus, recorded_events):
        memory_ledger.add(
            KEY, status=LicenseStatus.ACTIVE, machine_id="m", hardware_fingerprint="f"
        )
        handler = RevokeLicenseHandler(ledger=memory_ledger, event_bus=event_bus)

        result = await handler.handle(RevokeLicenseCommand(license_key=KEY))

        assert result.revoked is True
        assert memory_ledger.licenses[KEY].status == LicenseStatus.REVOKED
        record = memory_ledger.history[-1]
        assert record.action == HistoryAction.REVOKED
        assert record.machine_id == "ADMIN"
        assert record.hardware_fingerprint == "ADMIN"
        assert record.success is True
        assert [type(e) for e in recorded_events] == [LicenseRevoked]

    async def test_revoke_is_idempotent(self, memory_ledger):
        memory_ledger.add(KEY, status=LicenseStatus.REVOKED)
        handler = RevokeLicenseHandler(ledger=memory_ledger)

        result = await handler.handle(RevokeLicenseCommand(license_key=KEY))

        assert result.revoked is False
        assert "already revoked" in result.message
        assert memory_ledger.history == []

    async def test_unknown_key(self, memory_ledger):
        handler = RevokeLicenseHandler(ledger=memory_ledger)
        with pytest.raises(LicenseNotFoundError):
            await handler.handle(RevokeLicenseCommand(license_key="GP-NOPE"))

    async def test_history_failure_does_not_mask_revocation(
        self, failing_ledger, event_bus, recorded_events
    ):
        ledger = failing_ledger({"append_history"})
        ledger.add(KEY)
        failures_before = (
            REGISTRY.get_sample_value("history_append_failures_total", {"action": "REVOKED"}) or 0
        )
        handler = RevokeLicenseHandler(ledger=ledger, event_bus=event_bus)

        result = await handler.handle(RevokeLicenseCommand(license_key=KEY))

        assert result.revoked is True
        assert result.message == "License revoked."
        assert ledger.licenses[KEY].status == LicenseStatus.REVOKED
        assert ledger.history == []
        assert [type(e) for e in recorded_events] == [LicenseRevoked]
        assert (
            REGISTRY.get_sample_value("history_append_failures_total", {"action": "REVOKED"})
            == failures_before + 1
        )
