"""
Unit tests for the in-memory event bus and audit handler registration.
"""
import pytest

from activations.domain.events import LicenseActivated, SecurityAlertRaised
from core.domain.events import EventHandler
from core.infrastructure.event_handlers import AUDITED_EVENTS, register_event_handlers
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import LicenseIssued, LicenseRevoked


class ExplodingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("handler failure")


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_reaches_subscribers(self, event_bus, recorded_events):
        event = LicenseIssued(license_key="GP-1")
        await event_bus.publish(event)
        assert recorded_events == [event]

    async def test_publish_without_subscribers_is_noop(self):
        bus = InMemoryEventBus()
        await bus.publish(LicenseRevoked(license_key="GP-1"))

    async def test_handler_failure_does_not_reach_publisher(self, event_bus, recorded_events):
        event_bus.subscribe(LicenseActivated, ExplodingHandler())
        event = LicenseActivated(license_key="GP-1", machine_id="m", hardware_fingerprint="f")

        await event_bus.publish(event)

        assert recorded_events == [event]


class TestDomainEvents:
    """Tests for event payloads."""

    def test_event_identity(self):
        event = LicenseIssued(license_key="GP-1", customer_email="a@b.c")
        assert event.aggregate_id == "GP-1"
        assert event.event_type == "LicenseIssued"
        assert event.event_id is not None
        assert event.occurred_at.tzinfo is not None

    def test_security_alert_to_dict(self):
        event = SecurityAlertRaised(
            license_key="GP-1", attempt_count=4, machine_id="m", client_ip="10.0.0.1"
        )
        data = event.to_dict()
        assert data["event_type"] == "SecurityAlertRaised"
        assert data["aggregate_id"] == "GP-1"
        assert data["attempt_count"] == 4
        assert data["client_ip"] == "10.0.0.1"

    def test_revoked_to_dict_includes_actor(self):
        assert LicenseRevoked(license_key="GP-1").to_dict()["actor"] == "ADMIN"


class TestRegisterEventHandlers:
    """Tests for audit handler registration."""

    def test_registration_is_idempotent(self):
        bus = InMemoryEventBus()
        register_event_handlers(bus)
        register_event_handlers(bus)

        for event_type in AUDITED_EVENTS:
            assert len(bus.handlers_for(event_type)) == 1
