"""
Event handlers for domain events.

These handlers process domain events for side effects such as
audit logging.
"""

import logging

from activations.domain.events import LicenseActivated, SecurityAlertRaised
from core.domain.events import DomainEvent, EventBus, EventHandler
from licenses.domain.events import LicenseIssued, LicenseRevoked

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (LicenseIssued, LicenseRevoked, LicenseActivated, SecurityAlertRaised)


class AuditLogEventHandler(EventHandler):
    """Writes every license event to the structured log."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


_registered_buses = set()


def register_event_handlers(bus: EventBus = None) -> None:
    """
    Subscribe the audit handler to every license event.

    Safe to call more than once for the same bus.
    """
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    if id(bus) in _registered_buses:
        return

    handler = AuditLogEventHandler()
    for event_type in AUDITED_EVENTS:
        bus.subscribe(event_type, handler)
    _registered_buses.add(id(bus))
    logger.info("Registered audit handler for %d event type(s)", len(AUDITED_EVENTS))
