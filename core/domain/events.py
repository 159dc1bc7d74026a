"""
Domain events and the publish/subscribe ports.

Every event in this service concerns a single license, so the license key
is the aggregate id.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, Type
from uuid import UUID, uuid4


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for all domain events.

    Subclasses are frozen keyword-only dataclasses that add their own
    payload fields; ``to_dict`` picks them up automatically.
    """

    license_key: str
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)

    @property
    def event_type(self) -> str:
        return type(self).__name__

    @property
    def aggregate_id(self) -> str:
        return self.license_key

    def to_dict(self) -> Dict[str, Any]:
        """Flat, JSON-friendly representation used by the audit log."""
        data = {"event_type": self.event_type, "aggregate_id": self.aggregate_id}
        for item in fields(self):
            data[item.name] = _serialize(getattr(self, item.name))
        return data


class EventHandler(ABC):
    """Receives published events."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """Routes events to the handlers subscribed to their exact type."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to every subscriber of its type."""

    @abstractmethod
    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Register ``handler`` for events of ``event_type``."""
