"""
In-process event bus.

Handlers run concurrently on the publisher's event loop. A failing handler
is logged and never affects the publisher or the other handlers.
"""

import asyncio
import logging
from collections import defaultdict
from typing import DefaultDict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Dispatches events to handlers subscribed to the exact event class."""

    def __init__(self):
        self._handlers: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(type(event))
        if not handlers:
            return

        results = await asyncio.gather(
            *(handler.handle(event) for handler in handlers), return_exceptions=True
        )
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    "Event handler %s failed on %s",
                    type(handler).__name__,
                    event.event_type,
                    extra={"license_key": event.license_key},
                    exc_info=result,
                )


# Process-wide bus used by the HTTP layer and the management commands
event_bus = InMemoryEventBus()
