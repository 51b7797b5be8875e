"""
In-process dispatch of invoice change events.

Handlers subscribe to an event class and receive every event that is an
instance of it, so a subscription to InvoiceEvent sees creates, updates
and deletes alike. Dispatch happens on the publishing thread, after the
write has committed; a failing handler is logged and skipped.
"""

import logging
from typing import Callable, Dict, List, Type

from core.events import DashboardEvent

logger = logging.getLogger(__name__)

Handler = Callable[[DashboardEvent], None]


class EventBus:
    """Routes published events to handlers registered for the event's class or any base class."""

    def __init__(self):
        self._handlers: Dict[Type[DashboardEvent], List[Handler]] = {}

    def subscribe(self, event_class: Type[DashboardEvent], handler: Handler) -> None:
        if not (isinstance(event_class, type) and issubclass(event_class, DashboardEvent)):
            raise TypeError(f"Can only subscribe to DashboardEvent subclasses, got {event_class!r}")
        self._handlers.setdefault(event_class, []).append(handler)

    def handlers_for(self, event: DashboardEvent) -> List[Handler]:
        """Handlers that receive this event, most specific class first."""
        matched = []
        for cls in type(event).__mro__:
            matched.extend(self._handlers.get(cls, ()))
        return matched

    def publish(self, event: DashboardEvent) -> int:
        """
        Deliver an event to its handlers.

        Returns:
            Number of handlers that completed without raising
        """
        delivered = 0
        for handler in self.handlers_for(event):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s (event_id=%s)",
                    getattr(handler, "__name__", repr(handler)),
                    type(event).__name__,
                    event.event_id,
                )
                continue
            delivered += 1
        return delivered
