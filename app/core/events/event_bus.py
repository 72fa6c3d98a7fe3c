"""
In-process event bus for booking domain events.

Handlers run synchronously in the publishing thread, after the
publishing service has committed its transaction.
"""
import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from .base_event import BaseEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[BaseEvent], Any]


class EventTypes:
    BOOKING_CREATED = "booking_created"
    BOOKING_CANCELLED = "booking_cancelled"
    BOOKING_MODIFIED = "booking_modified"
    BOOKING_COMPLETED = "booking_completed"
    PAYMENT_APPLIED = "payment_applied"
    REFUND_REQUESTED = "refund_requested"
    REFUND_DECIDED = "refund_decided"
    GROUP_BOOKING_REQUESTED = "group_booking_requested"
    GROUP_BOOKING_STATUS_CHANGED = "group_booking_status_changed"


class EventBus:
    """
    Event bus for handling application events.
    """

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: The type of event to subscribe to
            handler: Callable receiving the event
        """
        with self._lock:
            if handler not in self._handlers[event_type]:
                self._handlers[event_type].append(handler)
        logger.debug(f"Registered handler for event type: {event_type}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
        logger.debug(f"Unregistered handler for event type: {event_type}")

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()

    def publish(self, event: BaseEvent) -> None:
        """
        Deliver an event to every subscribed handler.

        A failing handler is logged and skipped; it never affects the
        operation that published the event.
        """
        with self._lock:
            handlers = list(self._handlers.get(event.event_type, []))

        if not handlers:
            logger.debug(f"No handlers found for event type: {event.event_type}")
            return

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"Error in handler for event {event}: {str(e)}",
                    exc_info=True,
                )
        event.processed = True

    def emit(self, event_type: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.publish(BaseEvent(event_type, data))


# Global event bus instance
event_bus = EventBus()


def publish_event(event: BaseEvent) -> None:
    """Publish an event to the global event bus."""
    event_bus.publish(event)


def subscribe_to_event(event_type: str, handler: EventHandler) -> None:
    """Subscribe to an event type on the global event bus."""
    event_bus.subscribe(event_type, handler)
