"""
Domain event system for the hotel booking core.
"""

from .event_bus import EventBus, EventTypes, event_bus, publish_event, subscribe_to_event
from .base_event import BaseEvent, BookingEvent, RefundEvent, GroupBookingEvent

__all__ = [
    "EventBus",
    "EventTypes",
    "event_bus",
    "publish_event",
    "subscribe_to_event",
    "BaseEvent",
    "BookingEvent",
    "RefundEvent",
    "GroupBookingEvent",
]
