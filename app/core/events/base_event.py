"""
Base event classes for the domain event system.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4


class BaseEvent:
    """Base class for all events emitted by the booking core."""

    def __init__(self, event_type: str, data: Optional[Dict[str, Any]] = None):
        self.event_id = str(uuid4())
        self.event_type = event_type
        self.data = data or {}
        self.timestamp = datetime.now(timezone.utc)
        self.processed = False

    def __str__(self) -> str:
        return f"{self.event_type}({self.event_id})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
            "processed": self.processed
        }


class BookingEvent(BaseEvent):
    """Events related to booking operations."""

    def __init__(self, event_type: str, booking_id: Any, data: Optional[Dict[str, Any]] = None):
        data = dict(data or {})
        data["booking_id"] = str(booking_id)
        super().__init__(event_type, data)
        self.booking_id = booking_id


class RefundEvent(BaseEvent):
    """Events related to refund requests."""

    def __init__(self, event_type: str, refund_id: Any, data: Optional[Dict[str, Any]] = None):
        data = dict(data or {})
        data["refund_id"] = str(refund_id)
        super().__init__(event_type, data)
        self.refund_id = refund_id


class GroupBookingEvent(BaseEvent):
    """Events related to group booking requests."""

    def __init__(self, event_type: str, request_id: Any, data: Optional[Dict[str, Any]] = None):
        data = dict(data or {})
        data["request_id"] = str(request_id)
        super().__init__(event_type, data)
        self.request_id = request_id
