"""
SQLAlchemy model mixins for reusable functionality.
"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import Column, String, Text, Uuid
from sqlalchemy.orm import validates


class UUIDMixin:
    """
    Mixin for UUID primary key.

    Uses the backend-neutral ``Uuid`` type so the same models run on
    PostgreSQL and SQLite.
    """

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        index=True,
        comment="Unique identifier (UUID v4)"
    )


class GuestContactMixin:
    """
    Mixin for the guest contact fields captured on a booking.
    """

    guest_name = Column(
        String(255),
        nullable=False,
        comment="Primary guest full name"
    )
    guest_email = Column(
        String(255),
        nullable=False,
        comment="Primary guest email"
    )
    guest_phone = Column(
        String(20),
        nullable=True,
        comment="Primary guest phone number"
    )
    special_requests = Column(
        Text,
        nullable=True,
        comment="Free-form guest requests"
    )

    @validates('guest_email')
    def validate_guest_email(self, key: str, value: str) -> str:
        """Validate email format."""
        if not value or '@' not in value:
            raise ValueError("Invalid email format")
        return value.strip().lower()

    @validates('guest_phone')
    def validate_guest_phone(self, key: str, value: Optional[str]) -> Optional[str]:
        """Normalize phone number."""
        if value:
            cleaned = ''.join(filter(str.isdigit, value))
            if len(cleaned) < 7 or len(cleaned) > 15:
                raise ValueError("Phone number must be 7-15 digits")
        return value
