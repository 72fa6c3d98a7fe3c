"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and abstract base classes shared by
every persisted entity of the booking core.
"""

import re
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base, declared_attr

from app.utils.date_utils import now_utc

# Create declarative base
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common methods.
    """

    __abstract__ = True

    @declared_attr
    def __tablename__(cls) -> str:
        """Generate table name from class name."""
        name = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', cls.__name__)
        return re.sub('([a-z0-9])([A-Z])', r'\1_\2', name).lower() + 's'

    def to_dict(self, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Args:
            exclude: List of field names to exclude

        Returns:
            Dictionary representation of the model
        """
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            if column.name in exclude:
                continue
            value = getattr(self, column.key)

            if isinstance(value, (datetime, date)):
                result[column.name] = value.isoformat()
            elif isinstance(value, UUID):
                result[column.name] = str(value)
            elif isinstance(value, Enum):
                result[column.name] = value.value
            elif isinstance(value, Decimal):
                result[column.name] = str(value)
            else:
                result[column.name] = value

        return result

    def __repr__(self) -> str:
        """String representation of model instance."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class TimestampModel(BaseModel):
    """
    Base model with automatic timestamp tracking.

    Timestamps are assigned client side so that ordering by creation
    time is stable within a single transaction.
    """

    __abstract__ = True

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        comment="Record creation timestamp"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
        comment="Record last update timestamp"
    )
