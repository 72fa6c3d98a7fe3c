# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements booking use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base.*)

Public operations return a ``ServiceResult``; failures carry a stable
error code and message.
"""

from app.services.base import ServiceResult, ServiceError
from app.services.booking import (
    AvailabilityService,
    BookingModificationService,
    BookingPricingService,
    BookingService,
    GroupBookingService,
)
from app.services.inventory import InventoryLedger, InventoryService
from app.services.payment import RefundService

__all__ = [
    "ServiceResult",
    "ServiceError",
    "AvailabilityService",
    "BookingModificationService",
    "BookingPricingService",
    "BookingService",
    "GroupBookingService",
    "InventoryLedger",
    "InventoryService",
    "RefundService",
]
