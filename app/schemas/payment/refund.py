"""
Refund request schemas.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.models.base.enums import RefundStatus
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema

__all__ = ["RefundCreate", "RefundResponse"]


class RefundCreate(BaseCreateSchema):
    booking_id: UUID
    amount: Decimal = Field(..., gt=0, description="Amount requested back")
    reason: str = Field(..., min_length=3, max_length=2000)


class RefundResponse(BaseResponseSchema):
    booking_id: UUID
    user_id: str
    refund_amount: Decimal
    refund_reason: str
    status: RefundStatus
    request_reference: str
    settlement_reference: Optional[str] = None
    requested_at: datetime
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None
