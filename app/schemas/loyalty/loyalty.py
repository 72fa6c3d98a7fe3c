"""
Loyalty tier schemas.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.models.base.enums import LoyaltyTier
from app.schemas.common.base import BaseSchema

__all__ = ["TierBenefits", "TierProgress"]


class TierBenefits(BaseSchema):
    tier: LoyaltyTier
    points_multiplier: Decimal
    early_check_in: bool = False
    late_check_out: bool = False
    room_upgrade: bool = False
    concierge: bool = False


class TierProgress(BaseSchema):
    current_tier: LoyaltyTier
    next_tier: Optional[LoyaltyTier] = None
    progress: Decimal = Field(..., ge=0, le=1, description="Share of the next threshold reached")
    needed: Decimal = Field(..., ge=0, description="Spend still required for the next tier")
