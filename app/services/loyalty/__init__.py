"""
Loyalty tier formulas.
"""

from app.services.loyalty.loyalty_service import (
    next_tier_progress,
    tier_benefits,
    tier_for_spend,
    tier_upgrade_bonus,
)

__all__ = [
    "next_tier_progress",
    "tier_benefits",
    "tier_for_spend",
    "tier_upgrade_bonus",
]
