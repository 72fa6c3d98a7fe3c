"""
Loyalty tier formulas.

Only the numbers live here: which tier a lifetime spend earns, what
each tier grants, and how far a member is from the next tier. Point
balances and tier bookkeeping belong to the loyalty collaborator.
"""

from decimal import Decimal
from typing import Dict, Optional, Tuple

from app.models.base.enums import LoyaltyTier
from app.schemas.loyalty.loyalty import TierBenefits, TierProgress

# Ascending spend thresholds
TIER_THRESHOLDS: Tuple[Tuple[LoyaltyTier, Decimal], ...] = (
    (LoyaltyTier.SILVER, Decimal("20000")),
    (LoyaltyTier.GOLD, Decimal("50000")),
    (LoyaltyTier.PLATINUM, Decimal("100000")),
)

TIER_BENEFITS: Dict[LoyaltyTier, TierBenefits] = {
    LoyaltyTier.BRONZE: TierBenefits(tier=LoyaltyTier.BRONZE, points_multiplier=Decimal("1")),
    LoyaltyTier.SILVER: TierBenefits(
        tier=LoyaltyTier.SILVER,
        points_multiplier=Decimal("1.25"),
        early_check_in=True,
    ),
    LoyaltyTier.GOLD: TierBenefits(
        tier=LoyaltyTier.GOLD,
        points_multiplier=Decimal("1.5"),
        early_check_in=True,
        late_check_out=True,
        room_upgrade=True,
    ),
    LoyaltyTier.PLATINUM: TierBenefits(
        tier=LoyaltyTier.PLATINUM,
        points_multiplier=Decimal("2"),
        early_check_in=True,
        late_check_out=True,
        room_upgrade=True,
        concierge=True,
    ),
}

TIER_UPGRADE_BONUS: Dict[LoyaltyTier, int] = {
    LoyaltyTier.SILVER: 500,
    LoyaltyTier.GOLD: 1000,
    LoyaltyTier.PLATINUM: 2000,
}

_TIER_ORDER = (LoyaltyTier.BRONZE,) + tuple(tier for tier, _ in TIER_THRESHOLDS)


def tier_for_spend(total_spent: Decimal) -> LoyaltyTier:
    """Highest tier whose threshold ``total_spent`` reaches."""
    total_spent = Decimal(total_spent)
    tier = LoyaltyTier.BRONZE
    for candidate, threshold in TIER_THRESHOLDS:
        if total_spent >= threshold:
            tier = candidate
    return tier


def tier_benefits(tier: LoyaltyTier) -> TierBenefits:
    return TIER_BENEFITS[LoyaltyTier(tier)]


def _next_tier(tier: LoyaltyTier) -> Optional[LoyaltyTier]:
    position = _TIER_ORDER.index(LoyaltyTier(tier))
    if position + 1 >= len(_TIER_ORDER):
        return None
    return _TIER_ORDER[position + 1]


def next_tier_progress(tier: LoyaltyTier, total_spent: Decimal) -> TierProgress:
    """
    Progress from ``tier`` toward the next one.

    ``progress`` is the share of the next threshold already spent, capped
    at 1; ``needed`` is the remaining spend, floored at 0. Platinum has no
    next tier and reports full progress.
    """
    tier = LoyaltyTier(tier)
    total_spent = Decimal(total_spent)
    target = _next_tier(tier)
    if target is None:
        return TierProgress(current_tier=tier, next_tier=None, progress=Decimal("1"), needed=Decimal("0"))

    threshold = dict(TIER_THRESHOLDS)[target]
    return TierProgress(
        current_tier=tier,
        next_tier=target,
        progress=max(min(total_spent / threshold, Decimal("1")), Decimal("0")),
        needed=max(threshold - total_spent, Decimal("0")),
    )


def tier_upgrade_bonus(tier: LoyaltyTier) -> int:
    """Bonus points granted on reaching ``tier``."""
    return TIER_UPGRADE_BONUS.get(LoyaltyTier(tier), 0)
