"""
Tests — Loyalty tier formulas
=============================
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from app.models.base.enums import LoyaltyTier
from app.services.loyalty import next_tier_progress, tier_benefits, tier_for_spend, tier_upgrade_bonus


class TestTierForSpend:
    @pytest.mark.parametrize(
        "spent, tier",
        [
            ("0", LoyaltyTier.BRONZE),
            ("19999.99", LoyaltyTier.BRONZE),
            ("20000", LoyaltyTier.SILVER),
            ("49999", LoyaltyTier.SILVER),
            ("50000", LoyaltyTier.GOLD),
            ("100000", LoyaltyTier.PLATINUM),
            ("250000", LoyaltyTier.PLATINUM),
        ],
    )
    def test_thresholds(self, spent, tier):
        assert tier_for_spend(Decimal(spent)) == tier


class TestBenefits:
    def test_multipliers(self):
        assert [tier_benefits(t).points_multiplier for t in LoyaltyTier] == [
            Decimal("1"),
            Decimal("1.25"),
            Decimal("1.5"),
            Decimal("2"),
        ]

    def test_perks_accumulate(self):
        bronze = tier_benefits(LoyaltyTier.BRONZE)
        silver = tier_benefits(LoyaltyTier.SILVER)
        gold = tier_benefits(LoyaltyTier.GOLD)
        platinum = tier_benefits(LoyaltyTier.PLATINUM)
        assert not any([bronze.early_check_in, bronze.late_check_out, bronze.room_upgrade, bronze.concierge])
        assert silver.early_check_in and not silver.late_check_out
        assert gold.late_check_out and gold.room_upgrade and not gold.concierge
        assert platinum.concierge


class TestProgress:
    def test_bronze_toward_silver(self):
        progress = next_tier_progress(LoyaltyTier.BRONZE, Decimal("5000"))
        assert progress.next_tier == LoyaltyTier.SILVER
        assert progress.progress == Decimal("0.25")
        assert progress.needed == Decimal("15000")

    def test_progress_is_capped(self):
        progress = next_tier_progress(LoyaltyTier.SILVER, Decimal("80000"))
        assert progress.next_tier == LoyaltyTier.GOLD
        assert progress.progress == Decimal("1")
        assert progress.needed == Decimal("0")

    def test_platinum_has_no_next_tier(self):
        progress = next_tier_progress(LoyaltyTier.PLATINUM, Decimal("150000"))
        assert progress.next_tier is None
        assert progress.progress == Decimal("1")
        assert progress.needed == Decimal("0")


class TestUpgradeBonus:
    def test_bonus_per_tier(self):
        assert tier_upgrade_bonus(LoyaltyTier.BRONZE) == 0
        assert tier_upgrade_bonus(LoyaltyTier.SILVER) == 500
        assert tier_upgrade_bonus(LoyaltyTier.GOLD) == 1000
        assert tier_upgrade_bonus(LoyaltyTier.PLATINUM) == 2000
