from app.schemas.loyalty.loyalty import TierBenefits, TierProgress

__all__ = ["TierBenefits", "TierProgress"]
