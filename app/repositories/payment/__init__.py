"""
Payment-side repositories.
"""

from app.repositories.payment.refund_repository import RefundRepository

__all__ = ["RefundRepository"]
