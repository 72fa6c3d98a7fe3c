"""
Payment-side models of the booking core.
"""

from app.models.payment.refund import RefundRequest

__all__ = ["RefundRequest"]
