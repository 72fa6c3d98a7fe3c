from app.services.payment.refund_service import RefundService

__all__ = ["RefundService"]
