from app.schemas.payment.refund import RefundCreate, RefundResponse

__all__ = ["RefundCreate", "RefundResponse"]
