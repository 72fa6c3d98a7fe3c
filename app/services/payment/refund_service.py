"""
Refund ledger: refund requests against a booking and their approval.

Approving a refund does not change the booking's payment status; use
``BookingService.mark_refunded`` for that.
"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.config.settings import Settings, settings as default_settings
from app.core.events import EventBus, EventTypes, RefundEvent
from app.core.exceptions import BookingNotFoundError, RefundNotFoundError, ValidationError
from app.models.base.enums import RefundStatus
from app.models.booking.booking import Booking
from app.models.payment.refund import RefundRequest
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.payment.refund_repository import RefundRepository
from app.schemas.payment.refund import RefundCreate, RefundResponse
from app.services.base import BaseService, ServiceResult, track_performance
from app.services.inventory.locks import HotelLockRegistry, hotel_locks
from app.utils.date_utils import now_utc
from app.utils.reference import generate_refund_reference


class RefundService(BaseService[RefundRequest, RefundRepository]):
    """
    Refund request workflow: pending -> approved | rejected.
    """

    def __init__(
        self,
        db_session: Session,
        event_bus: Optional[EventBus] = None,
        config: Optional[Settings] = None,
        locks: Optional[HotelLockRegistry] = None,
    ):
        super().__init__(RefundRepository(db_session), db_session, event_bus)
        self.bookings = BookingRepository(db_session)
        self.config = config or default_settings
        self.locks = locks or hotel_locks

    @track_performance("request_refund")
    def request(
        self,
        booking_id: UUID,
        user_id: str,
        amount: Decimal,
        reason: str,
    ) -> ServiceResult[RefundResponse]:
        """
        Open a pending refund request with a generated reference.

        When ``ENFORCE_REFUND_AMOUNT_BOUND`` is set, this amount plus every
        pending or approved refund of the booking may not exceed the
        booking total. Rejected requests free their amount again.
        """
        try:
            data = RefundCreate(booking_id=booking_id, amount=amount, reason=reason)
            booking = self._get_owned(booking_id, user_id)
            with self.locks.hold(booking.hotel_id), self.transaction():
                self._check_amount(booking, data.amount)
                refund = self.repository.create(
                    RefundRequest(
                        booking_id=booking.id,
                        user_id=user_id,
                        refund_amount=data.amount,
                        refund_reason=data.reason,
                        status=RefundStatus.PENDING,
                        request_reference=generate_refund_reference(self.config.REFUND_REFERENCE_PREFIX),
                        requested_at=now_utc(),
                    )
                )
                response = RefundResponse.model_validate(refund)

            self._log_operation(
                "request refund",
                refund.id,
                {"booking_id": str(booking_id), "amount": str(data.amount)},
            )
            self._publish(
                RefundEvent(
                    EventTypes.REFUND_REQUESTED,
                    refund.id,
                    {
                        "booking_id": str(booking_id),
                        "amount": str(data.amount),
                        "request_reference": refund.request_reference,
                    },
                )
            )
            return ServiceResult.success(response, message="Refund request submitted")

        except Exception as e:
            return self._handle_exception(e, "request refund", booking_id)

    def _check_amount(self, booking: Booking, amount: Decimal) -> None:
        if not self.config.ENFORCE_REFUND_AMOUNT_BOUND:
            return
        claimed = self.repository.claimed_amount(booking.id)
        if claimed + amount > booking.total_amount:
            remaining = max(booking.total_amount - claimed, Decimal("0"))
            raise ValidationError(
                "Refund amount cannot exceed the booking total",
                {"amount": [f"must be <= {remaining}"]},
            )

    @track_performance("decide_refund")
    def decide(
        self,
        refund_id: UUID,
        approve: bool,
        processed_by: Optional[str] = None,
    ) -> ServiceResult[RefundResponse]:
        """
        Approve or reject a pending refund. Approval assigns a settlement
        reference.
        """
        try:
            with self.transaction():
                refund = self.repository.find_by_id(refund_id)
                if refund is None:
                    raise RefundNotFoundError(refund_id)
                if approve:
                    refund.approve(
                        generate_refund_reference(self.config.REFUND_SETTLEMENT_PREFIX),
                        processed_by,
                    )
                else:
                    refund.reject(processed_by)
                self.repository.flush()
                response = RefundResponse.model_validate(refund)

            self._log_operation("decide refund", refund_id, {"status": response.status.value})
            self._publish(
                RefundEvent(
                    EventTypes.REFUND_DECIDED,
                    refund_id,
                    {
                        "booking_id": str(response.booking_id),
                        "status": response.status.value,
                        "settlement_reference": response.settlement_reference,
                    },
                )
            )
            return ServiceResult.success(response)

        except Exception as e:
            return self._handle_exception(e, "decide refund", refund_id)

    def get_refund(self, refund_id: UUID) -> ServiceResult[RefundResponse]:
        try:
            refund = self.repository.find_by_id(refund_id)
            if refund is None:
                raise RefundNotFoundError(refund_id)
            return ServiceResult.success(RefundResponse.model_validate(refund))
        except Exception as e:
            return self._handle_exception(e, "get refund", refund_id)

    def list_refunds(self, booking_id: UUID, user_id: Optional[str] = None) -> ServiceResult[List[RefundResponse]]:
        """
        Refund requests of a booking, newest first. With ``user_id`` the
        booking must belong to that user.
        """
        try:
            if user_id is not None:
                self._get_owned(booking_id, user_id)
            refunds = self.repository.list_for_booking(booking_id)
            return ServiceResult.success(
                [RefundResponse.model_validate(r) for r in refunds],
                metadata={"count": len(refunds)},
            )
        except Exception as e:
            return self._handle_exception(e, "list refunds", booking_id)

    def _get_owned(self, booking_id: UUID, user_id: str) -> Booking:
        booking = self.bookings.find_for_user(booking_id, user_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking
