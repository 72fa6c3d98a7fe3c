"""
Core booking service: the booking lifecycle.

Creation, cancellation, completion and payment outcomes all run as one
unit of work each: availability check, inventory change, booking row and
audit history are committed together, under the hotel's lock.

Events are published only after the commit succeeds.
"""

from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.config.settings import Settings, settings as default_settings
from app.core.events import BookingEvent, EventBus, EventTypes
from app.core.exceptions import (
    BookingNotFoundError,
    ConflictError,
    HotelNotFoundError,
    NotAvailableError,
)
from app.models.base.enums import BookingStatus, ModificationStatus, ModificationType, PaymentOutcome
from app.models.booking.booking import Booking
from app.models.booking.booking_modification import BookingModification
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.hotel.hotel_repository import HotelRepository
from app.schemas.booking.booking_request import BookingCreate
from app.schemas.booking.booking_response import BookingDetail, BookingResponse
from app.services.base import BaseService, ServiceResult, track_performance
from app.services.booking.availability_service import AvailabilityService
from app.services.booking.booking_pricing_service import BookingPricingService
from app.services.inventory.inventory_ledger import InventoryLedger
from app.utils.date_utils import now_utc, validate_stay_range
from app.utils.reference import generate_booking_reference

MAX_REFERENCE_ATTEMPTS = 5


class BookingService(BaseService[Booking, BookingRepository]):
    """
    Booking lifecycle operations.

    Responsibilities:
    - Create bookings (check, price, reserve, persist)
    - Cancel bookings and give their rooms back
    - Apply payment outcomes reported by the payment collaborator
    - Complete stays and link refunds to payment status
    - Owner-scoped lookups
    """

    def __init__(
        self,
        db_session: Session,
        ledger: Optional[InventoryLedger] = None,
        pricing: Optional[BookingPricingService] = None,
        availability: Optional[AvailabilityService] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(BookingRepository(db_session), db_session, event_bus)
        self.config = config or default_settings
        self.ledger = ledger or InventoryLedger(db_session, self.config)
        self.pricing = pricing or BookingPricingService(db_session, self.ledger)
        self.availability = availability or AvailabilityService(
            db_session, self.ledger, self.pricing, self.event_bus
        )
        self.hotels = HotelRepository(db_session)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create(
        self,
        user_id: str,
        request: Union[BookingCreate, Dict[str, Any]],
    ) -> ServiceResult[BookingResponse]:
        """
        Create a pending booking and reserve its rooms.

        A retry carrying the same ``idempotency_key`` for the same user
        returns the booking created by the first call without reserving
        again.

        Returns:
            ServiceResult containing BookingResponse or error
        """
        try:
            if not isinstance(request, BookingCreate):
                request = BookingCreate.model_validate(request)
            validate_stay_range(request.check_in_date, request.check_out_date)

            replay = self._find_replay(user_id, request.idempotency_key)
            if replay is not None:
                return replay

            with self.ledger.locks.hold(request.hotel_id):
                # A concurrent retry may have won while we waited for the lock
                replay = self._find_replay(user_id, request.idempotency_key)
                if replay is not None:
                    return replay

                with self.transaction():
                    booking = self._create_locked(user_id, request)
                    response = BookingResponse.model_validate(booking)

            self._logger.info(
                f"Booking {booking.booking_reference} created",
                extra={
                    "booking_id": str(booking.id),
                    "hotel_id": str(booking.hotel_id),
                    "check_in": booking.check_in_date.isoformat(),
                    "check_out": booking.check_out_date.isoformat(),
                    "rooms": booking.rooms,
                },
            )
            self._publish(
                BookingEvent(
                    EventTypes.BOOKING_CREATED,
                    booking.id,
                    {
                        "booking_reference": booking.booking_reference,
                        "hotel_id": str(booking.hotel_id),
                        "user_id": user_id,
                        "total_amount": str(booking.total_amount),
                    },
                )
            )
            return ServiceResult.success(response, message="Booking created successfully")

        except Exception as e:
            return self._handle_exception(
                e,
                "create booking",
                additional_context={"user_id": user_id},
            )

    def _find_replay(self, user_id: str, idempotency_key: Optional[str]) -> Optional[ServiceResult]:
        if not idempotency_key:
            return None
        existing = self.repository.find_by_idempotency_key(user_id, idempotency_key)
        if existing is None:
            return None
        self._logger.info(
            "Idempotent booking replay",
            extra={"booking_id": str(existing.id), "user_id": user_id},
        )
        return ServiceResult.success(
            BookingResponse.model_validate(existing),
            message="Booking already exists",
            metadata={"idempotent_replay": True},
        )

    def _create_locked(self, user_id: str, request: BookingCreate) -> Booking:
        hotel = self.hotels.find_by_id(request.hotel_id)
        if hotel is None:
            raise HotelNotFoundError(request.hotel_id)

        if not self.availability.is_available(
            request.hotel_id, request.check_in_date, request.check_out_date, request.rooms
        ):
            raise NotAvailableError(
                hotel_id=request.hotel_id,
                check_in=request.check_in_date,
                check_out=request.check_out_date,
                rooms=request.rooms,
            )

        total_amount = self.pricing.total_price(
            request.hotel_id, request.check_in_date, request.check_out_date, request.rooms
        )
        self.ledger.reserve(
            request.hotel_id, request.check_in_date, request.check_out_date, request.rooms
        )

        booking = Booking(
            booking_reference=self._new_reference(),
            idempotency_key=request.idempotency_key,
            hotel_id=request.hotel_id,
            user_id=user_id,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
            guests=request.guests,
            rooms=request.rooms,
            total_amount=total_amount,
            booking_status=BookingStatus.PENDING,
            guest_name=request.guest.guest_name,
            guest_email=str(request.guest.guest_email),
            guest_phone=request.guest.guest_phone,
            special_requests=request.guest.special_requests,
        )
        booking.record_initial_status(user_id)
        return self.repository.create(booking)

    def _new_reference(self) -> str:
        for _ in range(MAX_REFERENCE_ATTEMPTS):
            reference = generate_booking_reference(self.config.BOOKING_REFERENCE_PREFIX)
            if not self.repository.reference_exists(reference):
                return reference
        raise ConflictError("Could not allocate a unique booking reference")

    # -------------------------------------------------------------------------
    # Cancel
    # -------------------------------------------------------------------------

    @track_performance("cancel_booking")
    def cancel(
        self,
        booking_id: UUID,
        user_id: str,
        reason: Optional[str] = None,
    ) -> ServiceResult[BookingResponse]:
        """
        Cancel a pending or confirmed booking owned by ``user_id`` and
        release its rooms.
        """
        try:
            booking = self._get_owned(booking_id, user_id)
            with self.ledger.locks.hold(booking.hotel_id), self.transaction():
                self.repository.refresh(booking)
                previous = booking.booking_status
                booking.cancel(changed_by=user_id, reason=reason)
                self.ledger.release(
                    booking.hotel_id, booking.check_in_date, booking.check_out_date, booking.rooms
                )
                booking.modifications.append(
                    BookingModification(
                        modification_type=ModificationType.CANCELLATION,
                        old_data={"booking_status": previous.value},
                        new_data={"booking_status": BookingStatus.CANCELLED.value},
                        reason=reason,
                        status=ModificationStatus.APPROVED,
                        requested_by=user_id,
                        processed_at=now_utc(),
                    )
                )
                self.repository.flush()
                response = BookingResponse.model_validate(booking)

            self._logger.info(
                f"Booking {booking.booking_reference} cancelled",
                extra={
                    "booking_id": str(booking.id),
                    "hotel_id": str(booking.hotel_id),
                    "rooms": booking.rooms,
                },
            )
            self._publish(
                BookingEvent(
                    EventTypes.BOOKING_CANCELLED,
                    booking.id,
                    {"previous_status": previous.value, "reason": reason},
                )
            )
            return ServiceResult.success(response, message="Booking cancelled successfully")

        except Exception as e:
            return self._handle_exception(e, "cancel booking", booking_id)

    # -------------------------------------------------------------------------
    # Payment & completion
    # -------------------------------------------------------------------------

    @track_performance("apply_payment_outcome")
    def apply_payment_outcome(
        self,
        booking_id: UUID,
        outcome: PaymentOutcome,
        changed_by: Optional[str] = None,
    ) -> ServiceResult[BookingResponse]:
        """
        Apply a payment result reported by the payment collaborator.

        ``paid`` confirms a pending booking; ``failed`` leaves the booking
        status alone so the guest can retry. Re-applying an outcome that
        is already recorded is a no-op.
        """
        try:
            outcome = PaymentOutcome(outcome)
            with self.transaction():
                booking = self._get(booking_id)
                changed = booking.apply_payment_outcome(outcome, changed_by)
                self.repository.flush()
                response = BookingResponse.model_validate(booking)

            if changed:
                self._log_operation(
                    "apply payment outcome",
                    booking_id,
                    {"outcome": outcome.value, "booking_status": response.booking_status.value},
                )
                self._publish(
                    BookingEvent(
                        EventTypes.PAYMENT_APPLIED,
                        booking_id,
                        {
                            "outcome": outcome.value,
                            "payment_status": response.payment_status.value,
                            "booking_status": response.booking_status.value,
                        },
                    )
                )
            return ServiceResult.success(response, metadata={"changed": changed})

        except Exception as e:
            return self._handle_exception(e, "apply payment outcome", booking_id)

    def complete(self, booking_id: UUID, changed_by: Optional[str] = None) -> ServiceResult[BookingResponse]:
        """Mark a confirmed stay as completed. Its nights stay consumed."""
        try:
            with self.transaction():
                booking = self._get(booking_id)
                booking.complete(changed_by, "Stay completed")
                self.repository.flush()
                response = BookingResponse.model_validate(booking)

            self._log_operation("complete booking", booking_id)
            self._publish(BookingEvent(EventTypes.BOOKING_COMPLETED, booking_id))
            return ServiceResult.success(response)
        except Exception as e:
            return self._handle_exception(e, "complete booking", booking_id)

    def mark_refunded(self, booking_id: UUID, changed_by: Optional[str] = None) -> ServiceResult[BookingResponse]:
        """
        Move the payment status from ``paid`` to ``refunded``.

        Refund approval never does this by itself; callers decide when a
        settled refund should be reflected on the booking.
        """
        try:
            with self.transaction():
                booking = self._get(booking_id)
                booking.mark_refunded()
                self.repository.flush()
                response = BookingResponse.model_validate(booking)

            self._log_operation("mark booking refunded", booking_id, {"changed_by": changed_by})
            self._publish(
                BookingEvent(
                    EventTypes.PAYMENT_APPLIED,
                    booking_id,
                    {"outcome": "refunded", "payment_status": response.payment_status.value},
                )
            )
            return ServiceResult.success(response)
        except Exception as e:
            return self._handle_exception(e, "mark booking refunded", booking_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: UUID, user_id: str) -> ServiceResult[BookingDetail]:
        try:
            booking = self._get_owned(booking_id, user_id)
            return ServiceResult.success(BookingDetail.model_validate(booking))
        except Exception as e:
            return self._handle_exception(e, "get booking", booking_id)

    def get_by_reference(self, reference: str) -> ServiceResult[BookingResponse]:
        try:
            booking = self.repository.find_by_reference(reference)
            if booking is None:
                raise BookingNotFoundError(reference)
            return ServiceResult.success(BookingResponse.model_validate(booking))
        except Exception as e:
            return self._handle_exception(e, "get booking by reference", reference)

    def list_user_bookings(
        self,
        user_id: str,
        status: Optional[BookingStatus] = None,
    ) -> ServiceResult[List[BookingResponse]]:
        """A user's bookings, newest first."""
        try:
            bookings = self.repository.list_for_user(user_id, status)
            return ServiceResult.success(
                [BookingResponse.model_validate(b) for b in bookings],
                metadata={"count": len(bookings)},
            )
        except Exception as e:
            return self._handle_exception(e, "list user bookings", user_id)

    # -------------------------------------------------------------------------

    def _get(self, booking_id: UUID) -> Booking:
        booking = self.repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def _get_owned(self, booking_id: UUID, user_id: str) -> Booking:
        booking = self.repository.find_for_user(booking_id, user_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking
