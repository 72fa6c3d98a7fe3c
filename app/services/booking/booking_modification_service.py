"""
Booking modification service (dates, guest count, room count).

Date and room changes give the old rooms back and take the new ones in
the same transaction, under the hotel's lock. If the new stay cannot be
held, the transaction is rolled back and the original reservation is
untouched.

The booking's ``total_amount`` is not rewritten: the price of the new
stay is recorded on the modification as ``quoted_total_amount``.
"""

from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.config.settings import Settings, settings as default_settings
from app.core.events import BookingEvent, EventBus, EventTypes
from app.core.exceptions import BookingNotFoundError, InvalidTransitionError, NotAvailableError
from app.models.base.enums import ModificationStatus, ModificationType
from app.models.booking.booking import Booking
from app.models.booking.booking_modification import BookingModification
from app.repositories.booking.booking_modification_repository import BookingModificationRepository
from app.repositories.booking.booking_repository import BookingRepository
from app.schemas.booking.booking_modification import ModificationRequest, ModificationResponse
from app.schemas.booking.booking_response import BookingResponse
from app.services.base import BaseService, ServiceResult, track_performance
from app.services.booking.availability_service import AvailabilityService
from app.services.booking.booking_pricing_service import BookingPricingService
from app.services.inventory.inventory_ledger import InventoryLedger
from app.utils.date_utils import now_utc, validate_stay_range

INVENTORY_MODIFICATIONS = frozenset({ModificationType.DATE_CHANGE, ModificationType.ROOM_COUNT})


def _snapshot(booking: Booking) -> Dict[str, Any]:
    return {
        "check_in_date": booking.check_in_date.isoformat(),
        "check_out_date": booking.check_out_date.isoformat(),
        "guests": booking.guests,
        "rooms": booking.rooms,
    }


class BookingModificationService(BaseService[BookingModification, BookingModificationRepository]):
    """
    Apply and list booking modifications.
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
        super().__init__(BookingModificationRepository(db_session), db_session, event_bus)
        self.config = config or default_settings
        self.bookings = BookingRepository(db_session)
        self.ledger = ledger or InventoryLedger(db_session, self.config)
        self.pricing = pricing or BookingPricingService(db_session, self.ledger)
        self.availability = availability or AvailabilityService(
            db_session, self.ledger, self.pricing, self.event_bus
        )

    @track_performance("modify_booking")
    def modify(
        self,
        booking_id: UUID,
        user_id: str,
        request: Union[ModificationRequest, Dict[str, Any]],
    ) -> ServiceResult[BookingResponse]:
        try:
            if not isinstance(request, ModificationRequest):
                request = ModificationRequest.model_validate(request)

            booking = self._get_owned(booking_id, user_id)
            with self.ledger.locks.hold(booking.hotel_id), self.transaction():
                self.bookings.refresh(booking)
                modification = self._apply(booking, user_id, request)
                response = BookingResponse.model_validate(booking)

            self._logger.info(
                f"Booking {booking.booking_reference} modified",
                extra={
                    "booking_id": str(booking.id),
                    "hotel_id": str(booking.hotel_id),
                    "modification_type": request.modification_type.value,
                    "rooms": booking.rooms,
                },
            )
            self._publish(
                BookingEvent(
                    EventTypes.BOOKING_MODIFIED,
                    booking.id,
                    {
                        "modification_id": str(modification.id),
                        "modification_type": request.modification_type.value,
                        "old_data": modification.old_data,
                        "new_data": modification.new_data,
                    },
                )
            )
            return ServiceResult.success(response, message="Booking modified successfully")

        except Exception as e:
            return self._handle_exception(e, "modify booking", booking_id)

    def _apply(self, booking: Booking, user_id: str, request: ModificationRequest) -> BookingModification:
        if not booking.holds_inventory:
            raise InvalidTransitionError(
                booking.booking_status,
                "modified",
                message=f"A {booking.booking_status.value} booking cannot be modified",
            )

        old_data = _snapshot(booking)
        check_in, check_out = booking.check_in_date, booking.check_out_date
        guests, rooms = booking.guests, booking.rooms

        if request.modification_type == ModificationType.DATE_CHANGE:
            check_in, check_out = request.new_check_in_date, request.new_check_out_date
            validate_stay_range(check_in, check_out)
        elif request.modification_type == ModificationType.ROOM_COUNT:
            rooms = request.new_rooms
        elif request.modification_type == ModificationType.GUEST_COUNT:
            guests = request.new_guests

        new_data: Dict[str, Any] = {
            "check_in_date": check_in.isoformat(),
            "check_out_date": check_out.isoformat(),
            "guests": guests,
            "rooms": rooms,
        }

        if request.modification_type in INVENTORY_MODIFICATIONS:
            self.ledger.release(
                booking.hotel_id, booking.check_in_date, booking.check_out_date, booking.rooms
            )
            if not self.availability.is_available(booking.hotel_id, check_in, check_out, rooms):
                raise NotAvailableError(
                    hotel_id=booking.hotel_id,
                    check_in=check_in,
                    check_out=check_out,
                    rooms=rooms,
                )
            self.ledger.reserve(booking.hotel_id, check_in, check_out, rooms)
            quoted = self.pricing.total_price(booking.hotel_id, check_in, check_out, rooms)
            new_data["quoted_total_amount"] = str(quoted)

        booking.check_in_date = check_in
        booking.check_out_date = check_out
        booking.guests = guests
        booking.rooms = rooms

        modification = BookingModification(
            modification_type=request.modification_type,
            old_data=old_data,
            new_data=new_data,
            reason=request.reason,
            status=ModificationStatus.APPROVED,
            requested_by=user_id,
            processed_at=now_utc(),
        )
        booking.modifications.append(modification)
        self.bookings.flush()
        return modification

    def list_modifications(self, booking_id: UUID, user_id: str) -> ServiceResult[List[ModificationResponse]]:
        """Modifications of a booking owned by ``user_id``, newest first."""
        try:
            self._get_owned(booking_id, user_id)
            modifications = self.repository.list_for_booking(booking_id)
            return ServiceResult.success(
                [ModificationResponse.model_validate(m) for m in modifications],
                metadata={"count": len(modifications)},
            )
        except Exception as e:
            return self._handle_exception(e, "list booking modifications", booking_id)

    def _get_owned(self, booking_id: UUID, user_id: str) -> Booking:
        booking = self.bookings.find_for_user(booking_id, user_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking
