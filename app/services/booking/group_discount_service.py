# app/services/booking/group_discount_service.py
"""
Group booking requests and advisory group quotes.

Quotes use the hotel's static nightly rate rather than the live,
date-sensitive price: they are long-lead estimates and never touch the
inventory ledger.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.config.settings import Settings, settings as default_settings
from app.core.events import EventBus, EventTypes, GroupBookingEvent
from app.core.exceptions import GroupBookingNotFoundError, HotelNotFoundError, ValidationError
from app.models.base.enums import GroupBookingCategory, GroupBookingStatus
from app.models.booking.group_booking import GroupBookingRequest
from app.repositories.booking.group_booking_repository import GroupBookingRepository
from app.repositories.hotel.hotel_repository import HotelRepository
from app.schemas.booking.group_booking import (
    AdditionalServices,
    GroupBookingCreate,
    GroupBookingResponse,
    GroupQuote,
    GroupQuoteRequest,
)
from app.services.base import BaseService, ServiceResult, track_performance
from app.utils.date_utils import now_utc, validate_stay_range

# (minimum group size, discount rate); first match wins
GROUP_SIZE_DISCOUNTS = (
    (50, Decimal("0.20")),
    (20, Decimal("0.15")),
    (10, Decimal("0.10")),
)
BUSINESS_CATEGORY_BONUS = Decimal("0.05")
BUSINESS_CATEGORIES = frozenset({GroupBookingCategory.CORPORATE, GroupBookingCategory.CONFERENCE})

MEETING_ROOM_PER_NIGHT = Decimal("5000")
CATERING_WEDDING = Decimal("2000")
CATERING_DEFAULT = Decimal("1000")
WEDDING_DECORATIONS = Decimal("15000")
TRANSPORTATION = Decimal("8000")
TRANSPORTATION_MIN_GROUP = 20


def group_discount_rate(group_size: int, category: GroupBookingCategory) -> Decimal:
    """Single rate for the group's size bracket, plus the business bonus."""
    rate = Decimal("0")
    for min_size, bracket_rate in GROUP_SIZE_DISCOUNTS:
        if group_size >= min_size:
            rate = bracket_rate
            break
    if GroupBookingCategory(category) in BUSINESS_CATEGORIES:
        rate += BUSINESS_CATEGORY_BONUS
    return rate


def additional_services(group_size: int, category: GroupBookingCategory, nights: int) -> AdditionalServices:
    """Flat service estimates; catering is one amount, not multiplied by guests."""
    category = GroupBookingCategory(category)
    return AdditionalServices(
        meeting_room=MEETING_ROOM_PER_NIGHT * nights if category in BUSINESS_CATEGORIES else Decimal("0"),
        catering_per_person=CATERING_WEDDING if category == GroupBookingCategory.WEDDING else CATERING_DEFAULT,
        decorations=WEDDING_DECORATIONS if category == GroupBookingCategory.WEDDING else Decimal("0"),
        transportation=TRANSPORTATION if group_size > TRANSPORTATION_MIN_GROUP else Decimal("0"),
    )


def calculate_group_quote(
    hotel_id: UUID,
    hotel_name: str,
    price_per_night: Decimal,
    group_size: int,
    category: GroupBookingCategory,
    check_in: date,
    check_out: date,
    rooms_required: int,
    now: Optional[datetime] = None,
    validity_days: int = 7,
) -> GroupQuote:
    """
    Price a group stay.

    Raises:
        InvalidDateRangeError: if the stay has no nights
        ValidationError: if group size or rooms are below 1
    """
    nights = validate_stay_range(check_in, check_out)
    field_errors = {}
    if group_size < 1:
        field_errors["group_size"] = ["must be >= 1"]
    if rooms_required < 1:
        field_errors["rooms_required"] = ["must be >= 1"]
    if field_errors:
        raise ValidationError("Invalid group quote request", field_errors)

    category = GroupBookingCategory(category)
    base_price = Decimal(price_per_night) * rooms_required * nights
    rate = group_discount_rate(group_size, category)
    discount_amount = base_price * rate
    rooms_total = base_price - discount_amount

    services = additional_services(group_size, category, nights)
    services_total = services.total

    return GroupQuote(
        hotel_id=hotel_id,
        hotel_name=hotel_name,
        group_size=group_size,
        category=category,
        nights=nights,
        rooms_required=rooms_required,
        base_price=base_price,
        discount_rate=rate,
        discount_percent=int((rate * 100).to_integral_value()),
        discount_amount=discount_amount,
        rooms_total=rooms_total,
        additional_services=services,
        total_additional_services=services_total,
        grand_total=rooms_total + services_total,
        valid_until=(now or now_utc()) + timedelta(days=validity_days),
    )


class GroupBookingService(BaseService[GroupBookingRequest, GroupBookingRepository]):
    """
    Group booking requests and their quotes.

    A confirmed group request is an administrative outcome; it does not
    reserve inventory by itself.
    """

    def __init__(
        self,
        db_session: Session,
        event_bus: Optional[EventBus] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(GroupBookingRepository(db_session), db_session, event_bus)
        self.hotels = HotelRepository(db_session)
        self.config = config or default_settings

    def generate_quote(self, request: Union[GroupQuoteRequest, dict]) -> ServiceResult[GroupQuote]:
        try:
            if not isinstance(request, GroupQuoteRequest):
                request = GroupQuoteRequest.model_validate(request)

            hotel = self.hotels.find_by_id(request.hotel_id)
            if hotel is None:
                raise HotelNotFoundError(request.hotel_id)

            quote = calculate_group_quote(
                hotel_id=hotel.id,
                hotel_name=hotel.name,
                price_per_night=hotel.price_per_night,
                group_size=request.group_size,
                category=request.category,
                check_in=request.check_in_date,
                check_out=request.check_out_date,
                rooms_required=request.rooms_required,
                validity_days=self.config.GROUP_QUOTE_VALIDITY_DAYS,
            )
            return ServiceResult.success(quote)
        except Exception as e:
            return self._handle_exception(e, "generate group quote")

    @track_performance("create_group_booking_request")
    def create_request(
        self,
        organizer_id: str,
        request: Union[GroupBookingCreate, dict],
    ) -> ServiceResult[GroupBookingResponse]:
        """
        File a group booking request in ``pending`` status.

        The hotel must exist and be active.
        """
        try:
            if not isinstance(request, GroupBookingCreate):
                request = GroupBookingCreate.model_validate(request)

            if request.group_size < self.config.GROUP_MIN_SIZE:
                raise ValidationError(
                    f"Group bookings require at least {self.config.GROUP_MIN_SIZE} guests",
                    {"group_size": [f"must be >= {self.config.GROUP_MIN_SIZE}"]},
                )
            validate_stay_range(request.check_in_date, request.check_out_date)

            if self.hotels.find_active_by_id(request.hotel_id) is None:
                raise HotelNotFoundError(request.hotel_id)

            with self.transaction():
                group_request = self.repository.create(
                    GroupBookingRequest(
                        organizer_id=organizer_id,
                        status=GroupBookingStatus.PENDING,
                        **request.model_dump(),
                    )
                )
                response = GroupBookingResponse.model_validate(group_request)

            self._log_operation(
                "create group booking request",
                group_request.id,
                {"hotel_id": str(request.hotel_id), "group_size": request.group_size},
            )
            self._publish(
                GroupBookingEvent(
                    EventTypes.GROUP_BOOKING_REQUESTED,
                    group_request.id,
                    {"hotel_id": str(request.hotel_id), "organizer_id": organizer_id},
                )
            )
            return ServiceResult.success(response, message="Group booking request submitted")
        except Exception as e:
            return self._handle_exception(e, "create group booking request")

    def update_status(
        self,
        request_id: UUID,
        status: GroupBookingStatus,
        admin_notes: Optional[str] = None,
    ) -> ServiceResult[GroupBookingResponse]:
        try:
            with self.transaction():
                group_request = self.repository.find_by_id(request_id)
                if group_request is None:
                    raise GroupBookingNotFoundError(request_id)
                previous = group_request.change_status(GroupBookingStatus(status))
                if admin_notes is not None:
                    group_request.admin_notes = admin_notes
                self.repository.flush()
                response = GroupBookingResponse.model_validate(group_request)

            self._log_operation(
                "update group booking status",
                request_id,
                {"from_status": previous.value, "to_status": response.status.value},
            )
            self._publish(
                GroupBookingEvent(
                    EventTypes.GROUP_BOOKING_STATUS_CHANGED,
                    request_id,
                    {"from_status": previous.value, "to_status": response.status.value},
                )
            )
            return ServiceResult.success(response)
        except Exception as e:
            return self._handle_exception(e, "update group booking status", request_id)

    def get_request(self, request_id: UUID) -> ServiceResult[GroupBookingResponse]:
        try:
            group_request = self.repository.find_by_id(request_id)
            if group_request is None:
                raise GroupBookingNotFoundError(request_id)
            return ServiceResult.success(GroupBookingResponse.model_validate(group_request))
        except Exception as e:
            return self._handle_exception(e, "get group booking request", request_id)

    def list_requests(self, organizer_id: Optional[str] = None) -> ServiceResult[List[GroupBookingResponse]]:
        """One organizer's requests, or every request when organizer_id is None."""
        try:
            requests = self.repository.list_requests(organizer_id)
            return ServiceResult.success(
                [GroupBookingResponse.model_validate(r) for r in requests],
                metadata={"count": len(requests)},
            )
        except Exception as e:
            return self._handle_exception(e, "list group booking requests")
