"""
Tests — Booking modifications
=============================
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from app.core.events import EventTypes
from app.core.exceptions import ErrorCode
from app.models.base.enums import BookingStatus, ModificationType
from tests.helpers import JUNE_1, JUNE_2, JUNE_3, JUNE_4, JUNE_5, OTHER_USER, USER, booking_request


def _available(ledger, hotel, night):
    return ledger.get_day(hotel.id, night).available_rooms


@pytest.fixture
def booking(booking_service, hotel):
    return booking_service.create(USER, booking_request(hotel.id, JUNE_1, JUNE_3, rooms=1, guests=2)).data


def _date_change(check_in, check_out, reason="New flights"):
    return {
        "modification_type": "date_change",
        "new_check_in_date": check_in,
        "new_check_out_date": check_out,
        "reason": reason,
    }


class TestDateChange:
    def test_moves_reservation(self, modification_service, ledger, hotel, booking, recorder):
        result = modification_service.modify(booking.id, USER, _date_change(JUNE_3, JUNE_5))

        assert result.is_success
        assert result.data.check_in_date == JUNE_3
        assert result.data.check_out_date == JUNE_5
        assert [_available(ledger, hotel, n) for n in (JUNE_1, JUNE_2, JUNE_3, JUNE_4)] == [100, 100, 99, 99]
        assert recorder.types()[-1] == EventTypes.BOOKING_MODIFIED

    def test_total_is_not_repriced(self, modification_service, ledger, session, hotel, booking):
        ledger.set_surge(hotel.id, JUNE_4, Decimal("1.5"))
        session.commit()

        result = modification_service.modify(booking.id, USER, _date_change(JUNE_3, JUNE_5))

        assert result.data.total_amount == Decimal("2000")
        modification = modification_service.list_modifications(booking.id, USER).data[0]
        assert Decimal(modification.new_data["quoted_total_amount"]) == Decimal("2500")
        assert modification.old_data["check_in_date"] == "2025-06-01"
        assert modification.new_data["check_in_date"] == "2025-06-03"

    def test_overlapping_change_reuses_released_rooms(self, modification_service, ledger, session, hotel, booking_service):
        for night in (JUNE_1, JUNE_2, JUNE_3):
            ledger.set_capacity(hotel.id, night, 1)
        session.commit()
        booking = booking_service.create(USER, booking_request(hotel.id, JUNE_1, JUNE_3)).data

        result = modification_service.modify(booking.id, USER, _date_change(JUNE_2, JUNE_4))

        assert result.is_success
        assert [_available(ledger, hotel, n) for n in (JUNE_1, JUNE_2, JUNE_3)] == [1, 0, 0]

    def test_unavailable_change_keeps_original_reservation(self, modification_service, ledger, session, hotel, booking):
        ledger.set_capacity(hotel.id, JUNE_4, 0)
        session.commit()

        result = modification_service.modify(booking.id, USER, _date_change(JUNE_3, JUNE_5))

        assert result.error_code == ErrorCode.NOT_AVAILABLE
        assert _available(ledger, hotel, JUNE_1) == 99
        assert _available(ledger, hotel, JUNE_2) == 99
        assert _available(ledger, hotel, JUNE_3) == 100
        unchanged = modification_service.list_modifications(booking.id, USER)
        assert unchanged.data == []

    def test_invalid_new_range(self, modification_service, booking):
        result = modification_service.modify(booking.id, USER, _date_change(JUNE_4, JUNE_4))
        assert result.error_code == ErrorCode.INVALID_DATE_RANGE

    def test_missing_dates_rejected(self, modification_service, booking):
        result = modification_service.modify(booking.id, USER, {"modification_type": "date_change"})
        assert result.error_code == ErrorCode.VALIDATION_ERROR


class TestRoomAndGuestCount:
    def test_room_count_change(self, modification_service, ledger, hotel, booking):
        grown = modification_service.modify(
            booking.id, USER, {"modification_type": "room_count", "new_rooms": 3}
        )
        assert grown.data.rooms == 3
        assert _available(ledger, hotel, JUNE_1) == 97

        shrunk = modification_service.modify(
            booking.id, USER, {"modification_type": "room_count", "new_rooms": 1}
        )
        assert shrunk.data.rooms == 1
        assert _available(ledger, hotel, JUNE_2) == 99

    def test_guest_count_has_no_inventory_effect(self, modification_service, ledger, hotel, booking):
        result = modification_service.modify(
            booking.id, USER, {"modification_type": "guest_count", "new_guests": 4}
        )
        assert result.data.guests == 4
        assert _available(ledger, hotel, JUNE_1) == 99

    def test_guest_count_must_be_positive(self, modification_service, booking):
        result = modification_service.modify(
            booking.id, USER, {"modification_type": "guest_count", "new_guests": 0}
        )
        assert result.error_code == ErrorCode.VALIDATION_ERROR


class TestModificationRules:
    def test_cancellation_is_not_a_modification(self, modification_service, booking):
        result = modification_service.modify(booking.id, USER, {"modification_type": "cancellation"})
        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_cancelled_booking_cannot_be_modified(self, modification_service, booking_service, booking):
        booking_service.cancel(booking.id, USER)
        result = modification_service.modify(booking.id, USER, _date_change(JUNE_3, JUNE_5))
        assert result.error_code == ErrorCode.INVALID_TRANSITION
        assert booking_service.get_booking(booking.id, USER).data.booking_status == BookingStatus.CANCELLED

    def test_other_user_gets_not_found(self, modification_service, booking):
        result = modification_service.modify(booking.id, OTHER_USER, _date_change(JUNE_3, JUNE_5))
        assert result.error_code == ErrorCode.BOOKING_NOT_FOUND
        assert modification_service.list_modifications(booking.id, OTHER_USER).error_code == ErrorCode.BOOKING_NOT_FOUND

    def test_history_is_newest_first(self, modification_service, booking):
        modification_service.modify(booking.id, USER, {"modification_type": "guest_count", "new_guests": 3})
        modification_service.modify(booking.id, USER, {"modification_type": "room_count", "new_rooms": 2})

        history = modification_service.list_modifications(booking.id, USER).data
        assert [m.modification_type for m in history] == [
            ModificationType.ROOM_COUNT,
            ModificationType.GUEST_COUNT,
        ]
        assert history[1].old_data["guests"] == 2
        assert history[1].new_data["guests"] == 3
