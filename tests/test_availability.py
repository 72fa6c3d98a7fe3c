"""
Tests — Availability Checker and calendar
=========================================
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from app.core.exceptions import ErrorCode, InvalidDateRangeError, ResourceNotFoundError
from app.repositories.hotel.hotel_repository import HotelRepository
from tests.helpers import JUNE_1, JUNE_2, JUNE_3, JUNE_4


class TestIsAvailable:
    def test_fresh_hotel_is_available(self, availability, hotel):
        assert availability.is_available(hotel.id, JUNE_1, JUNE_3, 5) is True

    def test_zero_night_range_fails_fast(self, availability, hotel):
        with pytest.raises(InvalidDateRangeError):
            availability.is_available(hotel.id, JUNE_2, JUNE_2, 1)

    def test_inactive_hotel_is_never_available(self, availability, inactive_hotel):
        assert availability.is_available(inactive_hotel.id, JUNE_1, JUNE_2, 1) is False

    def test_unknown_hotel_is_not_available(self, availability):
        assert availability.is_available(uuid.uuid4(), JUNE_1, JUNE_2, 1) is False

    def test_every_night_must_have_rooms(self, availability, ledger, hotel):
        ledger.set_capacity(hotel.id, JUNE_2, 2)
        assert availability.is_available(hotel.id, JUNE_1, JUNE_4, 2) is True
        assert availability.is_available(hotel.id, JUNE_1, JUNE_4, 3) is False

    def test_checkout_night_is_not_required(self, availability, ledger, hotel):
        ledger.set_capacity(hotel.id, JUNE_3, 0)
        assert availability.is_available(hotel.id, JUNE_1, JUNE_3, 1) is True
        assert availability.is_available(hotel.id, JUNE_1, JUNE_4, 1) is False

    def test_does_not_reserve(self, availability, ledger, hotel):
        availability.is_available(hotel.id, JUNE_1, JUNE_3, 10)
        assert ledger.get_day(hotel.id, JUNE_1).available_rooms == 100


class TestCheck:
    def test_quote_includes_price(self, availability, hotel):
        result = availability.check(hotel.id, JUNE_1, JUNE_3, 2)
        assert result.is_success
        assert result.data.available is True
        assert result.data.total_price == Decimal("4000")

    def test_unknown_hotel_has_no_price(self, availability):
        result = availability.check(uuid.uuid4(), JUNE_1, JUNE_3, 1)
        assert result.data.available is False
        assert result.data.total_price is None

    def test_invalid_range_is_reported(self, availability, hotel):
        result = availability.check(hotel.id, JUNE_3, JUNE_1, 1)
        assert not result.is_success
        assert result.error_code == ErrorCode.INVALID_DATE_RANGE


class TestCalendar:
    def test_calendar_is_inclusive_with_defaults(self, availability, ledger, hotel):
        ledger.set_surge(hotel.id, JUNE_2, Decimal("2"))
        ledger.update_day(hotel.id, JUNE_3, available_rooms=0)

        result = availability.get_calendar(hotel.id, JUNE_1, JUNE_3)

        calendar = result.data.calendar
        assert [day.date for day in calendar] == [JUNE_1, JUNE_2, JUNE_3]
        assert calendar[0].base_price == Decimal("1000")
        assert calendar[0].max_rooms == 100
        assert calendar[1].surge_multiplier == Decimal("2")
        assert calendar[2].is_available is False
        assert calendar[0].is_available is True

    def test_reversed_range(self, availability, hotel):
        result = availability.get_calendar(hotel.id, JUNE_3, JUNE_1)
        assert result.error_code == ErrorCode.INVALID_DATE_RANGE

    def test_unknown_hotel(self, availability):
        result = availability.get_calendar(uuid.uuid4(), JUNE_1, JUNE_2)
        assert result.error_code == ErrorCode.HOTEL_NOT_FOUND


class TestHotelCatalog:
    def test_list_active_skips_closed_hotels(self, session, hotel, inactive_hotel):
        repo = HotelRepository(session)
        assert [h.id for h in repo.list_active()] == [hotel.id]
        assert repo.list_active(city="Pune") == []

    def test_get_by_id_raises_for_unknown_hotel(self, session):
        with pytest.raises(ResourceNotFoundError):
            HotelRepository(session).get_by_id(uuid.uuid4())
