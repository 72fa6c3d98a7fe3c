"""
Tests — Inventory Ledger
========================
"""

from __future__ import annotations

import random
import uuid
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.exceptions import (
    ErrorCode,
    InsufficientInventoryError,
    InvalidDateRangeError,
    ValidationError,
)
from app.models.hotel.inventory import InventoryDay
from tests.helpers import JUNE_1, JUNE_2, JUNE_3, JUNE_4, USER, booking_request


def _available(ledger, hotel, night):
    return ledger.get_day(hotel.id, night).available_rooms


class TestDefaultDays:
    def test_get_day_returns_default_without_persisting(self, session, ledger, hotel):
        day = ledger.get_day(hotel.id, JUNE_1)
        assert day.max_rooms == 100
        assert day.available_rooms == 100
        assert day.base_price is None
        assert day.surge_multiplier == Decimal("1.0")
        assert session.scalar(select(func.count()).select_from(InventoryDay)) == 0

    def test_get_days_is_inclusive_and_fills_defaults(self, ledger, hotel):
        ledger.set_capacity(hotel.id, JUNE_2, 10)
        days = ledger.get_days(hotel.id, JUNE_1, JUNE_3)
        assert list(days) == [JUNE_1, JUNE_2, JUNE_3]
        assert days[JUNE_1].max_rooms == 100
        assert days[JUNE_2].max_rooms == 10


class TestReserveRelease:
    def test_reserve_skips_checkout_night(self, session, ledger, hotel):
        nights = ledger.reserve(hotel.id, JUNE_1, JUNE_3, 3)
        session.commit()
        assert nights == [JUNE_1, JUNE_2]
        assert _available(ledger, hotel, JUNE_1) == 97
        assert _available(ledger, hotel, JUNE_2) == 97
        assert _available(ledger, hotel, JUNE_3) == 100

    def test_release_restores_reserve(self, session, ledger, hotel):
        ledger.set_capacity(hotel.id, JUNE_1, 10)
        before = {n: _available(ledger, hotel, n) for n in (JUNE_1, JUNE_2)}
        ledger.reserve(hotel.id, JUNE_1, JUNE_3, 4)
        ledger.release(hotel.id, JUNE_1, JUNE_3, 4)
        session.commit()
        assert {n: _available(ledger, hotel, n) for n in (JUNE_1, JUNE_2)} == before

    def test_reserve_is_all_or_nothing(self, session, ledger, hotel):
        ledger.set_capacity(hotel.id, JUNE_2, 2)
        with pytest.raises(InsufficientInventoryError) as exc:
            ledger.reserve(hotel.id, JUNE_1, JUNE_4, 3)
        assert exc.value.details["date"] == "2025-06-02"
        assert exc.value.details["available"] == 2
        assert _available(ledger, hotel, JUNE_1) == 100
        assert _available(ledger, hotel, JUNE_2) == 2
        assert _available(ledger, hotel, JUNE_3) == 100

    def test_release_is_capped_at_capacity(self, ledger, hotel):
        ledger.set_capacity(hotel.id, JUNE_1, 10)
        ledger.release(hotel.id, JUNE_1, JUNE_2, 3)
        day = ledger.get_day(hotel.id, JUNE_1)
        assert day.available_rooms == 10
        assert day.max_rooms == 10

    def test_zero_night_range_rejected(self, ledger, hotel):
        with pytest.raises(InvalidDateRangeError):
            ledger.reserve(hotel.id, JUNE_1, JUNE_1, 1)
        with pytest.raises(InvalidDateRangeError):
            ledger.release(hotel.id, JUNE_2, JUNE_1, 1)

    def test_room_count_must_be_positive(self, ledger, hotel):
        with pytest.raises(ValidationError):
            ledger.reserve(hotel.id, JUNE_1, JUNE_2, 0)

    def test_bounds_hold_after_random_sequence(self, session, ledger, hotel):
        rng = random.Random(7)
        for night in (JUNE_1, JUNE_2, JUNE_3):
            ledger.set_capacity(hotel.id, night, 5)
        held = []
        for _ in range(60):
            check_in = rng.choice([JUNE_1, JUNE_2, JUNE_3])
            check_out = rng.choice([n for n in (JUNE_2, JUNE_3, JUNE_4) if n > check_in])
            rooms = rng.randint(1, 3)
            if held and rng.random() < 0.4:
                ledger.release(*held.pop(rng.randrange(len(held))))
            else:
                try:
                    ledger.reserve(hotel.id, check_in, check_out, rooms)
                    held.append((hotel.id, check_in, check_out, rooms))
                except InsufficientInventoryError:
                    pass
            for night in (JUNE_1, JUNE_2, JUNE_3):
                day = ledger.get_day(hotel.id, night)
                assert 0 <= day.available_rooms <= day.max_rooms


class TestAdministration:
    def test_set_capacity_keeps_committed_rooms(self, ledger, hotel):
        ledger.reserve(hotel.id, JUNE_1, JUNE_2, 5)
        day = ledger.set_capacity(hotel.id, JUNE_1, 20)
        assert day.max_rooms == 20
        assert day.available_rooms == 15
        assert day.committed_rooms == 5

    def test_set_capacity_below_committed_rejected(self, ledger, hotel):
        ledger.reserve(hotel.id, JUNE_1, JUNE_2, 5)
        with pytest.raises(InsufficientInventoryError):
            ledger.set_capacity(hotel.id, JUNE_1, 3)

    def test_set_capacity_negative_rejected(self, ledger, hotel):
        with pytest.raises(ValidationError):
            ledger.set_capacity(hotel.id, JUNE_1, -1)

    def test_update_day_rejects_out_of_range_values(self, ledger, hotel):
        with pytest.raises(ValidationError) as exc:
            ledger.update_day(hotel.id, JUNE_1, available_rooms=101, surge_multiplier=Decimal("-1"))
        errors = exc.value.details["field_errors"]
        assert set(errors) == {"available_rooms", "surge_multiplier"}

    def test_update_day_sets_values(self, ledger, hotel):
        day = ledger.update_day(
            hotel.id,
            JUNE_1,
            available_rooms=40,
            surge_multiplier=Decimal("1.25"),
            base_price=Decimal("1200"),
        )
        assert day.available_rooms == 40
        assert day.surge_multiplier == Decimal("1.25")
        assert day.base_price == Decimal("1200")

    def test_update_day_cannot_free_rooms_held_by_bookings(self, ledger, booking_service, session, hotel):
        ledger.set_capacity(hotel.id, JUNE_1, 2)
        session.commit()
        assert booking_service.create(USER, booking_request(hotel.id, JUNE_1, JUNE_2, rooms=2)).is_success

        with pytest.raises(ValidationError) as exc:
            ledger.update_day(hotel.id, JUNE_1, available_rooms=2)
        session.rollback()

        assert exc.value.details["field_errors"]["available_rooms"] == ["must be between 0 and 0"]
        second = booking_service.create(USER, booking_request(hotel.id, JUNE_1, JUNE_2, rooms=2))
        assert second.error_code == ErrorCode.NOT_AVAILABLE

    def test_update_day_can_free_rooms_not_held_by_bookings(self, ledger, booking_service, session, hotel):
        ledger.set_capacity(hotel.id, JUNE_1, 4)
        session.commit()
        booking_service.create(USER, booking_request(hotel.id, JUNE_1, JUNE_2, rooms=1))
        ledger.update_day(hotel.id, JUNE_1, available_rooms=0)

        day = ledger.update_day(hotel.id, JUNE_1, available_rooms=3)

        assert day.available_rooms == 3

    @pytest.mark.parametrize("field, value", [
        ("surge_multiplier", Decimal("1.123456")),
        ("base_price", Decimal("999.995")),
    ])
    def test_update_day_rejects_values_the_column_would_round(self, ledger, hotel, field, value):
        with pytest.raises(ValidationError) as exc:
            ledger.update_day(hotel.id, JUNE_1, **{field: value})
        assert exc.value.details["field_errors"][field] == [
            "at most 4 decimal places" if field == "surge_multiplier" else "at most 2 decimal places"
        ]

    def test_surge_precision_survives_round_trip(self, ledger, pricing, session, hotel):
        ledger.set_surge(hotel.id, JUNE_1, Decimal("1.1235"))
        session.commit()
        session.expire_all()
        assert pricing.nightly_price(hotel.id, JUNE_1) == Decimal("1123.5")
        with pytest.raises(ValidationError):
            ledger.set_surge(hotel.id, JUNE_1, Decimal("1.123456"))

    def test_set_base_price_rejects_sub_cent_amounts(self, ledger, hotel):
        with pytest.raises(ValidationError):
            ledger.set_base_price(hotel.id, JUNE_1, Decimal("10.001"))

    def test_set_base_price_can_clear_override(self, ledger, hotel):
        ledger.set_base_price(hotel.id, JUNE_1, Decimal("900"))
        assert ledger.get_day(hotel.id, JUNE_1).base_price == Decimal("900")
        ledger.set_base_price(hotel.id, JUNE_1, None)
        assert ledger.get_day(hotel.id, JUNE_1).base_price is None


class TestInventoryService:
    def test_set_surge_returns_day(self, inventory_service, hotel):
        result = inventory_service.set_surge(hotel.id, JUNE_1, Decimal("1.5"))
        assert result.is_success
        assert result.data.surge_multiplier == Decimal("1.5")
        assert result.data.date == JUNE_1

    def test_unknown_hotel(self, inventory_service):
        result = inventory_service.set_capacity(uuid.uuid4(), JUNE_1, 10)
        assert not result.is_success
        assert result.error_code == ErrorCode.HOTEL_NOT_FOUND

    def test_invalid_update_is_rolled_back(self, inventory_service, ledger, hotel):
        result = inventory_service.update_day(hotel.id, JUNE_1, available_rooms=500)
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert ledger.repository.find_day(hotel.id, JUNE_1) is None

    def test_get_day_default(self, inventory_service, hotel):
        result = inventory_service.get_day(hotel.id, JUNE_3)
        assert result.data.available_rooms == 100
