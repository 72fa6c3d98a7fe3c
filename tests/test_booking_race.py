"""
Tests — Concurrent bookings for the last room
=============================================
"""

from __future__ import annotations

import threading

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import ErrorCode, InsufficientInventoryError
from app.models.booking.booking import Booking
from app.services.booking.booking_service import BookingService
from app.services.inventory.inventory_ledger import InventoryLedger
from app.services.inventory.locks import HotelLockRegistry
from tests.helpers import JUNE_1, JUNE_2, USER, booking_request, make_hotel


@pytest.fixture
def file_sessions(file_engine):
    return sessionmaker(bind=file_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def last_room_hotel(file_sessions, config):
    session = file_sessions()
    hotel = make_hotel(session)
    InventoryLedger(session, config, HotelLockRegistry()).set_capacity(hotel.id, JUNE_1, 1)
    session.commit()
    session.close()
    return hotel


def _run_concurrently(worker, count=2):
    barrier = threading.Barrier(count)
    results = [None] * count

    def run(index):
        barrier.wait()
        results[index] = worker(index)

    threads = [threading.Thread(target=run, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return results


def _available_rooms(file_sessions, config, hotel):
    session = file_sessions()
    try:
        return InventoryLedger(session, config).get_day(hotel.id, JUNE_1).available_rooms
    finally:
        session.close()


class TestDoubleBookingRace:
    def test_exactly_one_create_wins(self, file_sessions, config, bus, last_room_hotel):
        locks = HotelLockRegistry()

        def create(index):
            session = file_sessions()
            try:
                service = BookingService(
                    session,
                    ledger=InventoryLedger(session, config, locks),
                    event_bus=bus,
                    config=config,
                )
                return service.create(f"{USER}-{index}", booking_request(last_room_hotel.id, JUNE_1, JUNE_2))
            finally:
                session.close()

        results = _run_concurrently(create)

        winners = [r for r in results if r.is_success]
        losers = [r for r in results if not r.is_success]
        assert len(winners) == 1
        assert len(losers) == 1
        assert losers[0].error_code in (ErrorCode.NOT_AVAILABLE, ErrorCode.INSUFFICIENT_INVENTORY)
        assert _available_rooms(file_sessions, config, last_room_hotel) == 0

        session = file_sessions()
        assert session.scalar(select(func.count()).select_from(Booking)) == 1
        session.close()

    def test_ledger_compare_and_swap_without_shared_lock(self, file_sessions, config, last_room_hotel):
        def reserve(index):
            session = file_sessions()
            # Separate registries: only the conditional update protects the row
            ledger = InventoryLedger(session, config, HotelLockRegistry())
            try:
                ledger.reserve(last_room_hotel.id, JUNE_1, JUNE_2, 1)
                session.commit()
                return "reserved"
            except InsufficientInventoryError:
                session.rollback()
                return "insufficient"
            finally:
                session.close()

        results = _run_concurrently(reserve)

        assert sorted(results) == ["insufficient", "reserved"]
        assert _available_rooms(file_sessions, config, last_room_hotel) == 0
