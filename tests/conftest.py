"""
Shared fixtures: SQLite engines and sessions, seeded hotels, services
wired to a recording event bus.
"""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import init_db
from app.config.settings import Settings
from app.core.events import EventBus
from app.services.booking.availability_service import AvailabilityService
from app.services.booking.booking_modification_service import BookingModificationService
from app.services.booking.booking_pricing_service import BookingPricingService
from app.services.booking.booking_service import BookingService
from app.services.booking.group_discount_service import GroupBookingService
from app.services.inventory.inventory_ledger import InventoryLedger
from app.services.inventory.inventory_service import InventoryService
from app.services.inventory.locks import HotelLockRegistry
from app.services.payment.refund_service import RefundService
from tests.helpers import EventRecorder, make_hotel


@pytest.fixture
def config():
    return Settings(INVENTORY_DEFAULT_MAX_ROOMS=100, ENFORCE_REFUND_AMOUNT_BOUND=True)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def file_engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def recorder(bus):
    return EventRecorder(bus)


@pytest.fixture
def locks():
    return HotelLockRegistry()


@pytest.fixture
def hotel(session):
    return make_hotel(session)


@pytest.fixture
def inactive_hotel(session):
    return make_hotel(session, name="Closed Lodge", is_active=False)


@pytest.fixture
def ledger(session, config, locks):
    return InventoryLedger(session, config, locks)


@pytest.fixture
def pricing(session, ledger):
    return BookingPricingService(session, ledger)


@pytest.fixture
def availability(session, ledger, pricing, bus):
    return AvailabilityService(session, ledger, pricing, bus)


@pytest.fixture
def inventory_service(session, ledger, bus):
    return InventoryService(session, ledger, bus)


@pytest.fixture
def booking_service(session, ledger, pricing, availability, bus, config):
    return BookingService(session, ledger, pricing, availability, bus, config)


@pytest.fixture
def modification_service(session, ledger, pricing, availability, bus, config):
    return BookingModificationService(session, ledger, pricing, availability, bus, config)


@pytest.fixture
def refund_service(session, bus, config, locks):
    return RefundService(session, bus, config, locks)


@pytest.fixture
def group_service(session, bus, config):
    return GroupBookingService(session, bus, config)
