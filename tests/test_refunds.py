"""
Tests — Refund Ledger
=====================
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from app.config.settings import Settings
from app.core.events import EventTypes
from app.core.exceptions import ErrorCode
from app.models.base.enums import PaymentOutcome, PaymentStatus, RefundStatus
from app.services.payment.refund_service import RefundService
from tests.helpers import USER, OTHER_USER, booking_request


@pytest.fixture
def paid_booking(booking_service, hotel):
    booking = booking_service.create(USER, booking_request(hotel.id)).data
    booking_service.apply_payment_outcome(booking.id, PaymentOutcome.PAID)
    return booking


class TestRequest:
    def test_request_is_pending_with_reference(self, refund_service, paid_booking, recorder):
        result = refund_service.request(paid_booking.id, USER, Decimal("500"), "Early checkout")

        assert result.is_success
        refund = result.data
        assert refund.status == RefundStatus.PENDING
        assert refund.request_reference.startswith("REF_")
        assert refund.settlement_reference is None
        assert refund.processed_at is None
        assert recorder.types()[-1] == EventTypes.REFUND_REQUESTED

    def test_amount_bound_enforced(self, refund_service, paid_booking):
        result = refund_service.request(paid_booking.id, USER, Decimal("2000.01"), "Too much")
        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_full_amount_allowed(self, refund_service, paid_booking):
        assert refund_service.request(paid_booking.id, USER, Decimal("2000"), "Full refund").is_success

    def test_bound_covers_earlier_requests(self, refund_service, paid_booking):
        assert refund_service.request(paid_booking.id, USER, Decimal("1500"), "Cancelled night").is_success

        result = refund_service.request(paid_booking.id, USER, Decimal("600"), "Cancelled night again")

        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert Decimal(result.error.details["field_errors"]["amount"][0].split("<= ")[1]) == Decimal("500")
        assert len(refund_service.list_refunds(paid_booking.id, USER).data) == 1

    def test_two_full_refunds_cannot_both_be_approved(self, refund_service, paid_booking):
        first = refund_service.request(paid_booking.id, USER, Decimal("2000"), "Full refund").data
        refund_service.decide(first.id, approve=True)

        assert refund_service.request(paid_booking.id, USER, Decimal("2000"), "Full refund").error_code == (
            ErrorCode.VALIDATION_ERROR
        )

    def test_rejected_request_frees_its_amount(self, refund_service, paid_booking):
        first = refund_service.request(paid_booking.id, USER, Decimal("2000"), "Full refund").data
        refund_service.decide(first.id, approve=False)

        assert refund_service.request(paid_booking.id, USER, Decimal("2000"), "Full refund").is_success

    def test_amount_bound_can_be_advisory(self, session, bus, paid_booking):
        service = RefundService(session, bus, Settings(ENFORCE_REFUND_AMOUNT_BOUND=False))
        assert service.request(paid_booking.id, USER, Decimal("5000"), "Goodwill").is_success

    def test_amount_must_be_positive(self, refund_service, paid_booking):
        result = refund_service.request(paid_booking.id, USER, Decimal("0"), "Nothing")
        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_other_users_booking(self, refund_service, paid_booking):
        result = refund_service.request(paid_booking.id, OTHER_USER, Decimal("100"), "Not mine")
        assert result.error_code == ErrorCode.BOOKING_NOT_FOUND


class TestDecide:
    def test_approve_assigns_settlement_reference(self, refund_service, booking_service, paid_booking, recorder):
        refund_id = refund_service.request(paid_booking.id, USER, Decimal("500"), "Early checkout").data.id

        result = refund_service.decide(refund_id, approve=True, processed_by="admin-1")

        assert result.data.status == RefundStatus.APPROVED
        assert result.data.settlement_reference.startswith("REFUND_")
        assert result.data.processed_at is not None
        assert result.data.processed_by == "admin-1"
        assert recorder.types()[-1] == EventTypes.REFUND_DECIDED
        # Approval alone does not touch the booking's payment status
        booking = booking_service.get_booking(paid_booking.id, USER).data
        assert booking.payment_status == PaymentStatus.PAID

    def test_reject(self, refund_service, paid_booking):
        refund_id = refund_service.request(paid_booking.id, USER, Decimal("500"), "Early checkout").data.id
        result = refund_service.decide(refund_id, approve=False)
        assert result.data.status == RefundStatus.REJECTED
        assert result.data.settlement_reference is None

    def test_decision_is_final(self, refund_service, paid_booking):
        refund_id = refund_service.request(paid_booking.id, USER, Decimal("500"), "Early checkout").data.id
        refund_service.decide(refund_id, approve=False)

        result = refund_service.decide(refund_id, approve=True)

        assert result.error_code == ErrorCode.INVALID_TRANSITION
        assert refund_service.get_refund(refund_id).data.status == RefundStatus.REJECTED

    def test_unknown_refund(self, refund_service):
        assert refund_service.decide(uuid.uuid4(), approve=True).error_code == ErrorCode.REFUND_NOT_FOUND

    def test_explicit_refund_link(self, refund_service, booking_service, paid_booking):
        refund_id = refund_service.request(paid_booking.id, USER, Decimal("2000"), "Cancelled trip").data.id
        refund_service.decide(refund_id, approve=True)

        result = booking_service.mark_refunded(paid_booking.id, changed_by="admin-1")

        assert result.data.payment_status == PaymentStatus.REFUNDED


class TestListing:
    def test_list_newest_first(self, refund_service, paid_booking):
        first = refund_service.request(paid_booking.id, USER, Decimal("100"), "Minibar").data
        second = refund_service.request(paid_booking.id, USER, Decimal("200"), "Late checkout fee").data

        refunds = refund_service.list_refunds(paid_booking.id, USER).data

        assert [r.id for r in refunds] == [second.id, first.id]

    def test_list_is_owner_scoped(self, refund_service, paid_booking):
        result = refund_service.list_refunds(paid_booking.id, OTHER_USER)
        assert result.error_code == ErrorCode.BOOKING_NOT_FOUND
