# tests/test_order_service.py
"""
Order Service Tests - Unit Tests for the Order Lifecycle

This module contains unit tests for order creation, status and payment
updates, status-transition anomalies, queries with filtering and pagination,
customer tracking, deletion, and concurrent order creation.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- printlite.application.order_service (OrderService, transition_anomaly)
- printlite.adapters.persistence.memory_store (InMemoryOrderRepository)
- printlite.domain.models (order models and enums)
- pytest (testing framework)
"""
import logging
import threading
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest  # Testing framework for writing and running tests

from printlite.adapters.persistence.memory_store import InMemoryOrderRepository
from printlite.application.order_service import OrderService, transition_anomaly
from printlite.application.pricing import PricingEngine
from printlite.domain.errors import InvalidTransitionError, OrderNotFoundError, ValidationError
from printlite.domain.models import (
    Binding,
    ColorMode,
    CustomerInfo,
    DocumentSelection,
    FileDetail,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    PrintSettings,
)

SERVICE_LOGGER = "printlite.application.order_service"
START = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns a fixed time that only moves when told to (or on every call with ``step``)."""

    def __init__(self, start=START, step=timedelta(0)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(step=timedelta(minutes=1))


@pytest.fixture
def service(clock):
    return OrderService(InMemoryOrderRepository(), pricing=PricingEngine(), clock=clock, enforce_transitions=False)


def make_customer(**overrides):
    data = dict(
        name="Asha Rao",
        email="asha@example.com",
        phone="+91 98765-43210",
        delivery_address="12 MG Road, Bengaluru 560001",
    )
    data.update(overrides)
    return CustomerInfo(**data)


def make_document(pages=10, page_range=None):
    return DocumentSelection.from_files([FileDetail(name="thesis.pdf", pages=pages, size=204800)], page_range=page_range)


def place(service, customer=None, settings=None, document=None, payment="upi", **kwargs):
    return service.create_order(
        customer or make_customer(),
        settings or PrintSettings(color_mode=ColorMode.COLOR, copies=2),
        document or make_document(),
        payment,
        **kwargs,
    )


class TestCreateOrder:
    def test_new_order_is_pending_and_priced_with_tax(self, service):
        order = place(service)

        assert order.id == 1
        assert order.status is OrderStatus.PENDING
        assert order.payment_status is PaymentStatus.PENDING
        assert order.payment_method is PaymentMethod.UPI
        assert order.price.subtotal == Decimal("80.00")
        assert order.price.tax_amount == Decimal("14.40")
        assert order.price.total == Decimal("94.40")
        assert order.created_at == order.updated_at

    def test_created_order_can_be_fetched(self, service):
        order = place(service, special_instructions="Please deliver after 5pm")
        fetched = service.get_order(order.id)

        assert fetched == order
        assert fetched.special_instructions == "Please deliver after 5pm"
        assert fetched.customer.name == "Asha Rao"

    def test_page_range_limits_billed_pages(self, service):
        order = place(service, settings=PrintSettings(), document=make_document(pages=10, page_range="1-4"))
        assert order.price.page_count == 4
        assert order.document.total_pages == 10
        assert order.document.selected_page_count == 4
        assert order.price.subtotal == Decimal("6.00")

    def test_ids_are_sequential(self, service):
        ids = [place(service).id for _ in range(3)]
        assert ids == [1, 2, 3]

    def test_user_id_stored_as_string(self, service):
        order = place(service, user_id=42)
        assert order.user_id == "42"

    def test_free_text_is_sanitized(self, service):
        order = place(service, special_instructions="<b>urgent</b>")
        assert "<" not in order.special_instructions
        assert ">" not in order.special_instructions

    def test_blank_instructions_stored_as_none(self, service):
        assert place(service, special_instructions="   ").special_instructions is None

    @pytest.mark.parametrize("overrides, field", [
        ({"name": "  "}, "customerName"),
        ({"email": "not-an-email"}, "email"),
        ({"email": ""}, "email"),
        ({"phone": "call me"}, "phone"),
        ({"phone": "12"}, "phone"),
        ({"delivery_address": ""}, "deliveryAddress"),
    ])
    def test_invalid_customer_details_rejected(self, service, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            place(service, customer=make_customer(**overrides))
        assert exc_info.value.field == field
        assert service.list_orders() == []

    def test_unknown_payment_method_rejected(self, service):
        with pytest.raises(ValidationError) as exc_info:
            place(service, payment="bitcoin")
        assert exc_info.value.field == "paymentMethod"

    def test_document_without_files_rejected(self, service):
        empty = DocumentSelection(total_pages=0, selected_pages=(), file_names=())
        with pytest.raises(ValidationError):
            place(service, document=empty)

    def test_empty_page_selection_rejected(self, service):
        nothing = DocumentSelection(total_pages=5, selected_pages=(), file_names=("a.pdf",), page_range="")
        with pytest.raises(ValidationError):
            place(service, document=nothing)
        assert service.list_orders() == []


class TestStatusUpdates:
    def test_full_forward_lifecycle(self, service, caplog):
        order = place(service)
        with caplog.at_level(logging.WARNING, logger=SERVICE_LOGGER):
            for status in ("processing", "printing", "shipped", "delivered"):
                order = service.update_order_status(order.id, status)

        assert order.status is OrderStatus.DELIVERED
        assert service.get_order(order.id).status is OrderStatus.DELIVERED
        assert "anomaly" not in caplog.text

    def test_delivery_changes_only_status_and_timestamp(self, service):
        order = place(service)
        before = order.to_dict()

        delivered = service.update_order_status(order.id, "delivered")
        after = delivered.to_dict()

        assert after["status"] == "delivered"
        assert delivered.updated_at > order.updated_at
        for key in ("status", "updatedAt"):
            before.pop(key)
            after.pop(key)
        assert after == before

    def test_updated_at_moves_forward(self, service):
        order = place(service)
        updated = service.update_order_status(order.id, OrderStatus.PROCESSING)
        assert updated.updated_at > order.updated_at
        assert updated.created_at == order.created_at

    def test_same_status_only_refreshes_timestamp(self):
        frozen = FakeClock()
        service = OrderService(InMemoryOrderRepository(), clock=frozen, enforce_transitions=True)
        order = place(service)

        again = service.update_order_status(order.id, "pending")

        assert again.status is OrderStatus.PENDING
        assert again.updated_at > order.updated_at

    def test_admin_notes_replaced_when_given(self, service):
        order = place(service)
        service.update_order_status(order.id, "processing", admin_notes="Check margins")
        service.update_order_status(order.id, "printing")
        assert service.get_order(order.id).admin_notes == "Check margins"

        service.update_order_status(order.id, "printing", admin_notes="Reprint page 3")
        assert service.get_order(order.id).admin_notes == "Reprint page 3"

    def test_unknown_status_rejected(self, service):
        order = place(service)
        with pytest.raises(ValidationError) as exc_info:
            service.update_order_status(order.id, "ready")
        assert "ready" in exc_info.value.message
        assert service.get_order(order.id).status is OrderStatus.PENDING

    def test_missing_order(self, service):
        with pytest.raises(OrderNotFoundError) as exc_info:
            service.update_order_status(999, "processing")
        assert exc_info.value.order_id == 999

    def test_backward_move_logged_and_allowed(self, service, caplog):
        order = place(service)
        service.update_order_status(order.id, "shipped")

        with caplog.at_level(logging.WARNING, logger=SERVICE_LOGGER):
            updated = service.update_order_status(order.id, "processing")

        assert updated.status is OrderStatus.PROCESSING
        assert "moving backwards from shipped to processing" in caplog.text

    def test_late_cancellation_logged_and_allowed(self, service, caplog):
        order = place(service)
        service.update_order_status(order.id, "printing")

        with caplog.at_level(logging.WARNING, logger=SERVICE_LOGGER):
            updated = service.update_order_status(order.id, "cancelled")

        assert updated.status is OrderStatus.CANCELLED
        assert "cancelling an order that is already printing" in caplog.text

    def test_irregular_moves_rejected_when_enforced(self, clock):
        service = OrderService(InMemoryOrderRepository(), clock=clock, enforce_transitions=True)
        order = place(service)
        service.update_order_status(order.id, "delivered")

        with pytest.raises(InvalidTransitionError):
            service.update_order_status(order.id, "pending")
        with pytest.raises(InvalidTransitionError):
            service.update_order_status(order.id, "cancelled")
        assert service.get_order(order.id).status is OrderStatus.DELIVERED

    def test_cancel_from_pending_is_regular(self, clock):
        service = OrderService(InMemoryOrderRepository(), clock=clock, enforce_transitions=True)
        order = place(service)
        assert service.update_order_status(order.id, "cancelled").status is OrderStatus.CANCELLED


class TestTransitionAnomaly:
    def test_regular_moves(self):
        assert transition_anomaly(OrderStatus.PENDING, OrderStatus.PROCESSING) is None
        assert transition_anomaly(OrderStatus.PENDING, OrderStatus.DELIVERED) is None
        assert transition_anomaly(OrderStatus.PROCESSING, OrderStatus.CANCELLED) is None
        assert transition_anomaly(OrderStatus.SHIPPED, OrderStatus.SHIPPED) is None

    def test_irregular_moves(self):
        assert transition_anomaly(OrderStatus.PRINTING, OrderStatus.PENDING)
        assert transition_anomaly(OrderStatus.SHIPPED, OrderStatus.CANCELLED)
        assert transition_anomaly(OrderStatus.CANCELLED, OrderStatus.PROCESSING)


class TestPaymentStatus:
    def test_payment_completed(self, service):
        order = place(service)
        updated = service.update_payment_status(order.id, "completed")
        assert updated.payment_status is PaymentStatus.COMPLETED
        assert updated.status is OrderStatus.PENDING
        assert updated.updated_at > order.updated_at

    def test_unknown_payment_status_rejected(self, service):
        order = place(service)
        with pytest.raises(ValidationError):
            service.update_payment_status(order.id, "refunded")

    def test_missing_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.update_payment_status(5, PaymentStatus.FAILED)


class TestQueries:
    def test_list_newest_first(self, service):
        ids = [place(service).id for _ in range(3)]
        assert [o.id for o in service.list_orders()] == list(reversed(ids))

    def test_list_ties_broken_by_id(self):
        service = OrderService(InMemoryOrderRepository(), clock=FakeClock(), enforce_transitions=False)
        for _ in range(3):
            place(service)
        assert [o.id for o in service.list_orders()] == [3, 2, 1]

    def test_filter_by_status(self, service):
        first, second, third = (place(service) for _ in range(3))
        service.update_order_status(second.id, "printing")

        assert [o.id for o in service.list_orders(status="printing")] == [second.id]
        assert [o.id for o in service.list_orders(status=OrderStatus.PENDING)] == [third.id, first.id]

    def test_filter_by_user(self, service):
        mine = place(service, user_id="u-1")
        place(service, user_id="u-2")
        place(service)
        assert [o.id for o in service.list_orders(user_id="u-1")] == [mine.id]

    def test_pagination(self, service):
        for _ in range(5):
            place(service)
        assert [o.id for o in service.list_orders(limit=2)] == [5, 4]
        assert [o.id for o in service.list_orders(limit=2, offset=2)] == [3, 2]
        assert [o.id for o in service.list_orders(offset=4)] == [1]
        assert service.list_orders(limit=0) == []

    def test_negative_pagination_rejected(self, service):
        with pytest.raises(ValidationError):
            service.list_orders(offset=-1)
        with pytest.raises(ValidationError):
            service.list_orders(limit=-1)

    def test_unknown_status_filter_rejected(self, service):
        with pytest.raises(ValidationError):
            service.list_orders(status="lost")

    def test_get_missing_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.get_order(1)


class TestTracking:
    def test_tracking_projection(self, service):
        order = place(service)
        service.update_order_status(order.id, "processing", admin_notes="Low toner, use printer 2")

        info = service.track_order(order.id)
        data = info.to_dict()

        assert info.status is OrderStatus.PROCESSING
        assert data["totalAmount"] == "94.40"
        assert data["currency"] == "INR"
        assert set(data) == {"id", "status", "paymentStatus", "totalAmount", "currency", "createdAt", "updatedAt"}
        assert "Low toner" not in str(data)

    def test_tracking_missing_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.track_order(404)


class TestDeleteOrder:
    def test_delete(self, service):
        order = place(service)
        assert service.delete_order(order.id) is True
        with pytest.raises(OrderNotFoundError):
            service.get_order(order.id)

    def test_delete_missing(self, service):
        assert service.delete_order(77) is False

    def test_ids_not_reused_after_delete(self, service):
        place(service)
        second = place(service)
        service.delete_order(second.id)
        assert place(service).id == 3


class TestConcurrency:
    def test_concurrent_creates_get_unique_ids(self):
        service = OrderService(InMemoryOrderRepository(), enforce_transitions=False)
        created = []
        lock = threading.Lock()

        def worker():
            for _ in range(10):
                order = place(service, settings=PrintSettings(binding=Binding.STAPLE))
                with lock:
                    created.append(order.id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(created) == 80
        assert len(set(created)) == 80
        assert len(service.list_orders()) == 80

    def test_concurrent_status_updates_keep_order_consistent(self):
        service = OrderService(InMemoryOrderRepository(), enforce_transitions=False)
        order = place(service)
        statuses = ["processing", "printing", "shipped", "delivered"]

        threads = [
            threading.Thread(target=service.update_order_status, args=(order.id, s))
            for s in statuses
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        final = service.get_order(order.id)
        assert final.status.value in statuses
        assert final.updated_at >= final.created_at
