# tests/test_handlers.py
"""
Handler Tests - Unit Tests for Request Handlers

This module contains unit tests for the request handlers: checkout, quick
quotes, tracking, admin queries, status and payment updates and deletion,
including how validation and not-found errors become structured failures.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- printlite.adapters.api.handlers (OrderHandlers)
- printlite.application.order_service (OrderService)
- printlite.adapters.persistence.memory_store (InMemoryOrderRepository)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mock service for error-path tests

from printlite.adapters.api.handlers import OrderHandlers
from printlite.adapters.persistence.memory_store import InMemoryOrderRepository
from printlite.application.order_service import OrderService
from printlite.application.pricing import PricingEngine
from printlite.config import settings as app_settings
from printlite.domain.errors import InvariantViolation


@pytest.fixture(autouse=True)
def strict_options(monkeypatch):
    monkeypatch.setattr(app_settings, "strict_print_options", True)


@pytest.fixture
def handlers():
    service = OrderService(InMemoryOrderRepository(), pricing=PricingEngine(), enforce_transitions=False)
    return OrderHandlers(service)


def checkout_payload(**overrides):
    payload = {
        "customerName": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "deliveryAddress": "12 MG Road, Bengaluru",
        "fileDetails": [{"name": "report.pdf", "size": 52000, "pages": 10}],
        "printSettings": {
            "paperType": "standard",
            "colorOption": "color",
            "printSides": "single",
            "binding": "none",
            "copies": 2,
            "paperSize": "A4",
        },
        "paymentMethod": "upi",
    }
    payload.update(overrides)
    return payload


class TestCreateOrder:
    def test_checkout_success(self, handlers):
        response = handlers.create_order(checkout_payload(specialInstructions="Staple top left"))

        assert response["success"] is True
        order = response["order"]
        assert order["id"] == 1
        assert order["status"] == "pending"
        assert order["paymentStatus"] == "pending"
        assert order["totalAmount"] == "94.40"
        assert order["document"]["fileNames"] == ["report.pdf"]
        assert response["price"]["taxAmount"] == "14.40"
        assert response["breakdown"].endswith("Total: ₹94.40")

    def test_page_range_applied(self, handlers):
        response = handlers.create_order(checkout_payload(pageRange="1-5"))
        assert response["price"]["pageCount"] == 5
        assert response["order"]["document"]["pageRange"] == "1-5"

    def test_out_of_range_pages_rejected(self, handlers):
        response = handlers.create_order(checkout_payload(pageRange="1-5,12"))

        assert response["success"] is False
        assert response["status"] == 400
        assert "12" in response["error"]
        assert response["details"][0]["field"] == "pageRange"

    def test_missing_required_field(self, handlers):
        payload = checkout_payload()
        del payload["customerName"]

        response = handlers.create_order(payload)

        assert response["status"] == 400
        assert response["error"] == "Invalid request data"
        assert any(d["field"] == "customerName" for d in response["details"])

    def test_file_without_pages_rejected(self, handlers):
        response = handlers.create_order(checkout_payload(fileDetails=[{"name": "a.pdf", "pages": 0}]))
        assert response["status"] == 400
        assert response["details"][0]["field"] == "fileDetails.0.pages"

    def test_no_files_rejected(self, handlers):
        response = handlers.create_order(checkout_payload(fileDetails=[]))
        assert response["status"] == 400
        assert response["details"][0]["field"] == "fileDetails"

    def test_unknown_print_option_rejected(self, handlers):
        payload = checkout_payload()
        payload["printSettings"]["colorOption"] = "sepia"

        response = handlers.create_order(payload)

        assert response["status"] == 400
        assert response["details"][0]["field"] == "colorOption"

    def test_lenient_handlers_fall_back_to_defaults(self, handlers):
        lenient = OrderHandlers(handlers.service, strict_options=False)
        payload = checkout_payload()
        payload["printSettings"]["colorOption"] = "sepia"

        response = lenient.create_order(payload)

        assert response["success"] is True
        assert response["order"]["printSettings"]["colorMode"] == "blackAndWhite"
        assert response["order"]["totalAmount"] == "35.40"

    def test_invalid_email_rejected(self, handlers):
        response = handlers.create_order(checkout_payload(email="asha-at-example"))
        assert response["status"] == 400
        assert response["details"][0]["field"] == "email"

    def test_invariant_violations_propagate(self):
        service = Mock()
        service.create_order.side_effect = InvariantViolation("negative total")
        handlers = OrderHandlers(service, PricingEngine())

        with pytest.raises(InvariantViolation):
            handlers.create_order(checkout_payload())


class TestQuote:
    def test_quote_without_tax(self, handlers):
        response = handlers.quote({"pages": 10, "copies": 2, "printType": "color", "paperType": "A4"})

        assert response["success"] is True
        assert response["price"]["total"] == "80.00"
        assert response["price"]["taxIncluded"] is False
        assert "GST" not in response["breakdown"]

    def test_quote_with_legacy_quality(self, handlers):
        response = handlers.quote({"pages": 4, "paperType": "A4", "paperQuality": "premium", "sides": "double"})
        # two sheets at 2.50 + 0.50 each
        assert response["price"]["subtotal"] == "6.00"

    def test_zero_pages_rejected(self, handlers):
        response = handlers.quote({"pages": 0})
        assert response["status"] == 400
        assert "At least one page" in response["error"]

    def test_non_numeric_pages_rejected(self, handlers):
        response = handlers.quote({"pages": "lots"})
        assert response["status"] == 400
        assert response["details"][0]["field"] == "pages"

    def test_quote_does_not_create_orders(self, handlers):
        handlers.quote({"pages": 3})
        assert handlers.list_orders()["count"] == 0


class TestTrackAndGet:
    def test_track(self, handlers):
        handlers.create_order(checkout_payload())
        handlers.update_status({"orderId": 1, "newStatus": "processing", "adminNotes": "Priority customer"})

        response = handlers.track("1")

        assert response["success"] is True
        assert response["tracking"]["status"] == "processing"
        assert response["tracking"]["totalAmount"] == "94.40"
        assert "adminNotes" not in response["tracking"]
        assert "Priority customer" not in response["summary"]
        assert response["summary"].startswith("Order #1")

    def test_track_missing_order(self, handlers):
        response = handlers.track(99)
        assert response == {"success": False, "status": 404, "error": "Order 99 not found"}

    @pytest.mark.parametrize("raw", ["abc", 0, -4, None, True])
    def test_invalid_order_id(self, handlers, raw):
        response = handlers.track(raw)
        assert response["status"] == 400
        assert response["details"][0]["field"] == "orderId"

    def test_get_order_includes_admin_fields(self, handlers):
        handlers.create_order(checkout_payload())
        handlers.update_status({"orderId": 1, "newStatus": "printing", "adminNotes": "Use glossy stock"})

        order = handlers.get_order(1)["order"]

        assert order["adminNotes"] == "Use glossy stock"
        assert order["email"] == "asha@example.com"


class TestAdminUpdates:
    def test_update_status(self, handlers):
        handlers.create_order(checkout_payload())
        response = handlers.update_status({"orderId": 1, "newStatus": "shipped"})
        assert response["success"] is True
        assert response["order"]["status"] == "shipped"

    def test_update_status_accepts_status_key(self, handlers):
        handlers.create_order(checkout_payload())
        response = handlers.update_status({"orderId": "1", "status": "cancelled"})
        assert response["order"]["status"] == "cancelled"

    def test_invalid_status(self, handlers):
        handlers.create_order(checkout_payload())
        response = handlers.update_status({"orderId": 1, "newStatus": "ready"})
        assert response["status"] == 400
        assert response["details"][0]["field"] == "status"

    def test_update_missing_order(self, handlers):
        response = handlers.update_status({"orderId": 5, "newStatus": "processing"})
        assert response["status"] == 404

    def test_update_payment(self, handlers):
        handlers.create_order(checkout_payload())
        response = handlers.update_payment({"orderId": 1, "paymentStatus": "completed"})
        assert response["order"]["paymentStatus"] == "completed"

    def test_update_payment_missing_field(self, handlers):
        response = handlers.update_payment({"orderId": 1})
        assert response["status"] == 400
        assert response["details"][0]["field"] == "paymentStatus"


class TestListAndDelete:
    def test_list_orders(self, handlers):
        for _ in range(3):
            handlers.create_order(checkout_payload())
        handlers.update_status({"orderId": 2, "newStatus": "processing"})

        everything = handlers.list_orders()
        pending = handlers.list_orders(status="pending")
        page = handlers.list_orders(limit=1, offset=1)

        assert everything["count"] == 3
        assert [o["id"] for o in pending["orders"]] == [3, 1]
        assert page["count"] == 1

    def test_list_orders_for_user(self, handlers):
        handlers.create_order(checkout_payload(userId=7))
        handlers.create_order(checkout_payload())
        response = handlers.list_orders(user_id=7)
        assert [o["userId"] for o in response["orders"]] == ["7"]

    def test_list_orders_bad_status(self, handlers):
        assert handlers.list_orders(status="lost")["status"] == 400

    def test_delete(self, handlers):
        handlers.create_order(checkout_payload())
        assert handlers.delete_order(1) == {"success": True, "message": "Order deleted successfully"}
        assert handlers.delete_order(1) == {"success": False, "status": 404, "error": "Order 1 not found"}
