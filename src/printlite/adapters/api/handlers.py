# src/printlite/adapters/api/handlers.py
"""
Request Handlers - Boundary Between Transport and the Order Core

This module contains the handlers behind the storefront and admin endpoints:
order creation, quick quotes, status and payment updates, admin queries,
deletion and customer tracking. Each handler takes a plain payload (as decoded
from JSON by whatever transport is in front), validates it, calls the order
service or pricing engine, and returns a plain dict ready to serialise.

Validation and not-found errors are turned into structured failures here:
    {"success": False, "status": 400|404, "error": "...", "details": [...]}
Invariant violations are not caught; they are bugs, not bad input.

Files that USE this module:
- printlite.app (composition root creates OrderHandlers)
- tests.test_handlers (unit tests)

Files that this module USES:
- printlite.adapters.api.schemas (request models)
- printlite.application.order_service (OrderService)
- printlite.application.pricing (PricingEngine for quotes)
- printlite.application.print_options (parse_print_settings)
- printlite.adapters.formatting.formatter (breakdown and tracking text)
- printlite.shared.validators (validate_order_id)
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from printlite.adapters.api.schemas import (
    OrderCreateRequest,
    PaymentStatusRequest,
    PriceQuoteRequest,
    StatusUpdateRequest,
)
from printlite.adapters.formatting.formatter import format_price_breakdown, format_tracking
from printlite.application.order_service import OrderService
from printlite.application.pricing import PricingEngine
from printlite.application.print_options import parse_print_settings
from printlite.domain.errors import NotFoundError, ValidationError
from printlite.domain.models import CustomerInfo, DocumentSelection, FileDetail
from printlite.shared.validators import validate_order_id

logger = logging.getLogger(__name__)

Response = Dict[str, Any]


def _failure(status: int, error: str, details: Optional[List[Dict[str, str]]] = None) -> Response:
    response: Response = {"success": False, "status": status, "error": error}
    if details:
        response["details"] = details
    return response


def _pydantic_details(exc: PydanticValidationError) -> List[Dict[str, str]]:
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


class OrderHandlers:
    """Inbound handlers for order, quote and tracking requests."""

    def __init__(
        self,
        service: OrderService,
        pricing: Optional[PricingEngine] = None,
        strict_options: Optional[bool] = None,
    ):
        """
        Args:
            service: Order service behind the order endpoints
            pricing: Engine for quick quotes (defaults to the service's engine)
            strict_options: Reject unknown print options; defaults to
                Settings.strict_print_options
        """
        self.service = service
        self.pricing = pricing if pricing is not None else service.pricing
        self.strict_options = strict_options

    def _run(self, action: str, fn: Callable[[], Response]) -> Response:
        """Run a handler body and map recoverable errors to failure responses."""
        try:
            return fn()
        except PydanticValidationError as e:
            logger.info("%s rejected: invalid payload (%d errors)", action, e.error_count())
            return _failure(400, "Invalid request data", _pydantic_details(e))
        except ValidationError as e:
            logger.info("%s rejected: %s", action, e.message)
            details = [{"field": e.field, "message": e.message}] if e.field else None
            return _failure(400, e.message, details)
        except NotFoundError as e:
            logger.info("%s failed: %s", action, e)
            return _failure(404, str(e))

    @staticmethod
    def _order_id(raw: Any) -> int:
        order_id = validate_order_id(raw)
        if order_id is None:
            raise ValidationError(f"Invalid order ID: '{raw}'", field="orderId")
        return order_id

    # -------------------- customer endpoints --------------------

    def create_order(self, payload: Mapping[str, Any]) -> Response:
        """
        Handle checkout: validate, price and create an order.

        Returns:
            {"success": True, "order": {...}, "price": {...}, "breakdown": "..."}
        """
        def body() -> Response:
            req = OrderCreateRequest.model_validate(payload)
            settings = parse_print_settings(
                req.print_settings.model_dump(by_alias=True, exclude_none=True), strict=self.strict_options
            )
            document = DocumentSelection.from_files(
                (FileDetail(name=f.name, pages=f.pages, size=f.size) for f in req.file_details),
                page_range=req.page_range,
            )
            customer = CustomerInfo(
                name=req.customer_name,
                email=req.email,
                phone=req.phone,
                delivery_address=req.delivery_address,
            )
            order = self.service.create_order(
                customer,
                settings,
                document,
                req.payment_method,
                special_instructions=req.special_instructions,
                user_id=req.user_id,
            )
            return {
                "success": True,
                "order": order.to_dict(),
                "price": order.price.to_dict(),
                "breakdown": format_price_breakdown(order.price, order.print_settings),
            }

        return self._run("create_order", body)

    def quote(self, payload: Mapping[str, Any]) -> Response:
        """
        Handle a quick price quote (no tax, nothing persisted).

        Returns:
            {"success": True, "price": {...}, "breakdown": "..."}
        """
        def body() -> Response:
            req = PriceQuoteRequest.model_validate(payload)
            settings = parse_print_settings(req.model_dump(by_alias=True, exclude_none=True), strict=self.strict_options)
            price = self.pricing.quote(req.pages, settings)
            return {
                "success": True,
                "price": price.to_dict(),
                "breakdown": format_price_breakdown(price, settings),
            }

        return self._run("quote", body)

    def track(self, order_id: Any) -> Response:
        """Customer tracking lookup: status, payment status, total and timestamps only."""
        def body() -> Response:
            info = self.service.track_order(self._order_id(order_id))
            return {"success": True, "tracking": info.to_dict(), "summary": format_tracking(info)}

        return self._run("track", body)

    # -------------------- admin endpoints --------------------

    def get_order(self, order_id: Any) -> Response:
        def body() -> Response:
            order = self.service.get_order(self._order_id(order_id))
            return {"success": True, "order": order.to_dict()}

        return self._run("get_order", body)

    def list_orders(
        self,
        status: Optional[str] = None,
        user_id: Optional[Any] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Response:
        """List orders newest first; ``limit``/``offset`` paginate."""
        def body() -> Response:
            orders = self.service.list_orders(status=status, user_id=user_id, limit=limit, offset=offset)
            return {"success": True, "count": len(orders), "orders": [o.to_dict() for o in orders]}

        return self._run("list_orders", body)

    def update_status(self, payload: Mapping[str, Any]) -> Response:
        """Handle ``{orderId, newStatus, adminNotes?}``."""
        def body() -> Response:
            req = StatusUpdateRequest.model_validate(payload)
            order = self.service.update_order_status(req.order_id, req.new_status, admin_notes=req.admin_notes)
            return {"success": True, "order": order.to_dict()}

        return self._run("update_status", body)

    def update_payment(self, payload: Mapping[str, Any]) -> Response:
        """Handle ``{orderId, paymentStatus}``."""
        def body() -> Response:
            req = PaymentStatusRequest.model_validate(payload)
            order = self.service.update_payment_status(req.order_id, req.payment_status)
            return {"success": True, "order": order.to_dict()}

        return self._run("update_payment", body)

    def delete_order(self, order_id: Any) -> Response:
        def body() -> Response:
            oid = self._order_id(order_id)
            if not self.service.delete_order(oid):
                return _failure(404, f"Order {oid} not found")
            return {"success": True, "message": "Order deleted successfully"}

        return self._run("delete_order", body)
