# src/printlite/application/order_service.py
"""
Order Service - Order Lifecycle Management

This module owns the canonical copy of every Order. It creates orders from
checkout data (pricing them through the Pricing Engine), moves them through
the fulfilment statuses, records payment outcomes, and answers admin and
customer queries.

Status flow:
    pending -> processing -> printing -> shipped -> delivered
    pending | processing -> cancelled

Admins may still move an order backwards or cancel it late: such moves are
logged as anomalies and allowed, unless transition enforcement is switched on
(ENFORCE_STATUS_TRANSITIONS), in which case they are rejected.

Files that USE this module:
- printlite.adapters.api.handlers (all order endpoints)
- printlite.app (wires OrderService with repository and pricing engine)
- tests.test_order_service (unit tests)

Files that this module USES:
- printlite.adapters.persistence.base (OrderRepository interface)
- printlite.application.pricing (PricingEngine)
- printlite.domain.models (Order and related models)
- printlite.domain.errors (ValidationError, InvalidTransitionError, OrderNotFoundError)
- printlite.shared.validators (customer field validation)
- printlite.config (enforce_status_transitions default)
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional, Type, TypeVar, Union

from printlite.adapters.persistence.base import OrderRepository
from printlite.application.pricing import PricingEngine, pricing_engine
from printlite.config import settings as app_settings
from printlite.domain.errors import InvalidTransitionError, OrderNotFoundError, ValidationError
from printlite.domain.models import (
    CANCELLABLE_STATUSES,
    CustomerInfo,
    DocumentSelection,
    DocumentSummary,
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    PrintSettings,
    TrackingInfo,
)
from printlite.shared.validators import (
    sanitize_user_input,
    validate_email,
    validate_phone,
    validate_required_text,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce(enum_cls: Type[E], value: Union[E, str], field: str) -> E:
    """Convert a raw string to an enum member, raising ValidationError if unknown."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field} '{value}'. Allowed: {allowed}", field=field) from None


def transition_anomaly(current: OrderStatus, new: OrderStatus) -> Optional[str]:
    """
    Describe why a status change breaks the normal flow.

    Args:
        current: Status the order is in
        new: Requested status

    Returns:
        Reason string for irregular moves, None for regular (or no-op) moves
    """
    if current == new:
        return None
    if new is OrderStatus.CANCELLED:
        if current not in CANCELLABLE_STATUSES:
            return f"cancelling an order that is already {current.value}"
        return None
    if current is OrderStatus.CANCELLED:
        return f"reopening a cancelled order as {new.value}"
    if new.rank < current.rank:
        return f"moving backwards from {current.value} to {new.value}"
    return None


class OrderService:
    """
    Order lifecycle manager.

    All read-modify-write operations run under one lock, so concurrent admin
    updates to the same order never lose writes.
    """

    def __init__(
        self,
        repository: OrderRepository,
        pricing: Optional[PricingEngine] = None,
        clock: Optional[Callable[[], datetime]] = None,
        enforce_transitions: Optional[bool] = None,
    ):
        """
        Initialize order service.

        Args:
            repository: Order storage backend
            pricing: Pricing engine (defaults to the global engine)
            clock: Returns the current UTC time (injectable for tests)
            enforce_transitions: Reject irregular status moves instead of logging them;
                defaults to Settings.enforce_status_transitions
        """
        self.repository = repository
        self.pricing = pricing or pricing_engine
        self.clock = clock or _utcnow
        if enforce_transitions is None:
            enforce_transitions = app_settings.enforce_status_transitions
        self.enforce_transitions = enforce_transitions
        self._lock = threading.RLock()

    # -------------------- helpers --------------------

    def _require(self, order_id: int) -> Order:
        order = self.repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def _touch(self, order: Order) -> None:
        # updated_at must move forward on every mutation, even with a coarse clock
        now = self.clock()
        if now <= order.updated_at:
            now = order.updated_at + timedelta(microseconds=1)
        order.updated_at = now

    @staticmethod
    def _validate_customer(customer: CustomerInfo) -> CustomerInfo:
        if not validate_required_text(customer.name):
            raise ValidationError("Customer name is required", field="customerName")
        if not validate_required_text(customer.email):
            raise ValidationError("Email is required", field="email")
        if not validate_email(customer.email):
            raise ValidationError(f"Invalid email address: '{customer.email}'", field="email")
        if not validate_required_text(customer.phone):
            raise ValidationError("Phone number is required", field="phone")
        if not validate_phone(customer.phone):
            raise ValidationError(f"Invalid phone number: '{customer.phone}'", field="phone")
        if not validate_required_text(customer.delivery_address):
            raise ValidationError("Delivery address is required", field="deliveryAddress")

        return CustomerInfo(
            name=sanitize_user_input(customer.name, max_length=200),
            email=customer.email.strip(),
            phone=customer.phone.strip(),
            delivery_address=sanitize_user_input(customer.delivery_address, max_length=500),
        )

    # -------------------- commands --------------------

    def create_order(
        self,
        customer: CustomerInfo,
        print_settings: PrintSettings,
        document: DocumentSelection,
        payment_method: Union[PaymentMethod, str],
        special_instructions: Optional[str] = None,
        user_id: Optional[Union[str, int]] = None,
    ) -> Order:
        """
        Create a new order in ``pending`` status.

        The price is computed with GST for the selected pages of the document
        times the requested copies.

        Args:
            customer: Customer name, contact and delivery address
            print_settings: Print configuration
            document: Selected pages and file names
            payment_method: upi, card or cash
            special_instructions: Optional free-text instructions
            user_id: Owner id when the customer is logged in

        Returns:
            The created Order

        Raises:
            ValidationError: If customer fields, files, pages or options are invalid
        """
        customer = self._validate_customer(customer)
        if not document.file_names:
            raise ValidationError("At least one file is required", field="fileDetails")
        method = _coerce(PaymentMethod, payment_method, "paymentMethod")

        price = self.pricing.compute_price(document.selected_count, print_settings, include_tax=True)
        instructions = sanitize_user_input(special_instructions or "") or None

        with self._lock:
            now = self.clock()
            order = Order(
                id=self.repository.next_id(),
                customer=customer,
                print_settings=print_settings,
                document=DocumentSummary.from_selection(document),
                price=price,
                payment_method=method,
                created_at=now,
                updated_at=now,
                status=OrderStatus.PENDING,
                payment_status=PaymentStatus.PENDING,
                special_instructions=instructions,
                user_id=str(user_id) if user_id is not None else None,
            )
            self.repository.add(order)

        logger.info(
            "Order %d created: %d pages x %d copies, total %s %s, payment=%s",
            order.id, price.page_count, price.copies, price.total, price.currency, method.value,
        )
        return order

    def update_order_status(
        self,
        order_id: int,
        new_status: Union[OrderStatus, str],
        admin_notes: Optional[str] = None,
    ) -> Order:
        """
        Set an order's fulfilment status.

        Re-applying the current status only refreshes ``updated_at``.

        Args:
            order_id: Order to update
            new_status: Target status
            admin_notes: Replaces the stored admin notes when given

        Returns:
            The updated Order

        Raises:
            ValidationError: If the status is not a known status
            InvalidTransitionError: If enforcement is on and the move is irregular
            OrderNotFoundError: If the order does not exist
        """
        status = _coerce(OrderStatus, new_status, "status")

        with self._lock:
            order = self._require(order_id)
            previous = order.status
            anomaly = transition_anomaly(previous, status)
            if anomaly:
                if self.enforce_transitions:
                    raise InvalidTransitionError(
                        f"Order {order_id}: {anomaly} is not allowed", field="status"
                    )
                logger.warning("Order %d status anomaly: %s", order_id, anomaly)

            order.status = status
            if admin_notes is not None:
                order.admin_notes = sanitize_user_input(admin_notes) or None
            self._touch(order)
            self.repository.save(order)

        if previous != status:
            logger.info("Order %d status %s -> %s", order_id, previous.value, status.value)
        else:
            logger.debug("Order %d status unchanged (%s)", order_id, status.value)
        return order

    def update_payment_status(
        self,
        order_id: int,
        new_payment_status: Union[PaymentStatus, str],
    ) -> Order:
        """
        Record a payment outcome.

        Raises:
            ValidationError: If the payment status is unknown
            OrderNotFoundError: If the order does not exist
        """
        payment_status = _coerce(PaymentStatus, new_payment_status, "paymentStatus")

        with self._lock:
            order = self._require(order_id)
            previous = order.payment_status
            order.payment_status = payment_status
            self._touch(order)
            self.repository.save(order)

        logger.info("Order %d payment %s -> %s", order_id, previous.value, payment_status.value)
        return order

    def delete_order(self, order_id: int) -> bool:
        """Permanently remove an order. Returns False if it did not exist."""
        with self._lock:
            deleted = self.repository.delete(order_id)
        if deleted:
            logger.info("Order %d deleted", order_id)
        else:
            logger.info("Delete requested for missing order %d", order_id)
        return deleted

    # -------------------- queries --------------------

    def get_order(self, order_id: int) -> Order:
        """
        Fetch the full order (admin view).

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        return self._require(order_id)

    def list_orders(
        self,
        status: Optional[Union[OrderStatus, str]] = None,
        user_id: Optional[Union[str, int]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Order]:
        """
        List orders newest first, optionally filtered and paginated.

        Args:
            status: Only orders in this status
            user_id: Only orders owned by this user
            limit: Maximum number of orders to return (None = all)
            offset: Number of matching orders to skip

        Returns:
            Orders sorted by creation time, newest first

        Raises:
            ValidationError: On an unknown status or negative limit/offset
        """
        if offset < 0:
            raise ValidationError("offset must not be negative", field="offset")
        if limit is not None and limit < 0:
            raise ValidationError("limit must not be negative", field="limit")

        wanted_status = _coerce(OrderStatus, status, "status") if status is not None else None
        wanted_user = str(user_id) if user_id is not None else None

        orders = [
            o for o in self.repository.all()
            if (wanted_status is None or o.status == wanted_status)
            and (wanted_user is None or o.user_id == wanted_user)
        ]
        orders.sort(key=lambda o: (o.created_at, o.id), reverse=True)

        end = None if limit is None else offset + limit
        return orders[offset:end]

    def track_order(self, order_id: int) -> TrackingInfo:
        """
        Customer-facing order lookup.

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        return TrackingInfo.from_order(self._require(order_id))
