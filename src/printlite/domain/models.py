# src/printlite/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Print option enumerations and order/payment statuses
- Print settings and document selections
- Price breakdowns
- The Order aggregate and its customer-safe tracking projection

Files that USE this module:
- printlite.application.* (all services use domain models)
- printlite.adapters.* (adapters create, persist and format domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- printlite.domain.errors (ValidationError)
- printlite.domain.page_range (parse_page_range for DocumentSelection)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass  # Decorator for creating data classes
from datetime import datetime, timezone  # Date/time utilities for timestamps
from decimal import Decimal  # Exact monetary arithmetic
from enum import Enum  # Closed sets of option values
from typing import Any, Iterable, Optional  # Type hints

from printlite.domain.errors import ValidationError
from printlite.domain.page_range import parse_page_range

CURRENCY = "INR"


class PaperType(str, Enum):
    """Paper tier: 70gsm standard, 90gsm premium, 120gsm glossy."""
    STANDARD = "standard"
    PREMIUM = "premium"
    GLOSSY = "glossy"


class ColorMode(str, Enum):
    BLACK_AND_WHITE = "blackAndWhite"
    COLOR = "color"


class Sides(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


class Binding(str, Enum):
    NONE = "none"
    SPIRAL = "spiral"
    STAPLE = "staple"


class PaperSize(str, Enum):
    """Sheet size. Recorded on the order for the print shop; not priced."""
    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"


class PaymentMethod(str, Enum):
    UPI = "upi"
    CARD = "card"
    CASH = "cash"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class OrderStatus(str, Enum):
    """
    Fulfilment status of an order.

    Forward sequence: pending -> processing -> printing -> shipped -> delivered.
    ``cancelled`` is reachable from pending or processing.
    """
    PENDING = "pending"
    PROCESSING = "processing"
    PRINTING = "printing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def rank(self) -> Optional[int]:
        """Position in the forward sequence (None for cancelled)."""
        return _STATUS_RANK.get(self)

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


_STATUS_RANK = {
    OrderStatus.PENDING: 0,
    OrderStatus.PROCESSING: 1,
    OrderStatus.PRINTING: 2,
    OrderStatus.SHIPPED: 3,
    OrderStatus.DELIVERED: 4,
}

CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING})


@dataclass(frozen=True)
class PrintSettings:
    """
    Print configuration for an order. Immutable once attached to an order.

    Attributes:
        paper_type: Paper tier (adds a per-page surcharge)
        color_mode: Black & white or colour (selects the base rate)
        sides: Single or double sided (selects the rate table)
        binding: Binding option (flat fee per order)
        copies: Number of copies, at least 1
        paper_size: Sheet size, informational only
    """
    paper_type: PaperType = PaperType.STANDARD
    color_mode: ColorMode = ColorMode.BLACK_AND_WHITE
    sides: Sides = Sides.SINGLE
    binding: Binding = Binding.NONE
    copies: int = 1
    paper_size: PaperSize = PaperSize.A4

    def to_dict(self) -> dict:
        return {
            "paperType": self.paper_type.value,
            "colorMode": self.color_mode.value,
            "sides": self.sides.value,
            "binding": self.binding.value,
            "copies": self.copies,
            "paperSize": self.paper_size.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PrintSettings:
        return cls(
            paper_type=PaperType(data.get("paperType", PaperType.STANDARD.value)),
            color_mode=ColorMode(data.get("colorMode", ColorMode.BLACK_AND_WHITE.value)),
            sides=Sides(data.get("sides", Sides.SINGLE.value)),
            binding=Binding(data.get("binding", Binding.NONE.value)),
            copies=int(data.get("copies", 1)),
            paper_size=PaperSize(data.get("paperSize", PaperSize.A4.value)),
        )


@dataclass(frozen=True)
class FileDetail:
    """Uploaded file metadata (never the file bytes)."""
    name: str
    pages: int
    size: int = 0


@dataclass(frozen=True)
class DocumentSelection:
    """
    Pages selected for printing across all uploaded files.

    Attributes:
        total_pages: Sum of per-file page counts
        selected_pages: Sorted, de-duplicated page numbers in [1, total_pages]
        file_names: Names of the uploaded files
        page_range: Range expression the selection came from (None = all pages)
    """
    total_pages: int
    selected_pages: tuple[int, ...]
    file_names: tuple[str, ...]
    page_range: Optional[str] = None

    @property
    def selected_count(self) -> int:
        return len(self.selected_pages)

    @classmethod
    def from_files(cls, files: Iterable[FileDetail], page_range: Optional[str] = None) -> DocumentSelection:
        """
        Build a selection from uploaded file metadata and an optional range.

        Args:
            files: Uploaded files with page counts
            page_range: Range expression; None, blank or "all" selects every page

        Returns:
            DocumentSelection

        Raises:
            ValidationError: If no files are given, a file has no pages, or the
                range expression is rejected
        """
        files = list(files)
        if not files:
            raise ValidationError("At least one file is required", field="fileDetails")
        for f in files:
            if f.pages < 1:
                raise ValidationError(f"File '{f.name}' has no printable pages", field="fileDetails")

        total_pages = sum(f.pages for f in files)
        names = tuple(f.name for f in files)

        if page_range is None or not page_range.strip() or page_range.strip().lower() in ("all", "all pages"):
            return cls(total_pages=total_pages, selected_pages=tuple(range(1, total_pages + 1)), file_names=names)

        result = parse_page_range(page_range, total_pages)
        if not result.ok:
            raise ValidationError(result.error, field="pageRange")
        return cls(
            total_pages=total_pages,
            selected_pages=result.selected_pages,
            file_names=names,
            page_range=page_range.strip(),
        )


@dataclass(frozen=True)
class DocumentSummary:
    """What an order keeps of its document selection."""
    total_pages: int
    selected_page_count: int
    file_names: tuple[str, ...]
    page_range: Optional[str] = None

    @classmethod
    def from_selection(cls, selection: DocumentSelection) -> DocumentSummary:
        return cls(
            total_pages=selection.total_pages,
            selected_page_count=selection.selected_count,
            file_names=selection.file_names,
            page_range=selection.page_range,
        )

    def to_dict(self) -> dict:
        return {
            "totalPages": self.total_pages,
            "selectedPages": self.selected_page_count,
            "fileNames": list(self.file_names),
            "pageRange": self.page_range,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DocumentSummary:
        return cls(
            total_pages=int(data["totalPages"]),
            selected_page_count=int(data.get("selectedPages", data["totalPages"])),
            file_names=tuple(data.get("fileNames", ())),
            page_range=data.get("pageRange"),
        )


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Computed price for a print job, in INR, rounded to 2 decimal places.

    Attributes:
        subtotal: Print cost for all copies plus binding
        tax_amount: GST on the subtotal (0 on the quick-quote path)
        total: subtotal + tax_amount
        tax_rate: Applied tax rate (0.18, or 0 when tax is omitted)
        tax_included: Whether GST was applied
        page_count: Billable pages per copy
        copies: Number of copies
        unit_cost: Cost of a single copy before binding
        binding_fee: Binding surcharge included in the subtotal
        currency: Always "INR"
    """
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    tax_rate: Decimal
    tax_included: bool
    page_count: int
    copies: int
    unit_cost: Decimal
    binding_fee: Decimal
    currency: str = CURRENCY

    def to_dict(self) -> dict:
        return {
            "subtotal": _money(self.subtotal),
            "taxAmount": _money(self.tax_amount),
            "total": _money(self.total),
            "taxRate": f"{self.tax_rate:.2f}",
            "taxIncluded": self.tax_included,
            "pageCount": self.page_count,
            "copies": self.copies,
            "unitCost": _money(self.unit_cost),
            "bindingFee": _money(self.binding_fee),
            "currency": self.currency,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PriceBreakdown:
        return cls(
            subtotal=Decimal(str(data["subtotal"])),
            tax_amount=Decimal(str(data["taxAmount"])),
            total=Decimal(str(data["total"])),
            tax_rate=Decimal(str(data.get("taxRate", "0.18"))),
            tax_included=bool(data.get("taxIncluded", True)),
            page_count=int(data.get("pageCount", 0)),
            copies=int(data.get("copies", 1)),
            unit_cost=Decimal(str(data.get("unitCost", "0.00"))),
            binding_fee=Decimal(str(data.get("bindingFee", "0.00"))),
            currency=data.get("currency", CURRENCY),
        )


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str
    phone: str
    delivery_address: str

    def to_dict(self) -> dict:
        return {
            "customerName": self.name,
            "email": self.email,
            "phone": self.phone,
            "deliveryAddress": self.delivery_address,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CustomerInfo:
        return cls(
            name=data["customerName"],
            email=data["email"],
            phone=data["phone"],
            delivery_address=data["deliveryAddress"],
        )


@dataclass
class Order:
    """
    Print order aggregate root.

    Created in ``pending`` status by checkout; afterwards mutated only through
    status and payment-status updates owned by the order service.
    """
    id: int
    customer: CustomerInfo
    print_settings: PrintSettings
    document: DocumentSummary
    price: PriceBreakdown
    payment_method: PaymentMethod
    created_at: datetime
    updated_at: datetime
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    special_instructions: Optional[str] = None
    admin_notes: Optional[str] = None
    user_id: Optional[str] = None

    def to_dict(self) -> dict:
        """
        Convert Order to a JSON-serializable dictionary (camelCase keys).

        Returns:
            Dictionary with ISO-formatted timestamps and string amounts
        """
        d: dict[str, Any] = {"id": self.id}
        d.update(self.customer.to_dict())
        d.update({
            "printSettings": self.print_settings.to_dict(),
            "document": self.document.to_dict(),
            "price": self.price.to_dict(),
            "totalAmount": _money(self.price.total),
            "paymentMethod": self.payment_method.value,
            "paymentStatus": self.payment_status.value,
            "status": self.status.value,
            "specialInstructions": self.special_instructions,
            "adminNotes": self.admin_notes,
            "userId": self.user_id,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        })
        return d

    @staticmethod
    def from_dict(data: dict) -> Order:
        """
        Create Order from its dictionary form.

        Args:
            data: Dictionary produced by ``to_dict``

        Returns:
            Order instance
        """
        return Order(
            id=int(data["id"]),
            customer=CustomerInfo.from_dict(data),
            print_settings=PrintSettings.from_dict(data["printSettings"]),
            document=DocumentSummary.from_dict(data["document"]),
            price=PriceBreakdown.from_dict(data["price"]),
            payment_method=PaymentMethod(data["paymentMethod"]),
            payment_status=PaymentStatus(data.get("paymentStatus", PaymentStatus.PENDING.value)),
            status=OrderStatus(data.get("status", OrderStatus.PENDING.value)),
            special_instructions=data.get("specialInstructions"),
            admin_notes=data.get("adminNotes"),
            user_id=data.get("userId"),
            created_at=_parse_ts(data["createdAt"]),
            updated_at=_parse_ts(data["updatedAt"]),
        )


@dataclass(frozen=True)
class TrackingInfo:
    """Customer-safe view of an order: no admin notes, no contact details."""
    id: int
    status: OrderStatus
    payment_status: PaymentStatus
    total: Decimal
    created_at: datetime
    updated_at: datetime
    currency: str = CURRENCY

    @classmethod
    def from_order(cls, order: Order) -> TrackingInfo:
        return cls(
            id=order.id,
            status=order.status,
            payment_status=order.payment_status,
            total=order.price.total,
            created_at=order.created_at,
            updated_at=order.updated_at,
            currency=order.price.currency,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "status": self.status.value,
            "paymentStatus": self.payment_status.value,
            "totalAmount": _money(self.total),
            "currency": self.currency,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def _parse_ts(raw: Any) -> datetime:
    # Accept both "...Z" and "+00:00"
    if isinstance(raw, datetime):
        ts = raw
    else:
        ts = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)
