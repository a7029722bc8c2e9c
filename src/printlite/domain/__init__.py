# src/printlite/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from printlite.domain.models import (
    Binding,
    ColorMode,
    CustomerInfo,
    DocumentSelection,
    DocumentSummary,
    FileDetail,
    Order,
    OrderStatus,
    PaperSize,
    PaperType,
    PaymentMethod,
    PaymentStatus,
    PriceBreakdown,
    PrintSettings,
    Sides,
    TrackingInfo,
)
from printlite.domain.errors import (
    DomainError,
    InvalidTransitionError,
    InvariantViolation,
    NotFoundError,
    OrderNotFoundError,
    ValidationError,
)
from printlite.domain.page_range import PageRangeResult, parse_page_range

__all__ = [
    "PaperType",
    "ColorMode",
    "Sides",
    "Binding",
    "PaperSize",
    "PaymentMethod",
    "PaymentStatus",
    "OrderStatus",
    "PrintSettings",
    "FileDetail",
    "DocumentSelection",
    "DocumentSummary",
    "PriceBreakdown",
    "CustomerInfo",
    "Order",
    "TrackingInfo",
    "PageRangeResult",
    "parse_page_range",
    "DomainError",
    "ValidationError",
    "InvalidTransitionError",
    "NotFoundError",
    "OrderNotFoundError",
    "InvariantViolation",
]
