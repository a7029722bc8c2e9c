# src/printlite/adapters/api/__init__.py
"""
API Adapters - Inbound Request Handling

This package contains request schemas and the handlers that connect
transport-level payloads to the order service and pricing engine.
"""

from printlite.adapters.api.handlers import OrderHandlers
from printlite.adapters.api.schemas import (
    OrderCreateRequest,
    PaymentStatusRequest,
    PriceQuoteRequest,
    StatusUpdateRequest,
)

__all__ = [
    "OrderHandlers",
    "OrderCreateRequest",
    "PriceQuoteRequest",
    "StatusUpdateRequest",
    "PaymentStatusRequest",
]
