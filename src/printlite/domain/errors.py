# src/printlite/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and domain errors.

Files that USE this module:
- printlite.domain.models (DocumentSelection validation)
- printlite.application.* (pricing, option parsing and order lifecycle)
- printlite.adapters.api.handlers (maps errors to structured failures)
"""
from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class ValidationError(DomainError):
    """
    Raised when caller input is missing or malformed.

    The message is human-readable and safe to show to the customer.
    ``field`` names the offending input where one can be identified.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidTransitionError(ValidationError):
    """Raised when a status change is rejected by the transition rules."""
    pass


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""
    pass


class OrderNotFoundError(NotFoundError):
    """Raised when no order exists for the given id."""

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class InvariantViolation(DomainError):
    """Raised when an internal invariant breaks (a logic bug, never user input)."""
    pass
