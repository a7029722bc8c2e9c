# src/printlite/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from printlite.shared.validators import (
    sanitize_user_input,
    validate_email,
    validate_order_id,
    validate_phone,
    validate_required_text,
)

__all__ = [
    "validate_email",
    "validate_phone",
    "validate_required_text",
    "validate_order_id",
    "sanitize_user_input",
]
