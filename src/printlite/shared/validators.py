# src/printlite/shared/validators.py
"""
Input Validation Utilities - Customer Data Validation

This module provides input validation functions for checkout data.
It validates customer emails, phone numbers, required text fields and order
ids, and sanitizes free text before it is stored on an order.

Files that USE this module:
- printlite.application.order_service (customer validation on order creation)
- printlite.adapters.api.handlers (order id validation)

Files that this module USES:
- None (pure utility functions)
"""
import re
from typing import Any, Optional


def validate_email(email: str) -> bool:
    """
    Validate email address format.
    
    Args:
        email: Email address to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not email:
        return False
    
    pattern = r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$'
    return bool(re.match(pattern, email.strip()))


def validate_phone(phone: str) -> bool:
    """
    Validate phone number format.
    
    Accepts an optional leading '+', spaces and hyphens as separators,
    and 7 to 15 digits in total (e.g. 9876543210, +91 98765-43210).
    
    Args:
        phone: Phone number to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not phone:
        return False
    
    if not re.match(r'^\+?[\d\s-]+$', phone.strip()):
        return False
    digits = re.sub(r'\D', '', phone)
    return 7 <= len(digits) <= 15


def validate_required_text(value: Optional[str], min_length: int = 1) -> bool:
    """
    Check that a required text field has content.
    
    Args:
        value: Text to check
        min_length: Minimum length after stripping whitespace
        
    Returns:
        True if present, False otherwise
    """
    if value is None:
        return False
    return len(value.strip()) >= min_length


def validate_order_id(value: Any) -> Optional[int]:
    """
    Parse an order id supplied by a caller.
    
    Args:
        value: Order id as int or numeric string
        
    Returns:
        Positive integer id, or None if the value is not a valid id
    """
    if isinstance(value, bool):
        return None
    try:
        order_id = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return order_id if order_id > 0 else None


def sanitize_user_input(text: str, max_length: int = 1000) -> str:
    """
    Sanitize user input text.
    
    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length
        
    Returns:
        Sanitized text
    """
    if not text:
        return ""
    
    # Remove potentially dangerous characters
    sanitized = re.sub(r'[<>"]', '', text)
    
    # Limit length
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
    
    return sanitized.strip()
