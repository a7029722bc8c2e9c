# src/printlite/adapters/formatting/__init__.py
"""
Formatting Adapters - Human-readable Output

This package contains formatting helpers for prices and order tracking.
"""

from printlite.adapters.formatting.formatter import (
    format_inr,
    format_price_breakdown,
    format_tracking,
)

__all__ = [
    "format_inr",
    "format_price_breakdown",
    "format_tracking",
]
