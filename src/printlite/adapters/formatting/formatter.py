# src/printlite/adapters/formatting/formatter.py
"""
Formatter - Text Formatting and Presentation

This module renders prices and order tracking information as plain text for
the storefront: INR amounts, the one-line price breakdown shown next to a
quote, and the order tracking summary shown to customers.

Files that USE this module:
- printlite.adapters.api.handlers (breakdown text for quotes and orders)
- printlite.app (tracking output on the command line)
- tests.test_formatter (unit tests)

Files that this module USES:
- printlite.domain.models (PriceBreakdown, PrintSettings, TrackingInfo)
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from printlite.domain.models import (
    ColorMode,
    OrderStatus,
    PaymentStatus,
    PriceBreakdown,
    PrintSettings,
    Sides,
    TrackingInfo,
)

STATUS_LABELS = {
    OrderStatus.PENDING: "Order received",
    OrderStatus.PROCESSING: "Processing",
    OrderStatus.PRINTING: "Printing",
    OrderStatus.SHIPPED: "Shipped",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}

PAYMENT_LABELS = {
    PaymentStatus.PENDING: "Payment pending",
    PaymentStatus.COMPLETED: "Paid",
    PaymentStatus.FAILED: "Payment failed",
}


def format_inr(amount: Decimal) -> str:
    """
    Format an amount in rupees.
    
    Args:
        amount: Amount in INR
        
    Returns:
        String like '₹94.40'
    """
    return f"₹{amount:.2f}"


def _describe_settings(settings: PrintSettings) -> str:
    color = "Color" if settings.color_mode is ColorMode.COLOR else "B&W"
    sides = "double-sided" if settings.sides is Sides.DOUBLE else "single-sided"
    return f"{color} {sides}, {settings.paper_type.value} paper, {settings.paper_size.value}"


def format_price_breakdown(breakdown: PriceBreakdown, settings: Optional[PrintSettings] = None) -> str:
    """
    Format a price breakdown as one line.
    
    Args:
        breakdown: Computed price
        settings: Print settings, to prefix the line with a short description
        
    Returns:
        Line like 'Pages: 10 × Copies: 2, Subtotal: ₹80.00, GST (18%): ₹14.40, Total: ₹94.40'
    """
    parts = []
    if settings is not None:
        parts.append(_describe_settings(settings))
    parts.append(f"Pages: {breakdown.page_count} × Copies: {breakdown.copies}")
    if breakdown.binding_fee > 0:
        parts.append(f"Binding: {format_inr(breakdown.binding_fee)}")
    parts.append(f"Subtotal: {format_inr(breakdown.subtotal)}")
    if breakdown.tax_included:
        parts.append(f"GST ({breakdown.tax_rate * 100:.0f}%): {format_inr(breakdown.tax_amount)}")
    parts.append(f"Total: {format_inr(breakdown.total)}")
    return ", ".join(parts)


def _fmt_elapsed(seconds: int) -> str:
    """
    Format elapsed time as 'Xh:YYmin' or 'Ymin'.
    
    Args:
        seconds: Elapsed time in seconds (will be clamped to >= 0)
        
    Returns:
        Formatted string like '2h:42min' or '5min'
    """
    if seconds < 0:
        seconds = 0
    minutes = seconds // 60
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h:{minutes:02d}min"
    return f"{minutes}min"


def format_tracking(info: TrackingInfo, now: Optional[datetime] = None) -> str:
    """
    Format the customer tracking view of an order.
    
    Args:
        info: Tracking projection of the order
        now: Current time for the 'ago' figure (defaults to now, UTC)
        
    Returns:
        Multi-line plain text summary
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elapsed = int((now - info.updated_at).total_seconds())

    return "\n".join([
        f"Order #{info.id}",
        f"Status: {STATUS_LABELS[info.status]}",
        f"Payment: {PAYMENT_LABELS[info.payment_status]}",
        f"Total: {format_inr(info.total)}",
        f"Placed: {info.created_at.strftime('%Y-%m-%d %H:%M UTC')}",
        f"Last update: {_fmt_elapsed(elapsed)} ago",
    ])
