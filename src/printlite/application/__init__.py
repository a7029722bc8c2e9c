# src/printlite/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic:
pricing, print-option parsing and the order lifecycle.
"""

from printlite.application.pricing import PricingEngine, compute_price, pricing_engine
from printlite.application.print_options import parse_print_settings
from printlite.application.order_service import OrderService

__all__ = [
    "PricingEngine",
    "pricing_engine",
    "compute_price",
    "parse_print_settings",
    "OrderService",
]
