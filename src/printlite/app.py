# src/printlite/app.py
"""
Application Entry Point - Composition Root

This module wires all dependencies (settings, order repository, pricing
engine, order service and request handlers) and provides a small one-shot
command line for quotes and order lookups.

Usage:
    python -m printlite quote '{"pages": 10, "copies": 2, "printType": "color"}'
    python -m printlite track 12
    python -m printlite orders [status]

Files that USE this module:
- printlite.__main__ (python -m printlite)

Files that this module USES:
- printlite.shared.logging_conf (setup_logging for logging configuration)
- printlite.config (settings for configuration management)
- printlite.adapters.persistence (build_repository)
- printlite.application.pricing (PricingEngine)
- printlite.application.order_service (OrderService)
- printlite.adapters.api.handlers (OrderHandlers)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import json  # Parse command payloads and print responses
import logging  # Standard library for logging messages and errors
import sys  # Command-line arguments
from dataclasses import dataclass  # Container for the wired components
from typing import List, Optional

from printlite.shared.logging_conf import setup_logging  # Configure logging with file rotation
from printlite.config import Settings
from printlite.adapters.persistence import OrderRepository, build_repository
from printlite.application.pricing import PricingEngine
from printlite.application.order_service import OrderService
from printlite.adapters.api.handlers import OrderHandlers

logger = logging.getLogger(__name__)

USAGE = (
    "Usage:\n"
    "  printlite quote '<json>'     - quick price quote (no tax)\n"
    "  printlite track <order-id>   - order tracking summary\n"
    "  printlite orders [status]    - list orders, newest first\n"
)


@dataclass
class PrintLiteApp:
    """All wired components of a running PrintLite core."""
    settings: Settings
    repository: OrderRepository
    pricing: PricingEngine
    orders: OrderService
    handlers: OrderHandlers


def create_app(settings: Optional[Settings] = None, repository: Optional[OrderRepository] = None) -> PrintLiteApp:
    """
    Build the application from settings.

    Args:
        settings: Settings to use (defaults to the global settings)
        repository: Order storage override (defaults to the one ORDER_STORE selects)

    Returns:
        PrintLiteApp with every component wired
    """
    if settings is None:
        from printlite.config import settings as global_settings
        settings = global_settings

    if repository is None:
        repository = build_repository(settings)
    pricing = PricingEngine(binding_per_copy=settings.binding_per_copy)
    orders = OrderService(
        repository,
        pricing=pricing,
        enforce_transitions=settings.enforce_status_transitions,
    )
    handlers = OrderHandlers(orders, pricing, strict_options=settings.strict_print_options)

    logger.info(
        "PrintLite ready: store=%s, binding_per_copy=%s, strict_options=%s, enforce_transitions=%s",
        settings.order_store,
        settings.binding_per_copy,
        settings.strict_print_options,
        settings.enforce_status_transitions,
    )
    return PrintLiteApp(settings=settings, repository=repository, pricing=pricing, orders=orders, handlers=handlers)


def _print_response(response: dict) -> int:
    print(json.dumps(response, ensure_ascii=False, indent=2))
    return 0 if response.get("success") else 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one command and print its JSON response.

    Returns:
        Process exit code (0 on success, 1 on a failed request, 2 on usage errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    from printlite.config import settings

    setup_logging(
        level=settings.log_level_value,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_stdout=settings.log_stdout,
    )

    if not argv:
        print(USAGE, end="")
        return 2

    app = create_app(settings)
    cmd, args = argv[0].strip().lower(), argv[1:]

    if cmd == "quote" and len(args) == 1:
        try:
            payload = json.loads(args[0])
        except json.JSONDecodeError as e:
            print(f"ERR: quote payload is not valid JSON: {e}", file=sys.stderr)
            return 2
        if not isinstance(payload, dict):
            print("ERR: quote payload must be a JSON object", file=sys.stderr)
            return 2
        return _print_response(app.handlers.quote(payload))

    if cmd == "track" and len(args) == 1:
        return _print_response(app.handlers.track(args[0]))

    if cmd == "orders" and len(args) <= 1:
        status = args[0] if args else None
        return _print_response(app.handlers.list_orders(status=status))

    print(USAGE, end="", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
