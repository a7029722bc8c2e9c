# src/printlite/adapters/persistence/__init__.py
"""
Persistence Adapters - Order Storage

This package contains adapters for persisting orders:
- In-memory storage (default)
- File-based storage (JSON)
"""

from __future__ import annotations

import logging
from typing import Optional

from printlite.adapters.persistence.base import OrderRepository
from printlite.adapters.persistence.json_store import JsonFileOrderRepository
from printlite.adapters.persistence.memory_store import InMemoryOrderRepository
from printlite.config import Settings

logger = logging.getLogger(__name__)


def build_repository(settings: Optional[Settings] = None) -> OrderRepository:
    """
    Create the order repository selected by ``ORDER_STORE``.
    
    Args:
        settings: Settings to read; defaults to the global settings
        
    Returns:
        OrderRepository instance
    """
    if settings is None:
        from printlite.config import settings as global_settings
        settings = global_settings

    if settings.order_store == "file":
        logger.info("Using JSON file order store: %s", settings.orders_file)
        return JsonFileOrderRepository(settings.orders_file)

    logger.info("Using in-memory order store")
    return InMemoryOrderRepository()


__all__ = [
    "OrderRepository",
    "InMemoryOrderRepository",
    "JsonFileOrderRepository",
    "build_repository",
]
