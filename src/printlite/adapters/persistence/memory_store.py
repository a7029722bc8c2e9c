# src/printlite/adapters/persistence/memory_store.py
"""
In-Memory Order Store

Keeps orders in a dict keyed by id. Used by default and in tests; contents
are lost when the process exits.

Files that USE this module:
- printlite.adapters.persistence (build_repository for ORDER_STORE=memory)
- tests.* (order service and handler tests)

Files that this module USES:
- printlite.adapters.persistence.base (OrderRepository interface)
- printlite.domain.models (Order)
"""
from __future__ import annotations

import copy
import itertools
import threading
from typing import Dict, List, Optional

from printlite.adapters.persistence.base import OrderRepository
from printlite.domain.models import Order


class InMemoryOrderRepository(OrderRepository):
    """Thread-safe dict-backed order repository."""

    def __init__(self, start_id: int = 1):
        self._orders: Dict[int, Order] = {}
        self._ids = itertools.count(start_id)
        self._lock = threading.RLock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def add(self, order: Order) -> None:
        with self._lock:
            if order.id in self._orders:
                raise ValueError(f"Order {order.id} already exists")
            self._orders[order.id] = copy.deepcopy(order)

    def get(self, order_id: int) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return copy.deepcopy(order) if order is not None else None

    def save(self, order: Order) -> None:
        with self._lock:
            if order.id not in self._orders:
                raise KeyError(order.id)
            self._orders[order.id] = copy.deepcopy(order)

    def delete(self, order_id: int) -> bool:
        with self._lock:
            return self._orders.pop(order_id, None) is not None

    def all(self) -> List[Order]:
        with self._lock:
            return [copy.deepcopy(o) for o in self._orders.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
