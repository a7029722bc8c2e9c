# src/printlite/adapters/persistence/json_store.py
"""
JSON File Order Store - Order Persistence on Disk

This module persists orders to a single JSON file so they survive restarts.
Orders are held in memory and the whole file is rewritten after every
mutation using an atomic temp-file + rename, so readers never see a
half-written file.

File layout:
    {"nextId": 4, "orders": [{...Order.to_dict()...}, ...]}

Files that USE this module:
- printlite.adapters.persistence (build_repository for ORDER_STORE=file)
- tests.test_persistence (unit tests)

Files that this module USES:
- printlite.adapters.persistence.base (OrderRepository interface)
- printlite.domain.models (Order to_dict/from_dict)
"""
from __future__ import annotations

import copy
import json
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from printlite.adapters.persistence.base import OrderRepository
from printlite.domain.models import Order

logger = logging.getLogger(__name__)


class JsonFileOrderRepository(OrderRepository):
    """Order repository backed by one JSON file."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store and load any persisted orders.

        Args:
            path: JSON file to read and write (parent directories are created)
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._orders: Dict[int, Order] = {}
        self._next_id = 1
        self._load()

    # -------------------- loading / saving --------------------

    def _load(self) -> None:
        """
        Load orders from disk.

        Handles corrupt files gracefully by:
        1. Backing up a file that is not valid UTF-8 JSON to *.json.corrupt and starting empty
        2. Skipping individual orders that do not match the schema
        3. Falling back to the highest loaded id when nextId is unreadable
        """
        if not self.path.exists():
            logger.info("No order file found at %s, starting empty", self.path)
            return

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            backup_path = self.path.with_suffix(".json.corrupt")
            shutil.copy2(self.path, backup_path)
            self.path.unlink()
            logger.warning("Order file corrupted (%s), backed up to %s: %s", type(e).__name__, backup_path, e)
            return

        if not isinstance(data, dict):
            logger.warning("Order file %s has unexpected structure, ignoring it", self.path)
            return

        records = data.get("orders", [])
        if not isinstance(records, list):
            logger.warning("Order file %s has no order list, ignoring its orders", self.path)
            records = []

        for raw in records:
            try:
                order = Order.from_dict(raw)
            except (KeyError, ValueError, TypeError, ArithmeticError) as e:
                logger.warning("Skipping unreadable order record %r: %s", raw.get("id") if isinstance(raw, dict) else raw, e)
                continue
            self._orders[order.id] = order

        highest = max(self._orders, default=0)
        try:
            stored_next = int(data.get("nextId", 1))
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable nextId %r in %s", data.get("nextId"), self.path)
            stored_next = 1
        self._next_id = max(stored_next, highest + 1)
        logger.info("Loaded %d orders from %s (next id %d)", len(self._orders), self.path, self._next_id)

    def _flush(self, orders: Dict[int, Order]) -> None:
        """
        Write the given orders to disk using an atomic write.

        Raises:
            RuntimeError: If the file cannot be written
        """
        payload = {
            "nextId": self._next_id,
            "orders": [o.to_dict() for o in sorted(orders.values(), key=lambda o: o.id)],
        }

        temp_fd, temp_path = tempfile.mkstemp(suffix=".json.tmp", dir=str(self.path.parent), text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise RuntimeError(f"Failed to save order file: {e}") from e

    # -------------------- OrderRepository --------------------
    # Mutations write a candidate mapping first and only replace the
    # in-memory state once it is on disk.

    def next_id(self) -> int:
        with self._lock:
            order_id = self._next_id
            self._next_id += 1
            return order_id

    def add(self, order: Order) -> None:
        with self._lock:
            if order.id in self._orders:
                raise ValueError(f"Order {order.id} already exists")
            candidate = dict(self._orders)
            candidate[order.id] = copy.deepcopy(order)
            self._next_id = max(self._next_id, order.id + 1)
            self._flush(candidate)
            self._orders = candidate

    def get(self, order_id: int) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return copy.deepcopy(order) if order is not None else None

    def save(self, order: Order) -> None:
        with self._lock:
            if order.id not in self._orders:
                raise KeyError(order.id)
            candidate = dict(self._orders)
            candidate[order.id] = copy.deepcopy(order)
            self._flush(candidate)
            self._orders = candidate

    def delete(self, order_id: int) -> bool:
        with self._lock:
            if order_id not in self._orders:
                return False
            candidate = {k: v for k, v in self._orders.items() if k != order_id}
            self._flush(candidate)
            self._orders = candidate
            return True

    def all(self) -> List[Order]:
        with self._lock:
            return [copy.deepcopy(o) for o in self._orders.values()]
