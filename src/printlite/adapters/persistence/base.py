# src/printlite/adapters/persistence/base.py
"""
Base Repository Interface for Order Storage

This module defines the abstract base class for all order repositories.
It establishes the contract that every storage backend must follow.

Files that USE this module:
- printlite.adapters.persistence.memory_store (InMemoryOrderRepository)
- printlite.adapters.persistence.json_store (JsonFileOrderRepository)
- printlite.application.order_service (OrderService depends on the interface)

Files that this module USES:
- printlite.domain.models (Order)
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from printlite.domain.models import Order


class OrderRepository(ABC):
    """
    Storage for Order aggregates keyed by id.

    Implementations must be safe to call from several threads, must hand out
    unique ids from ``next_id`` even under concurrent use, and must return
    copies so callers cannot mutate stored orders in place.
    """

    @abstractmethod
    def next_id(self) -> int:
        """Reserve and return a new, never reused order id."""
        raise NotImplementedError

    @abstractmethod
    def add(self, order: Order) -> None:
        """Store a new order. Raises ValueError if the id already exists."""
        raise NotImplementedError

    @abstractmethod
    def get(self, order_id: int) -> Optional[Order]:
        """Return a copy of the order, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def save(self, order: Order) -> None:
        """Replace an existing order. Raises KeyError if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, order_id: int) -> bool:
        """Remove an order; return False if there was nothing to remove."""
        raise NotImplementedError

    @abstractmethod
    def all(self) -> List[Order]:
        """Return copies of every stored order (unordered)."""
        raise NotImplementedError
