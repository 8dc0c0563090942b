"""Abstract repository for Order aggregate.

Orders are append-only: once added they are only ever read back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order.

        Raises ConflictError if an order with the same ``order_id`` exists.
        """

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return the user's orders, most recent ``order_date`` first."""

    @abstractmethod
    def get_for_user(self, order_id: str, user_id: str) -> Order | None:
        """Return the order only if it exists *and* belongs to ``user_id``."""
