"""Abstract repository for cart lines, keyed by (user_id, product_id)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[CartLine]:
        """Return the user's lines in the order they were first added."""

    @abstractmethod
    def get(self, user_id: str, product_id: str) -> CartLine | None:
        """Return one line, or None if the user has no such product in the cart."""

    @abstractmethod
    def save(self, line: CartLine) -> None:
        """Insert a new line or overwrite the existing one with the same key."""

    @abstractmethod
    def delete(self, user_id: str, product_id: str) -> None:
        """Remove one line.  Missing lines are ignored."""

    @abstractmethod
    def delete_all_for_user(self, user_id: str) -> None:
        """Remove every line the user has.  Idempotent."""
