"""CartLine: one row of unconfirmed purchase intent.

A user's cart is simply the set of their CartLines; there is no cart
aggregate object.  Each line is unique per (user_id, product_id).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.model.value_objects import Quantity


@dataclass
class CartLine:

    user_id: str
    product_id: str
    quantity: Quantity
    added_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> tuple[str, str]:
        return self.user_id, self.product_id

    def increase(self, quantity: Quantity) -> None:
        """Repeat add of the same product: quantities accumulate."""
        self.quantity = self.quantity + quantity

    def change_quantity(self, quantity: Quantity) -> None:
        self.quantity = quantity
