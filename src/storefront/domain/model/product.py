"""Product: the catalog entry a cart line points at.

The catalog is owned elsewhere; the storefront only needs to look a product
up by id and read its current name and price.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because a price change is a legitimate
    mutation on the catalog side.  Orders never see it: they hold a
    snapshot taken at checkout.
    """

    id: str
    name: str
    price: Money
    description: str = ""
    category: str = ""

    def update_price(self, new_price: Money) -> None:
        self.price = new_price
