"""Application service: Show Cart use case (query).

Joins each cart line with the product's *current* catalog data, newest
line first.  Checkout reads the cart through the same join.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartItemDTO
from storefront.application.identity import require_user
from storefront.domain.model.cart import CartLine
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


def load_cart(
    user_id: str,
    cart_repo: CartRepository,
    product_repo: ProductRepository,
) -> list[tuple[CartLine, Product]]:
    """Return (line, product) pairs, most recently added first.

    Lines whose product has disappeared from the catalog are skipped.
    """
    # Reverse first so lines sharing a timestamp still come out newest-first.
    lines = sorted(
        reversed(cart_repo.list_for_user(user_id)),
        key=lambda line: line.added_at,
        reverse=True,
    )
    joined: list[tuple[CartLine, Product]] = []
    for line in lines:
        product = product_repo.get_by_id(line.product_id)
        if product is None:
            logger.warning(
                "Skipping cart line for missing product",
                user_id=user_id,
                product_id=line.product_id,
            )
            continue
        joined.append((line, product))
    return joined


class ShowCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str | None) -> list[CartItemDTO]:
        user_id = require_user(user_id)
        return [
            CartItemDTO(
                product_id=product.id,
                name=product.name,
                price=str(product.price),
                description=product.description,
                category=product.category,
                quantity=line.quantity.value,
                line_total=str(product.price * line.quantity.value),
            )
            for line, product in load_cart(user_id, self._cart_repo, self._product_repo)
        ]
