"""Application service: Add To Cart use case.

Adding a product that is already in the cart increases that line's
quantity instead of creating a second line.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartChangeDTO
from storefront.application.identity import require_user
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str | None, product_id: str, quantity: int = 1) -> CartChangeDTO:
        user_id = require_user(user_id)
        requested = Quantity(quantity)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")

        line = self._cart_repo.get(user_id, product.id)
        if line is not None:
            line.increase(requested)
        else:
            line = CartLine(user_id=user_id, product_id=product.id, quantity=requested)
        self._cart_repo.save(line)

        logger.info(
            "Cart line added",
            user_id=user_id,
            product_id=product.id,
            quantity=line.quantity.value,
        )
        return CartChangeDTO(product_name=product.name, quantity=line.quantity.value)
