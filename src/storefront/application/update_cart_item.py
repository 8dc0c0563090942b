"""Application service: Update Cart Item use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import CartChangeDTO
from storefront.application.identity import require_user
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str | None, product_id: str, quantity: int) -> CartChangeDTO:
        """Overwrite the quantity of an existing line (no increment)."""
        user_id = require_user(user_id)
        new_quantity = Quantity(quantity)

        line = self._cart_repo.get(user_id, product_id)
        if line is None:
            raise EntityNotFoundError("Item not found in cart")

        line.change_quantity(new_quantity)
        self._cart_repo.save(line)

        logger.info(
            "Cart line updated",
            user_id=user_id,
            product_id=product_id,
            quantity=new_quantity.value,
        )
        product = self._product_repo.get_by_id(product_id)
        name = product.name if product is not None else product_id
        return CartChangeDTO(product_name=name, quantity=new_quantity.value)
