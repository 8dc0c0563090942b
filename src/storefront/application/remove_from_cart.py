"""Application service: Remove From Cart use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import CartChangeDTO
from storefront.application.identity import require_user
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class RemoveFromCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str | None, product_id: str) -> CartChangeDTO:
        user_id = require_user(user_id)

        line = self._cart_repo.get(user_id, product_id)
        if line is None:
            raise EntityNotFoundError("Item not found in cart")

        self._cart_repo.delete(user_id, product_id)
        logger.info("Cart line removed", user_id=user_id, product_id=product_id)

        product = self._product_repo.get_by_id(product_id)
        name = product.name if product is not None else product_id
        return CartChangeDTO(product_name=name, quantity=0)
