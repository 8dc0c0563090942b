"""Application service: Clear Cart use case.  Idempotent."""

from __future__ import annotations

import structlog

from storefront.application.identity import require_user
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str | None) -> None:
        user_id = require_user(user_id)
        self._cart_repo.delete_all_for_user(user_id)
        logger.info("Cart cleared", user_id=user_id)
