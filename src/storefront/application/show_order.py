"""Application service: Show Order use case (query).

Ownership is part of the lookup itself, so an order id that belongs to
someone else is indistinguishable from one that does not exist.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.identity import require_user
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str | None, order_id: str) -> OrderDTO:
        user_id = require_user(user_id)
        order = self._order_repo.get_for_user(order_id, user_id)
        if order is None:
            raise EntityNotFoundError("Order not found")
        return OrderDTO.from_order(order)
