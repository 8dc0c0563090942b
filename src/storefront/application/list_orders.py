"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderHistoryDTO
from storefront.application.identity import require_user
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str | None) -> list[OrderHistoryDTO]:
        """The caller's order history, most recent first."""
        user_id = require_user(user_id)
        return [
            OrderHistoryDTO(
                order_id=order.order_id,
                order_date=order.order_date.isoformat(),
                status=order.status.value,
                item_count=order.item_count,
                total=str(order.total),
            )
            for order in self._order_repo.list_for_user(user_id)
        ]
