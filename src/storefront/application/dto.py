"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the outer layers (CLI, response envelope) and the
application layer without exposing domain internals.  Money is rendered
as a formatted string, e.g. "$15.00".
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class CartItemDTO:
    """One cart line joined with current catalog data."""

    product_id: str
    name: str
    price: str
    description: str
    category: str
    quantity: int
    line_total: str


@dataclass(frozen=True)
class CartChangeDTO:
    """Result of add / update / remove: which product, how many now."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: str
    name: str
    unit_price: str
    quantity: int
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    order_id: str
    status: str
    order_date: str
    items: list[OrderLineDTO]
    shipping_info: dict[str, str]
    payment_info: dict[str, str] | None
    subtotal: str
    shipping: str
    tax: str
    total: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        shipping = order.shipping_info
        payment = order.payment_info
        return OrderDTO(
            order_id=order.order_id,
            status=order.status.value,
            order_date=order.order_date.isoformat(),
            items=[
                OrderLineDTO(
                    product_id=item.product_id,
                    name=item.name,
                    unit_price=str(item.unit_price),
                    quantity=item.quantity.value,
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            shipping_info={
                key: value
                for key, value in (
                    ("city", shipping.city),
                    ("phone", shipping.phone),
                    ("full_name", shipping.full_name),
                    ("address", shipping.address),
                    ("state", shipping.state),
                    ("zip_code", shipping.zip_code),
                )
                if value is not None
            },
            payment_info=None if payment is None else {
                key: value
                for key, value in (
                    ("method", payment.method.value),
                    ("card_last4", payment.card_last4),
                    ("card_type", payment.card_type.value if payment.card_type else None),
                )
                if value is not None
            },
            subtotal=str(order.summary.subtotal),
            shipping=str(order.summary.shipping),
            tax=str(order.summary.tax),
            total=str(order.summary.total),
        )


@dataclass(frozen=True)
class OrderHistoryDTO:
    """Output: one row of a user's order history."""

    order_id: str
    order_date: str
    status: str
    item_count: int
    total: str


@dataclass(frozen=True)
class OrderConfirmationDTO:
    """Output of checkout.

    ``cart_cleared`` is False on the degraded path: the order is placed
    but the cart could not be emptied afterwards.
    """

    order_id: str
    total: str
    item_count: int
    order_date: str
    cart_cleared: bool = True

    @property
    def message(self) -> str:
        if self.cart_cleared:
            return "Order placed successfully"
        return "Order placed successfully, but the cart could not be cleared"
