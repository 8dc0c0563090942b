"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.order import (
    CardType,
    Order,
    OrderLineSnapshot,
    OrderStatus,
    OrderSummary,
    PaymentInfo,
    PaymentMethod,
    ShippingInfo,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence._json_file import JsonFile


def _money(raw: str) -> Money:
    return Money(Decimal(raw))


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        records = self._file.load()
        if any(raw["order_id"] == order.order_id for raw in records):
            raise ConflictError(f"Order id already exists: {order.order_id}")
        records.append(self._to_raw(order))
        self._file.persist(records)

    def list_for_user(self, user_id: str) -> list[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["user_id"] == user_id
        ]
        return sorted(orders, key=lambda o: o.order_date, reverse=True)

    def get_for_user(self, order_id: str, user_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["order_id"] == order_id and raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        shipping = order.shipping_info
        payment = order.payment_info
        return {
            "order_id": order.order_id,
            "user_id": order.user_id,
            "status": order.status.value,
            "order_date": order.order_date.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "price": str(item.unit_price.amount),
                    "quantity": item.quantity.value,
                    "item_total": str(item.line_total.amount),
                }
                for item in order.items
            ],
            "shipping_info": {
                "city": shipping.city,
                "phone": shipping.phone,
                "full_name": shipping.full_name,
                "address": shipping.address,
                "state": shipping.state,
                "zip_code": shipping.zip_code,
            },
            "payment_info": None if payment is None else {
                "method": payment.method.value,
                "card_last4": payment.card_last4,
                "card_type": payment.card_type.value if payment.card_type else None,
            },
            "order_summary": {
                "subtotal": str(order.summary.subtotal.amount),
                "shipping": str(order.summary.shipping.amount),
                "tax": str(order.summary.tax.amount),
                "total": str(order.summary.total.amount),
            },
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        shipping = raw["shipping_info"]
        payment = raw.get("payment_info")
        summary = raw["order_summary"]
        return Order(
            order_id=raw["order_id"],
            user_id=raw["user_id"],
            items=tuple(
                OrderLineSnapshot(
                    product_id=i["product_id"],
                    name=i["name"],
                    unit_price=_money(i["price"]),
                    quantity=Quantity(i["quantity"]),
                )
                for i in raw["items"]
            ),
            shipping_info=ShippingInfo(
                city=shipping["city"],
                phone=shipping["phone"],
                full_name=shipping.get("full_name"),
                address=shipping.get("address"),
                state=shipping.get("state"),
                zip_code=shipping.get("zip_code"),
            ),
            summary=OrderSummary(
                subtotal=_money(summary["subtotal"]),
                shipping=_money(summary["shipping"]),
                tax=_money(summary["tax"]),
                total=_money(summary["total"]),
            ),
            payment_info=None if payment is None else PaymentInfo(
                method=PaymentMethod(payment["method"]),
                card_last4=payment.get("card_last4"),
                card_type=CardType(payment["card_type"]) if payment.get("card_type") else None,
            ),
            status=OrderStatus(raw["status"]),
            order_date=datetime.fromisoformat(raw["order_date"]),
        )
