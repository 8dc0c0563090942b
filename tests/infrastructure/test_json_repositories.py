"""Tests for the JSON-file-backed repositories (real file I/O in tmp_path)."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import (
    Order,
    OrderLineSnapshot,
    OrderSummary,
    PaymentInfo,
    ShippingInfo,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

BASE = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def _order(order_id: str, user_id: str = "u1", days: int = 0, payment: bool = True) -> Order:
    return Order.place(
        order_id=order_id,
        user_id=user_id,
        items=[
            OrderLineSnapshot("1", "Widget", Money.of("19.99"), Quantity(2)),
            OrderLineSnapshot("2", "Gadget", Money.of("5.00"), Quantity(1)),
        ],
        shipping_info=ShippingInfo.create("Phoenix", "555-0100", zip_code="85001"),
        summary=OrderSummary(
            Money.of("44.98"), Money.of("5.99"), Money.of("3.60"), Money.of("54.57")
        ),
        payment_info=PaymentInfo.create("apple-pay") if payment else None,
        order_date=BASE + timedelta(days=days),
    )


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        repo = JsonProductRepository(path)
        assert path.read_text(encoding="utf-8") == "[]"
        assert repo.list_all() == []

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(
            Product("1", "Widget", Money.of("19.99"), "A widget", "tools")
        )
        product = JsonProductRepository(path).get_by_id("1")
        assert product == Product("1", "Widget", Money.of("19.99"), "A widget", "tools")
        assert JsonProductRepository(path).get_by_id("2") is None


class TestJsonCartRepository:

    def test_save_is_upsert_keeping_position(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "cart.json")
        repo.save(CartLine("u1", "1", Quantity(1), added_at=BASE))
        repo.save(CartLine("u1", "2", Quantity(1), added_at=BASE))
        repo.save(CartLine("u1", "1", Quantity(4), added_at=BASE))

        lines = repo.list_for_user("u1")
        assert [(l.product_id, l.quantity.value) for l in lines] == [("1", 4), ("2", 1)]
        assert lines[0].added_at == BASE

    def test_get_and_delete(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "cart.json")
        repo.save(CartLine("u1", "1", Quantity(1)))
        repo.save(CartLine("u2", "1", Quantity(2)))

        repo.delete("u1", "1")
        assert repo.get("u1", "1") is None
        assert repo.get("u2", "1").quantity.value == 2

    def test_delete_all_for_user_is_idempotent(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "cart.json")
        repo.save(CartLine("u1", "1", Quantity(1)))
        repo.save(CartLine("u2", "1", Quantity(1)))
        repo.delete_all_for_user("u1")
        repo.delete_all_for_user("u1")
        assert repo.list_for_user("u1") == []
        assert len(repo.list_for_user("u2")) == 1


class TestJsonOrderRepository:

    def test_round_trip_preserves_snapshot(self, tmp_path):
        path = tmp_path / "orders.json"
        JsonOrderRepository(path).add(_order("ORD-20240315-11111"))

        order = JsonOrderRepository(path).get_for_user("ORD-20240315-11111", "u1")
        assert order == _order("ORD-20240315-11111")

    def test_stored_layout(self, tmp_path):
        path = tmp_path / "orders.json"
        JsonOrderRepository(path).add(_order("ORD-1", payment=False))
        [raw] = json.loads(path.read_text(encoding="utf-8"))
        assert raw["status"] == "pending"
        assert raw["payment_info"] is None
        assert raw["items"][0]["item_total"] == "39.98"
        assert raw["order_summary"] == {
            "subtotal": "44.98",
            "shipping": "5.99",
            "tax": "3.60",
            "total": "54.57",
        }

    def test_duplicate_id_is_conflict(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.add(_order("ORD-1"))
        with pytest.raises(ConflictError, match="already exists"):
            repo.add(_order("ORD-1", user_id="u2"))
        assert repo.get_for_user("ORD-1", "u2") is None

    def test_list_for_user_most_recent_first(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.add(_order("ORD-OLD", days=0))
        repo.add(_order("ORD-NEW", days=3))
        repo.add(_order("ORD-MID", days=1))
        repo.add(_order("ORD-OTHER", user_id="u2", days=9))
        assert [o.order_id for o in repo.list_for_user("u1")] == ["ORD-NEW", "ORD-MID", "ORD-OLD"]

    def test_get_for_user_enforces_ownership(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.add(_order("ORD-1", user_id="u2"))
        assert repo.get_for_user("ORD-1", "u1") is None
        assert repo.get_for_user("ORD-1", "u2") is not None
