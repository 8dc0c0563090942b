"""Integration tests for the PlaceOrder (checkout) use case."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from structlog.testing import capture_logs

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.locks import UserLockRegistry
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import (
    ConflictError,
    InvalidStateError,
    UnauthenticatedError,
)
from storefront.domain.model.order import OrderStatus, PaymentInfo, PaymentMethod, ShippingInfo
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    FailingClearCartRepository,
    FakeCartRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FixedIds,
    SteppingClock,
)

SHIPPING = ShippingInfo.create(city="Phoenix", phone="555-0100")


def _setup(cart_repo: FakeCartRepository | None = None, ids: FixedIds | None = None, **options):
    products = [
        Product(id="1", name="Widget", price=Money.of("19.99")),
        Product(id="2", name="Gadget", price=Money.of("5.00")),
    ]
    cart_repo = cart_repo or FakeCartRepository()
    product_repo = FakeProductRepository(products)
    order_repo = FakeOrderRepository()
    options.setdefault("locks", UserLockRegistry())
    handler = PlaceOrderHandler(
        cart_repo=cart_repo,
        product_repo=product_repo,
        order_repo=order_repo,
        id_generator=ids or FixedIds("ORD-20240315-11111", "ORD-20240315-22222"),
        clock=SteppingClock(),
        **options,
    )
    return handler, cart_repo, product_repo, order_repo


def _fill_reference_cart(cart_repo, product_repo, user_id: str = "u1") -> None:
    add = AddToCartHandler(cart_repo, product_repo)
    add.handle(user_id, "1", 2)
    add.handle(user_id, "2", 1)


class TestPlaceOrderHappyPath:

    def test_confirmation_payload(self):
        handler, cart_repo, product_repo, _ = _setup()
        _fill_reference_cart(cart_repo, product_repo)

        confirmation = handler.handle("u1", SHIPPING)

        assert confirmation.order_id == "ORD-20240315-11111"
        assert confirmation.total == "$54.57"
        assert confirmation.item_count == 2
        assert confirmation.order_date == "2024-03-15T12:00:00+00:00"
        assert confirmation.cart_cleared is True
        assert confirmation.message == "Order placed successfully"

    def test_persists_exactly_one_order_matching_cart(self):
        handler, cart_repo, product_repo, order_repo = _setup()
        _fill_reference_cart(cart_repo, product_repo)

        handler.handle("u1", SHIPPING)

        [order] = order_repo.all()
        assert order.user_id == "u1"
        assert order.status == OrderStatus.PENDING
        assert sorted((i.product_id, i.name, i.quantity.value) for i in order.items) == [
            ("1", "Widget", 2),
            ("2", "Gadget", 1),
        ]
        assert order.summary.subtotal == Money.of("44.98")
        assert order.summary.shipping == Money.of("5.99")
        assert order.summary.tax == Money.of("3.60")
        assert order.shipping_info.city == "Phoenix"

    def test_cart_is_empty_afterwards(self):
        handler, cart_repo, product_repo, _ = _setup()
        _fill_reference_cart(cart_repo, product_repo)
        handler.handle("u1", SHIPPING)
        assert cart_repo.list_for_user("u1") == []

    def test_other_users_cart_untouched(self):
        handler, cart_repo, product_repo, _ = _setup()
        _fill_reference_cart(cart_repo, product_repo, "u1")
        _fill_reference_cart(cart_repo, product_repo, "u2")
        handler.handle("u1", SHIPPING)
        assert len(cart_repo.list_for_user("u2")) == 2

    def test_records_payment_info(self):
        handler, cart_repo, product_repo, order_repo = _setup()
        _fill_reference_cart(cart_repo, product_repo)
        handler.handle("u1", SHIPPING, PaymentInfo.create("paypal"))
        assert order_repo.all()[0].payment_info.method is PaymentMethod.PAYPAL


class TestPlaceOrderPriceLock:

    def test_later_price_change_does_not_touch_order(self):
        handler, cart_repo, product_repo, order_repo = _setup()
        _fill_reference_cart(cart_repo, product_repo)
        handler.handle("u1", SHIPPING)

        product_repo.get_by_id("1").update_price(Money.of("99.99"))

        order = order_repo.get_for_user("ORD-20240315-11111", "u1")
        assert order.total == Money.of("54.57")
        assert {i.name: i.unit_price for i in order.items}["Widget"] == Money.of("19.99")


class TestPlaceOrderValidation:

    def test_empty_cart_rejected_and_no_order_created(self):
        handler, _, _, order_repo = _setup()
        with pytest.raises(InvalidStateError, match="Cart is empty"):
            handler.handle("u1", SHIPPING)
        assert order_repo.all() == []
        assert order_repo.add_calls == 0

    def test_requires_identity(self):
        handler, cart_repo, product_repo, order_repo = _setup()
        _fill_reference_cart(cart_repo, product_repo)
        with pytest.raises(UnauthenticatedError):
            handler.handle(None, SHIPPING)
        assert order_repo.all() == []


class TestPlaceOrderIdCollision:

    def test_collision_regenerates_once(self):
        ids = FixedIds("ORD-20240315-11111", "ORD-20240315-11111", "ORD-20240315-33333")
        handler, cart_repo, product_repo, order_repo = _setup(ids=ids)

        _fill_reference_cart(cart_repo, product_repo)
        handler.handle("u1", SHIPPING)

        _fill_reference_cart(cart_repo, product_repo)
        with capture_logs() as logs:
            confirmation = handler.handle("u1", SHIPPING)

        assert confirmation.order_id == "ORD-20240315-33333"
        assert ids.calls == 3
        assert order_repo.add_calls == 3
        assert len(order_repo.all()) == 2
        assert [e["event"] for e in logs if e["log_level"] == "warning"] == [
            "Order id collision, regenerating"
        ]

    def test_exhausting_attempts_is_fatal_and_keeps_cart(self):
        ids = FixedIds(*(["ORD-20240315-11111"] * 4))
        handler, cart_repo, product_repo, order_repo = _setup(ids=ids, max_id_attempts=3)
        _fill_reference_cart(cart_repo, product_repo)
        handler.handle("u1", SHIPPING)

        _fill_reference_cart(cart_repo, product_repo)
        with pytest.raises(ConflictError, match="after 3 attempts"):
            handler.handle("u1", SHIPPING)

        assert len(order_repo.all()) == 1
        assert len(cart_repo.list_for_user("u1")) == 2


class TestPlaceOrderDegradedSuccess:

    def test_cart_clear_failure_keeps_order(self):
        handler, cart_repo, product_repo, order_repo = _setup(
            cart_repo=FailingClearCartRepository()
        )
        _fill_reference_cart(cart_repo, product_repo)

        with capture_logs() as logs:
            confirmation = handler.handle("u1", SHIPPING)

        assert confirmation.cart_cleared is False
        assert "could not be cleared" in confirmation.message
        assert len(order_repo.all()) == 1
        errors = [e for e in logs if e["log_level"] == "error"]
        assert errors[0]["event"] == "Cart clear failed after order was placed"
        assert errors[0]["order_id"] == confirmation.order_id


class TestPlaceOrderSerialization:

    def test_concurrent_checkouts_for_same_user_produce_one_order(self):
        ids = FixedIds("ORD-20240315-11111", "ORD-20240315-22222")
        handler, cart_repo, product_repo, order_repo = _setup(ids=ids)
        _fill_reference_cart(cart_repo, product_repo)

        barrier = threading.Barrier(2)

        def checkout():
            barrier.wait()
            try:
                return handler.handle("u1", SHIPPING)
            except InvalidStateError as exc:
                return exc

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda _: checkout(), range(2)))

        assert len(order_repo.all()) == 1
        assert sum(isinstance(r, InvalidStateError) for r in results) == 1

    def test_lock_timeout_is_a_conflict(self):
        locks = UserLockRegistry()
        handler, cart_repo, product_repo, _ = _setup(locks=locks, lock_timeout=0.01)
        _fill_reference_cart(cart_repo, product_repo)

        with locks.hold("u1", timeout=1):
            with pytest.raises(ConflictError, match="already in progress"):
                handler.handle("u1", SHIPPING)
