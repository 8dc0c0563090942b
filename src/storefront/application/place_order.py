"""Application service: Place Order (checkout) use case.

Converts the user's live cart into a committed order, then empties the
cart.  The two writes are an ordered two-step protocol without a shared
transaction:

1. ``order_repo.add`` is the durable commitment.  Any failure here aborts
   the checkout and leaves the cart untouched.  An order-id collision is
   retried with a freshly generated id, a bounded number of times.
2. ``cart_repo.delete_all_for_user`` is cleanup.  If it fails the order
   stays placed; the failure is logged and reported as a degraded success
   (``cart_cleared=False``).  Nothing un-places an order.

Steps 1 and 2 run under the user's checkout lock so a double submit cannot
turn one cart into two orders.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog

from storefront.application.dto import OrderConfirmationDTO
from storefront.application.identity import require_user
from storefront.application.locks import UserLockRegistry, default_registry
from storefront.application.show_cart import load_cart
from storefront.domain.exceptions import ConflictError, InvalidStateError
from storefront.domain.model.order import (
    Order,
    OrderLineSnapshot,
    PaymentInfo,
    ShippingInfo,
)
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.order_ids import OrderIdGenerator, utc_now
from storefront.domain.service.pricing import PricingCalculator

logger = structlog.get_logger(__name__)

DEFAULT_ORDER_ID_ATTEMPTS = 5
DEFAULT_LOCK_TIMEOUT = 10.0


class PlaceOrderHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        pricing: PricingCalculator | None = None,
        id_generator: Callable[[], str] | None = None,
        locks: UserLockRegistry | None = None,
        clock: Callable[[], datetime] = utc_now,
        max_id_attempts: int = DEFAULT_ORDER_ID_ATTEMPTS,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._pricing = pricing or PricingCalculator()
        self._id_generator = id_generator or OrderIdGenerator(clock)
        self._locks = default_registry if locks is None else locks
        self._clock = clock
        self._max_id_attempts = max(1, max_id_attempts)
        self._lock_timeout = lock_timeout

    def handle(
        self,
        user_id: str | None,
        shipping_info: ShippingInfo,
        payment_info: PaymentInfo | None = None,
    ) -> OrderConfirmationDTO:
        user_id = require_user(user_id)

        with self._locks.hold(user_id, timeout=self._lock_timeout):
            order = self._commit_order(user_id, shipping_info, payment_info)
            cart_cleared = self._clear_cart(user_id, order.order_id)

        return OrderConfirmationDTO(
            order_id=order.order_id,
            total=str(order.total),
            item_count=order.item_count,
            order_date=order.order_date.isoformat(),
            cart_cleared=cart_cleared,
        )

    # --- Phase 1: the order ---------------------------------------------------

    def _commit_order(
        self,
        user_id: str,
        shipping_info: ShippingInfo,
        payment_info: PaymentInfo | None,
    ) -> Order:
        cart = load_cart(user_id, self._cart_repo, self._product_repo)
        if not cart:
            raise InvalidStateError("Cart is empty")

        items = [
            OrderLineSnapshot(
                product_id=product.id,
                name=product.name,
                unit_price=product.price,  # <-- price snapshot
                quantity=line.quantity,
            )
            for line, product in cart
        ]
        summary = self._pricing.summarize(
            (item.unit_price, item.quantity.value) for item in items
        )
        order_date = self._clock()

        for attempt in range(1, self._max_id_attempts + 1):
            order = Order.place(
                order_id=self._id_generator(),
                user_id=user_id,
                items=items,
                shipping_info=shipping_info,
                summary=summary,
                payment_info=payment_info,
                order_date=order_date,
            )
            try:
                self._order_repo.add(order)
            except ConflictError:
                logger.warning(
                    "Order id collision, regenerating",
                    user_id=user_id,
                    order_id=order.order_id,
                    attempt=attempt,
                )
                continue

            logger.info(
                "Order placed",
                user_id=user_id,
                order_id=order.order_id,
                total=str(order.total),
                item_count=order.item_count,
            )
            return order

        raise ConflictError(
            f"Could not allocate a unique order id after {self._max_id_attempts} attempts"
        )

    # --- Phase 2: cleanup -----------------------------------------------------

    def _clear_cart(self, user_id: str, order_id: str) -> bool:
        try:
            self._cart_repo.delete_all_for_user(user_id)
        except Exception:
            # The order is committed; report degraded success instead of failing.
            logger.exception(
                "Cart clear failed after order was placed",
                user_id=user_id,
                order_id=order_id,
            )
            return False
        return True
