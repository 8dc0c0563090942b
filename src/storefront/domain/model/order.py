"""Order aggregate: the immutable record produced by checkout.

An Order owns value copies of what was in the cart (name and price frozen
at checkout time), the shipping and optional payment details, and the
computed summary.  Nothing in the cart ever points back into an order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    APPLE_PAY = "apple-pay"
    # Older clients send the hyphenated spelling; stored as received.
    CREDIT_CARD_LEGACY = "credit-card"


class CardType(Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"
    AMERICAN_EXPRESS = "american_express"
    DISCOVER = "discover"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ShippingInfo:
    """Where the order goes.  City and phone are mandatory."""

    city: str
    phone: str
    full_name: str | None = None
    address: str | None = None
    state: str | None = None
    zip_code: str | None = None

    @staticmethod
    def create(
        city: str | None,
        phone: str | None,
        full_name: str | None = None,
        address: str | None = None,
        state: str | None = None,
        zip_code: str | None = None,
    ) -> ShippingInfo:
        city, phone = _clean(city), _clean(phone)
        if city is None:
            raise ValidationError("Shipping city is required")
        if phone is None:
            raise ValidationError("Shipping phone is required")
        return ShippingInfo(
            city=city,
            phone=phone,
            full_name=_clean(full_name),
            address=_clean(address),
            state=_clean(state),
            zip_code=_clean(zip_code),
        )


@dataclass(frozen=True)
class PaymentInfo:
    """Recorded payment details.  Never checked against a processor."""

    method: PaymentMethod
    card_last4: str | None = None
    card_type: CardType | None = None

    @staticmethod
    def create(
        method: str,
        card_last4: str | None = None,
        card_type: str | None = None,
    ) -> PaymentInfo:
        try:
            parsed_method = PaymentMethod(method)
        except ValueError:
            raise ValidationError(f"Unsupported payment method: '{method}'") from None

        card_last4 = _clean(card_last4)
        if card_last4 is not None and not (len(card_last4) == 4 and card_last4.isdigit()):
            raise ValidationError("Card last4 must be exactly 4 digits")

        parsed_type = None
        if card_type:
            try:
                parsed_type = CardType(card_type)
            except ValueError:
                raise ValidationError(f"Unsupported card type: '{card_type}'") from None

        return PaymentInfo(method=parsed_method, card_last4=card_last4, card_type=parsed_type)


@dataclass(frozen=True)
class OrderLineSnapshot:
    """Frozen copy of a cart line and the catalog data it had at checkout."""

    product_id: str
    name: str
    unit_price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderSummary:
    """Monetary totals, each rounded to cents.

    Invariant: ``total == subtotal + shipping + tax``.
    """

    subtotal: Money
    shipping: Money
    tax: Money
    total: Money

    def __post_init__(self) -> None:
        if self.subtotal + self.shipping + self.tax != self.total:
            raise ValidationError(
                f"Order total {self.total} does not equal "
                f"{self.subtotal} + {self.shipping} + {self.tax}"
            )


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders; it enforces the invariants.
    The ``__init__`` stays plain so repositories can reconstitute stored
    orders without re-validating them.
    """

    order_id: str
    user_id: str
    items: tuple[OrderLineSnapshot, ...]
    shipping_info: ShippingInfo
    summary: OrderSummary
    payment_info: PaymentInfo | None = None
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def place(
        order_id: str,
        user_id: str,
        items: list[OrderLineSnapshot],
        shipping_info: ShippingInfo,
        summary: OrderSummary,
        payment_info: PaymentInfo | None = None,
        order_date: datetime | None = None,
    ) -> Order:
        """Build a new pending order, enforcing all invariants."""
        if not order_id:
            raise ValidationError("Order id is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        subtotal = Money.zero()
        for item in items:
            subtotal = subtotal + item.line_total
        if subtotal.rounded() != summary.subtotal:
            raise ValidationError(
                f"Order subtotal {summary.subtotal} does not match items ({subtotal.rounded()})"
            )

        return Order(
            order_id=order_id,
            user_id=user_id,
            items=tuple(items),
            shipping_info=shipping_info,
            summary=summary,
            payment_info=payment_info,
            status=OrderStatus.PENDING,
            order_date=order_date or datetime.now(timezone.utc),
        )

    @property
    def total(self) -> Money:
        return self.summary.total

    @property
    def item_count(self) -> int:
        """Number of distinct lines, not units."""
        return len(self.items)
