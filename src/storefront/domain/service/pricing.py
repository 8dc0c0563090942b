"""Domain service: Pricing.

Pure computation from (unit price, quantity) pairs to an OrderSummary.
Tax applies to the subtotal only; shipping is a flat fee.  The total is
summed from the already-rounded parts so it always reconciles.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderSummary
from storefront.domain.model.value_objects import Money

DEFAULT_SHIPPING_FEE = Money(Decimal("5.99"))
DEFAULT_TAX_RATE = Decimal("0.08")


class PricingCalculator:

    def __init__(
        self,
        shipping_fee: Money = DEFAULT_SHIPPING_FEE,
        tax_rate: Decimal = DEFAULT_TAX_RATE,
    ) -> None:
        if not tax_rate.is_finite():
            raise ValidationError(f"Tax rate must be finite, got {tax_rate}")
        if tax_rate < Decimal("0"):
            raise ValidationError(f"Tax rate cannot be negative, got {tax_rate}")
        self._shipping_fee = shipping_fee.rounded()
        self._tax_rate = tax_rate

    def summarize(self, lines: Iterable[tuple[Money, int]]) -> OrderSummary:
        """Compute subtotal, shipping, tax and total.

        Each line is ``(unit_price, quantity)``.  Rejecting an empty cart is
        the caller's job; an empty iterable simply prices to zero + shipping.
        """
        subtotal = Money.zero()
        for unit_price, quantity in lines:
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise ValidationError(f"Line quantity must be at least 1, got {quantity!r}")
            subtotal = subtotal + unit_price * quantity

        subtotal = subtotal.rounded()
        tax = subtotal.at_rate(self._tax_rate)
        return OrderSummary(
            subtotal=subtotal,
            shipping=self._shipping_fee,
            tax=tax,
            total=subtotal + self._shipping_fee + tax,
        )
