"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings come from
``STOREFRONT_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.application.place_order import (
    DEFAULT_LOCK_TIMEOUT,
    DEFAULT_ORDER_ID_ATTEMPTS,
    PlaceOrderHandler,
)
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.service.pricing import (
    DEFAULT_SHIPPING_FEE,
    DEFAULT_TAX_RATE,
    PricingCalculator,
)
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _decimal(env: Mapping[str, str], name: str, default: Decimal) -> Decimal:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from None
    if not value.is_finite():
        raise ValidationError(f"{name} must be a finite number, got {raw!r}")
    if value < 0:
        raise ValidationError(f"{name} cannot be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:

    data_dir: Path = _DEFAULT_DATA_DIR
    shipping_fee: Money = DEFAULT_SHIPPING_FEE
    tax_rate: Decimal = DEFAULT_TAX_RATE
    order_id_attempts: int = DEFAULT_ORDER_ID_ATTEMPTS
    checkout_lock_timeout: float = DEFAULT_LOCK_TIMEOUT

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if env is None else env

        data_dir = env.get("STOREFRONT_DATA_DIR")
        attempts = _decimal(env, "STOREFRONT_ORDER_ID_ATTEMPTS", Decimal(DEFAULT_ORDER_ID_ATTEMPTS))
        if attempts < 1 or attempts != attempts.to_integral_value():
            raise ValidationError("STOREFRONT_ORDER_ID_ATTEMPTS must be a positive integer")

        return Settings(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            shipping_fee=Money(_decimal(env, "STOREFRONT_SHIPPING_FEE", DEFAULT_SHIPPING_FEE.amount)),
            tax_rate=_decimal(env, "STOREFRONT_TAX_RATE", DEFAULT_TAX_RATE),
            order_id_attempts=int(attempts),
            checkout_lock_timeout=float(
                _decimal(env, "STOREFRONT_CHECKOUT_LOCK_TIMEOUT", Decimal(str(DEFAULT_LOCK_TIMEOUT)))
            ),
        )


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def cart_repository(settings: Settings) -> JsonCartRepository:
    return JsonCartRepository(settings.data_dir / "cart.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def place_order_handler(settings: Settings) -> PlaceOrderHandler:
    return PlaceOrderHandler(
        cart_repo=cart_repository(settings),
        product_repo=product_repository(settings),
        order_repo=order_repository(settings),
        pricing=PricingCalculator(settings.shipping_fee, settings.tax_rate),
        max_id_attempts=settings.order_id_attempts,
        lock_timeout=settings.checkout_lock_timeout,
    )
