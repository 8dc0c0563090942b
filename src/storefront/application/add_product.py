"""Application service: Add Product use case (catalog seeding)."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        description: str = "",
        category: str = "",
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        # Next numeric id after the highest one in the catalog
        numeric_ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price),
            description=description.strip(),
            category=category.strip(),
        )
        self._product_repo.save(product)
        return product
