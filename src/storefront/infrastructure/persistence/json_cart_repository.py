"""JSON-file-backed implementation of CartRepository.

Records are kept in insertion order; a repeat add rewrites the record in
place, so a line keeps its original position and ``added_at``.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence._json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def list_for_user(self, user_id: str) -> list[CartLine]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["user_id"] == user_id
        ]

    def get(self, user_id: str, product_id: str) -> CartLine | None:
        for raw in self._file.load():
            if raw["user_id"] == user_id and raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def save(self, line: CartLine) -> None:
        records = self._file.load()
        for i, raw in enumerate(records):
            if (raw["user_id"], raw["product_id"]) == line.key:
                records[i] = self._to_raw(line)
                break
        else:
            records.append(self._to_raw(line))
        self._file.persist(records)

    def delete(self, user_id: str, product_id: str) -> None:
        records = self._file.load()
        kept = [
            raw for raw in records
            if (raw["user_id"], raw["product_id"]) != (user_id, product_id)
        ]
        if len(kept) != len(records):
            self._file.persist(kept)

    def delete_all_for_user(self, user_id: str) -> None:
        records = self._file.load()
        kept = [raw for raw in records if raw["user_id"] != user_id]
        if len(kept) != len(records):
            self._file.persist(kept)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "user_id": line.user_id,
            "product_id": line.product_id,
            "quantity": line.quantity.value,
            "added_at": line.added_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        return CartLine(
            user_id=raw["user_id"],
            product_id=raw["product_id"],
            quantity=Quantity(raw["quantity"]),
            added_at=datetime.fromisoformat(raw["added_at"]),
        )
