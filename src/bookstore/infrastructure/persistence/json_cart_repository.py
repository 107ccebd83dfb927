"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from bookstore.domain.model.cart import Cart, CartLine
from bookstore.domain.model.value_objects import Money, Quantity
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.infrastructure.persistence.json_collection import JsonCollection


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_for_user(self, user_id: str) -> Cart | None:
        for raw in self._collection.load():
            if raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        with self._collection.update() as records:
            for i, raw in enumerate(records):
                if raw["user_id"] == cart.user_id:
                    records[i] = self._to_raw(cart)
                    break
            else:
                records.append(self._to_raw(cart))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "user_id": cart.user_id,
            "currency": cart.currency,
            "total_amount": str(cart.total.amount),
            "items": [
                {
                    "id": line.id,
                    "book_id": line.book_id,
                    "title": line.title,
                    "quantity": line.quantity.value,
                    "price": str(line.price.amount),
                }
                for line in cart.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        currency = raw.get("currency", "USD")
        # total_amount is stored for readers of the file; the aggregate
        # recomputes it from the lines.
        return Cart(
            user_id=raw["user_id"],
            currency=currency,
            lines=[
                CartLine(
                    id=i["id"],
                    book_id=i["book_id"],
                    title=i["title"],
                    quantity=Quantity(i["quantity"]),
                    price=Money(Decimal(i["price"]), currency),
                )
                for i in raw["items"]
            ],
        )
