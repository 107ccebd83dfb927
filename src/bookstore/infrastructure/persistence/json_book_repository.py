"""JSON-file-backed implementation of BookRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money, RatingSummary
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.infrastructure.persistence.json_collection import JsonCollection


class JsonBookRepository(BookRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- BookRepository interface ---------------------------------------------

    def next_id(self) -> str:
        # Non-numeric ids (imported documents) are skipped.
        numeric = [int(b["id"]) for b in self._collection.load() if str(b["id"]).isdigit()]
        return str(max(numeric, default=0) + 1)

    def get_by_id(self, book_id: str) -> Book | None:
        for raw in self._collection.load():
            if raw["id"] == book_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Book]:
        return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, book: Book) -> None:
        with self._collection.update() as records:
            for i, raw in enumerate(records):
                if raw["id"] == book.id:
                    updated = self._to_raw(book)
                    updated["stock"] = raw["stock"]
                    updated["rating"] = raw.get("rating", updated["rating"])
                    records[i] = updated
                    break
            else:
                records.append(self._to_raw(book))

    def update_price(self, book_id: str, price: Money) -> None:
        with self._collection.update() as records:
            for raw in records:
                if raw["id"] == book_id:
                    raw["price"] = {"amount": str(price.amount), "currency_code": price.currency}
                    break

    def withdraw_stock(self, book_id: str, quantity: int) -> bool:
        with self._collection.update() as records:
            for raw in records:
                if raw["id"] == book_id:
                    if raw["stock"] < quantity:
                        return False
                    raw["stock"] -= quantity
                    return True
            return False

    def restore_stock(self, book_id: str, quantity: int) -> None:
        with self._collection.update() as records:
            for raw in records:
                if raw["id"] == book_id:
                    raw["stock"] += quantity
                    break

    def update_rating(self, book_id: str, summary: RatingSummary) -> None:
        with self._collection.update() as records:
            for raw in records:
                if raw["id"] == book_id:
                    raw["rating"] = {"average": summary.average, "count": summary.count}
                    break

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(book: Book) -> dict:
        return {
            "id": book.id,
            "title": book.title,
            "authors": list(book.authors),
            "price": {
                "amount": str(book.price.amount),
                "currency_code": book.price.currency,
            },
            "stock": book.stock,
            "rating": {"average": book.rating.average, "count": book.rating.count},
            "categories": list(book.categories),
            "isbn": book.isbn,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Book:
        rating = raw.get("rating") or {}
        return Book(
            id=raw["id"],
            title=raw["title"],
            authors=list(raw["authors"]),
            price=Money(
                Decimal(raw["price"]["amount"]),
                raw["price"].get("currency_code", "USD"),
            ),
            stock=raw["stock"],
            rating=RatingSummary(
                average=float(rating.get("average", 0.0)),
                count=int(rating.get("count", 0)),
            ),
            categories=list(raw.get("categories") or ["Uncategorized"]),
            isbn=raw.get("isbn"),
        )
