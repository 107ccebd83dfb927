"""JSON-file-backed implementation of ReviewRepository.

(user_id, book_id) is a unique key: ``add`` checks it under the
collection lock so two concurrent submissions cannot both land.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from bookstore.domain.exceptions import ConflictError
from bookstore.domain.model.review import Review
from bookstore.domain.repository.review_repository import ReviewRepository
from bookstore.infrastructure.persistence.json_collection import JsonCollection


class JsonReviewRepository(ReviewRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- ReviewRepository interface -------------------------------------------

    def next_id(self) -> int:
        return self._next_id(self._collection.load())

    def get_by_id(self, review_id: int) -> Review | None:
        for raw in self._collection.load():
            if raw["id"] == review_id:
                return self._to_domain(raw)
        return None

    def find_by_user_and_book(self, user_id: str, book_id: str) -> Review | None:
        for raw in self._collection.load():
            if raw["user_id"] == user_id and raw["book_id"] == book_id:
                return self._to_domain(raw)
        return None

    def list_for_book(self, book_id: str) -> list[Review]:
        return [
            self._to_domain(raw)
            for raw in self._collection.load()
            if raw["book_id"] == book_id
        ]

    def add(self, review: Review) -> None:
        with self._collection.update() as records:
            for raw in records:
                if raw["user_id"] == review.user_id and raw["book_id"] == review.book_id:
                    raise ConflictError("You have already reviewed this book")
            review.id = self._next_id(records)
            records.append(self._to_raw(review))

    def save(self, review: Review) -> None:
        with self._collection.update() as records:
            for i, raw in enumerate(records):
                if raw["id"] == review.id:
                    records[i] = self._to_raw(review)
                    break
            else:
                records.append(self._to_raw(review))

    def delete(self, review_id: int) -> None:
        with self._collection.update() as records:
            records[:] = [raw for raw in records if raw["id"] != review_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _next_id(records: list[dict]) -> int:
        if not records:
            return 1
        return max(r["id"] for r in records) + 1

    @staticmethod
    def _to_raw(review: Review) -> dict:
        return {
            "id": review.id,
            "user_id": review.user_id,
            "book_id": review.book_id,
            "rating": review.rating,
            "title": review.title,
            "comment": review.comment,
            "is_verified_purchase": review.is_verified_purchase,
            "created_at": review.created_at.isoformat(),
            "updated_at": review.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Review:
        return Review(
            id=raw["id"],
            user_id=raw["user_id"],
            book_id=raw["book_id"],
            rating=raw["rating"],
            title=raw["title"],
            comment=raw["comment"],
            is_verified_purchase=raw.get("is_verified_purchase", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
