"""Abstract repository for the Review aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.review import Review


class ReviewRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique review ID."""

    @abstractmethod
    def get_by_id(self, review_id: int) -> Review | None:
        """Return a review by its ID, or None if not found."""

    @abstractmethod
    def find_by_user_and_book(self, user_id: str, book_id: str) -> Review | None:
        """Return the user's review of the book, or None."""

    @abstractmethod
    def list_for_book(self, book_id: str) -> list[Review]:
        """Return every review of the book."""

    @abstractmethod
    def add(self, review: Review) -> None:
        """Persist a new review.

        Raises ConflictError if a review for the same (user, book) pair
        already exists.
        """

    @abstractmethod
    def save(self, review: Review) -> None:
        """Persist changes to an existing review."""

    @abstractmethod
    def delete(self, review_id: int) -> None:
        """Remove a review. Missing IDs are ignored."""
