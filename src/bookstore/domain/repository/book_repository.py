"""Abstract repository for the Book aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON document store,
in-memory) live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money, RatingSummary


class BookRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique book ID."""

    @abstractmethod
    def get_by_id(self, book_id: str) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book in the catalog."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Insert a new book, or rewrite an existing book's catalog fields.

        For a book that is already stored, ``stock`` and ``rating`` keep
        their stored values: stock only moves through ``withdraw_stock`` /
        ``restore_stock`` and rating only through ``update_rating``.
        """

    @abstractmethod
    def update_price(self, book_id: str, price: Money) -> None:
        """Overwrite the book's price, leaving everything else alone."""

    @abstractmethod
    def withdraw_stock(self, book_id: str, quantity: int) -> bool:
        """Atomically decrement stock by *quantity* if at least that much is left.

        Equivalent to ``UPDATE book SET stock = stock - qty WHERE id = ?
        AND stock >= qty``. Returns False (and changes nothing) when the
        book is missing or has too little stock.
        """

    @abstractmethod
    def restore_stock(self, book_id: str, quantity: int) -> None:
        """Atomically increment stock by *quantity*."""

    @abstractmethod
    def update_rating(self, book_id: str, summary: RatingSummary) -> None:
        """Overwrite the book's rating fields, leaving everything else alone."""
