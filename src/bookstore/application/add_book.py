"""Application service: Add Book use case (admin only)."""

from __future__ import annotations

import structlog

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import BookDTO
from bookstore.domain.exceptions import ConflictError, ForbiddenError
from bookstore.domain.model.book import Book
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository

logger = structlog.get_logger(__name__)


class AddBookHandler:

    def __init__(self, book_repo: BookRepository, config: OrderingConfig) -> None:
        self._book_repo = book_repo
        self._config = config

    def handle(
        self,
        principal: Principal,
        title: str,
        authors: list[str],
        price: str,
        stock: int,
        categories: list[str] | None = None,
        isbn: str | None = None,
    ) -> BookDTO:
        """Add a new book to the catalog with its opening stock."""
        if not principal.is_admin:
            raise ForbiddenError("Only admins can add books")

        if isbn:
            for existing in self._book_repo.list_all():
                if existing.isbn == isbn.strip():
                    raise ConflictError(f"A book with ISBN {isbn} already exists")

        book = Book.create(
            book_id=self._book_repo.next_id(),
            title=title,
            authors=authors,
            price=Money.of(price, self._config.currency),
            stock=stock,
            categories=categories,
            isbn=isbn,
        )
        self._book_repo.save(book)

        logger.info("Book added", book_id=book.id, title=book.title, stock=book.stock)
        return BookDTO.from_book(book)
