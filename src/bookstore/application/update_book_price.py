"""Application service: Update Book Price use case (admin only)."""

from __future__ import annotations

from bookstore.application.dto import BookDTO
from bookstore.domain.exceptions import EntityNotFoundError, ForbiddenError
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository


class UpdateBookPriceHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(self, principal: Principal, book_id: str, new_price: str) -> BookDTO:
        """Update a book's catalog price.

        This does NOT affect carts or orders, which both captured a price
        snapshot earlier.
        """
        if not principal.is_admin:
            raise ForbiddenError("Only admins can change prices")

        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError(f"Book with ID '{book_id}' not found")

        book.update_price(Money.of(new_price, book.price.currency))
        # Price only; stock may have moved since the read above.
        self._book_repo.update_price(book.id, book.price)
        return BookDTO.from_book(self._book_repo.get_by_id(book.id) or book)
