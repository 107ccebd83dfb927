"""Application service: Add To Cart use case."""

from __future__ import annotations

import structlog

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import CartDTO
from bookstore.application.get_cart import load_or_create_cart
from bookstore.domain.exceptions import EntityNotFoundError, InsufficientStockError
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        book_repo: BookRepository,
        config: OrderingConfig,
    ) -> None:
        self._cart_repo = cart_repo
        self._book_repo = book_repo
        self._config = config

    def handle(self, principal: Principal, book_id: str, quantity: int) -> CartDTO:
        """Add a book to the caller's cart.

        Adding a book that is already in the cart raises that line's
        quantity and keeps the price it was first added at.
        """
        qty = Quantity(quantity)

        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError(f"Book with ID '{book_id}' not found")

        cart = load_or_create_cart(self._cart_repo, principal.id, self._config.currency)

        if self._config.check_stock_on_cart_update:
            existing = cart.find_line_for_book(book.id)
            wanted = qty.value + (existing.quantity.value if existing else 0)
            if wanted > book.stock:
                raise InsufficientStockError(
                    book_id=book.id,
                    title=book.title,
                    requested=wanted,
                    available=book.stock,
                )

        line = cart.add_item(book, qty.value)
        self._cart_repo.save(cart)

        logger.info(
            "Cart item added",
            user_id=principal.id,
            book_id=book.id,
            line_id=line.id,
            quantity=line.quantity.value,
        )
        return CartDTO.from_cart(cart)
