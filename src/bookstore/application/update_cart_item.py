"""Application service: Update Cart Item use case."""

from __future__ import annotations

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import CartDTO
from bookstore.domain.exceptions import EntityNotFoundError, InsufficientStockError
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        book_repo: BookRepository,
        config: OrderingConfig,
    ) -> None:
        self._cart_repo = cart_repo
        self._book_repo = book_repo
        self._config = config

    def handle(self, principal: Principal, line_id: str, quantity: int) -> CartDTO:
        """Set a cart line's quantity.

        Stock is only cross-checked here when the config asks for early
        feedback; order placement is what actually enforces it.
        """
        qty = Quantity(quantity)

        cart = self._cart_repo.get_for_user(principal.id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")
        line = cart.get_line(line_id)

        if self._config.check_stock_on_cart_update:
            book = self._book_repo.get_by_id(line.book_id)
            if book is None:
                raise EntityNotFoundError(f"Book with ID '{line.book_id}' not found")
            if qty.value > book.stock:
                raise InsufficientStockError(
                    book_id=book.id,
                    title=book.title,
                    requested=qty.value,
                    available=book.stock,
                )

        cart.update_item_quantity(line_id, qty.value)
        self._cart_repo.save(cart)
        return CartDTO.from_cart(cart)
