"""Cart aggregate: one mutable shopping cart per user.

A cart is a set of lines keyed by book id. It never touches stock; the
stock check happens when the cart is turned into an order.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from bookstore.domain.exceptions import EntityNotFoundError, ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money, Quantity


@dataclass
class CartLine:
    """One (book, quantity, price snapshot) entry.

    ``price`` is captured when the book is first added and is kept when
    the same book is added again, even if the catalog price has moved.
    """

    id: str
    book_id: str
    title: str
    quantity: Quantity
    price: Money  # snapshot at add-time

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for a user's cart.

    ``total`` is recomputed on every mutation and always equals the sum of
    ``price * quantity`` over the lines.
    """

    user_id: str
    lines: list[CartLine] = field(default_factory=list)
    currency: str = "USD"
    total: Money = field(init=False)

    def __post_init__(self) -> None:
        self._recompute_total()

    # --- Mutations ------------------------------------------------------------

    def add_item(self, book: Book, quantity: int) -> CartLine:
        """Add *quantity* of *book*, merging into an existing line if present."""
        qty = Quantity(quantity)
        if book.price.currency != self.currency:
            raise ValidationError(
                f"Cannot add '{book.title}' priced in {book.price.currency} "
                f"to a {self.currency} cart"
            )

        line = self.find_line_for_book(book.id)
        if line is not None:
            line.quantity = Quantity(line.quantity.value + qty.value)
        else:
            line = CartLine(
                id=uuid.uuid4().hex,
                book_id=book.id,
                title=book.title,
                quantity=qty,
                price=book.price,
            )
            self.lines.append(line)

        self._recompute_total()
        return line

    def update_item_quantity(self, line_id: str, quantity: int) -> CartLine:
        line = self.get_line(line_id)
        line.quantity = Quantity(quantity)
        self._recompute_total()
        return line

    def remove_item(self, line_id: str) -> None:
        line = self.get_line(line_id)
        self.lines.remove(line)
        self._recompute_total()

    def clear(self) -> None:
        self.lines = []
        self._recompute_total()

    # --- Queries --------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get_line(self, line_id: str) -> CartLine:
        for line in self.lines:
            if line.id == line_id:
                return line
        raise EntityNotFoundError(f"Cart item '{line_id}' not found")

    def find_line_for_book(self, book_id: str) -> CartLine | None:
        for line in self.lines:
            if line.book_id == book_id:
                return line
        return None

    # --- Internal helpers -----------------------------------------------------

    def _recompute_total(self) -> None:
        result = Money(Decimal("0.00"), self.currency)
        for line in self.lines:
            result = result + line.line_total
        self.total = result
