"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
Stored aggregates are deep-copied on the way in and out so tests see the
same isolation a document store gives.
"""

from __future__ import annotations

import copy

from bookstore.application.config import OrderingConfig
from bookstore.domain.exceptions import ConflictError
from bookstore.domain.model.book import Book
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.order import Order, OrderStatus
from bookstore.domain.model.review import Review
from bookstore.domain.model.value_objects import Money, RatingSummary
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.repository.review_repository import ReviewRepository


class FakeBookRepository(BookRepository):

    def __init__(self, books: list[Book] | None = None) -> None:
        self._store: dict[str, Book] = {}
        for b in books or []:
            self._store[b.id] = copy.deepcopy(b)

    def next_id(self) -> str:
        if not self._store:
            return "1"
        return str(max(int(k) for k in self._store) + 1)

    def get_by_id(self, book_id: str) -> Book | None:
        return copy.deepcopy(self._store.get(book_id))

    def list_all(self) -> list[Book]:
        return [copy.deepcopy(b) for b in self._store.values()]

    def save(self, book: Book) -> None:
        stored = self._store.get(book.id)
        book = copy.deepcopy(book)
        if stored is not None:
            book.stock = stored.stock
            book.rating = stored.rating
        self._store[book.id] = book

    def update_price(self, book_id: str, price: Money) -> None:
        book = self._store.get(book_id)
        if book is not None:
            book.price = price

    def withdraw_stock(self, book_id: str, quantity: int) -> bool:
        book = self._store.get(book_id)
        if book is None or book.stock < quantity:
            return False
        book.stock -= quantity
        return True

    def restore_stock(self, book_id: str, quantity: int) -> None:
        book = self._store.get(book_id)
        if book is not None:
            book.stock += quantity

    def update_rating(self, book_id: str, summary: RatingSummary) -> None:
        book = self._store.get(book_id)
        if book is not None:
            book.apply_rating(summary)

    # --- Test helpers ---------------------------------------------------------

    def stock_of(self, book_id: str) -> int:
        return self._store[book_id].stock


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}

    def get_for_user(self, user_id: str) -> Cart | None:
        return copy.deepcopy(self._store.get(user_id))

    def save(self, cart: Cart) -> None:
        self._store[cart.user_id] = copy.deepcopy(cart)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._stale: Order | None = None

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        if self._stale is not None and self._stale.id == order_id:
            stale, self._stale = self._stale, None
            return stale
        return copy.deepcopy(self._store.get(order_id))

    def list_for_user(self, user_id: str) -> list[Order]:
        return [copy.deepcopy(o) for o in self._store.values() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        return [copy.deepcopy(o) for o in self._store.values()]

    def has_paid_order_with_book(self, user_id: str, book_id: str) -> bool:
        return any(
            o.user_id == user_id and o.is_paid and o.contains_book(book_id)
            for o in self._store.values()
        )

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = copy.deepcopy(order)

    def save_if_status(self, order: Order, expected: OrderStatus) -> bool:
        stored = self._store.get(order.id)  # type: ignore[arg-type]
        if stored is None or stored.status != expected:
            return False
        self._store[order.id] = copy.deepcopy(order)  # type: ignore[index]
        return True

    # --- Test helpers ---------------------------------------------------------

    def count(self) -> int:
        return len(self._store)

    def serve_stale(self, order: Order) -> None:
        """Make the next get_by_id return *order* instead of the stored copy."""
        self._stale = copy.deepcopy(order)


class FailingOrderRepository(FakeOrderRepository):
    """Order store that is down: every save raises."""

    def save(self, order: Order) -> None:
        raise RuntimeError("order store unavailable")


class FlakyOrderRepository(FakeOrderRepository):
    """Order store whose next status write fails once, then recovers."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_next_status_write = False

    def save_if_status(self, order: Order, expected: OrderStatus) -> bool:
        if self.fail_next_status_write:
            self.fail_next_status_write = False
            raise RuntimeError("order store unavailable")
        return super().save_if_status(order, expected)


class FakeReviewRepository(ReviewRepository):

    def __init__(self) -> None:
        self._store: dict[int, Review] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, review_id: int) -> Review | None:
        return copy.deepcopy(self._store.get(review_id))

    def find_by_user_and_book(self, user_id: str, book_id: str) -> Review | None:
        for r in self._store.values():
            if r.user_id == user_id and r.book_id == book_id:
                return copy.deepcopy(r)
        return None

    def list_for_book(self, book_id: str) -> list[Review]:
        return [copy.deepcopy(r) for r in self._store.values() if r.book_id == book_id]

    def add(self, review: Review) -> None:
        if self.find_by_user_and_book(review.user_id, review.book_id) is not None:
            raise ConflictError("You have already reviewed this book")
        review.id = self._next_id
        self._next_id += 1
        self._store[review.id] = copy.deepcopy(review)

    def save(self, review: Review) -> None:
        self._store[review.id] = copy.deepcopy(review)  # type: ignore[index]

    def delete(self, review_id: int) -> None:
        self._store.pop(review_id, None)


class RacingBookRepository(FakeBookRepository):
    """Book store where another buyer withdraws stock right after the next read."""

    def __init__(self, books: list[Book] | None = None) -> None:
        super().__init__(books)
        self.withdraw_after_read: tuple[str, int] | None = None

    def get_by_id(self, book_id: str) -> Book | None:
        book = super().get_by_id(book_id)
        if self.withdraw_after_read is not None:
            pending, self.withdraw_after_read = self.withdraw_after_read, None
            self.withdraw_stock(*pending)
        return book


class BrokenRatingBookRepository(FakeBookRepository):
    """Book store whose rating writes always fail."""

    def __init__(self, books: list[Book] | None = None) -> None:
        super().__init__(books)
        self.rating_write_attempts = 0

    def update_rating(self, book_id: str, summary: RatingSummary) -> None:
        self.rating_write_attempts += 1
        raise RuntimeError("book store unavailable")


def ordering_config(**overrides) -> OrderingConfig:
    """Handler config with test defaults; pass keyword overrides to change one."""
    values = dict(
        currency="USD",
        check_stock_on_cart_update=True,
        rating_recompute_attempts=1,
        default_page_size=10,
        max_page_size=100,
    )
    values.update(overrides)
    return OrderingConfig(**values)
