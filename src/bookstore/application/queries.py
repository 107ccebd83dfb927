"""Listing queries with an explicit, enumerated set of filters.

Only the fields declared here can filter or sort a listing. Callers
cannot pass through arbitrary store filters.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from bookstore.application.config import OrderingConfig
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order, OrderStatus
from bookstore.domain.model.value_objects import Money

T = TypeVar("T")

ORDER_SORT_KEYS: dict[str, Callable[[Order], Any]] = {
    "created_at": lambda o: o.created_at,
    "total_amount": lambda o: o.total_amount.amount,
}

BOOK_SORT_KEYS: dict[str, Callable[[Book], Any]] = {
    "title": lambda b: b.title.lower(),
    "price": lambda b: b.price.amount,
    "rating": lambda b: b.rating.average,
}


@dataclass(frozen=True)
class OrderQuery:

    status: OrderStatus | None = None
    is_paid: bool | None = None
    user_id: str | None = None
    sort: str = "-created_at"
    page: int = 1
    limit: int | None = None

    def matches(self, order: Order) -> bool:
        if self.status is not None and order.status != self.status:
            return False
        if self.is_paid is not None and order.is_paid != self.is_paid:
            return False
        if self.user_id is not None and order.user_id != self.user_id:
            return False
        return True


@dataclass(frozen=True)
class BookQuery:

    author: str | None = None
    category: str | None = None
    title_contains: str | None = None
    min_price: Money | None = None
    max_price: Money | None = None
    in_stock: bool | None = None
    sort: str = "title"
    page: int = 1
    limit: int | None = None

    def matches(self, book: Book) -> bool:
        if self.author and not any(self.author.lower() in a.lower() for a in book.authors):
            return False
        if self.category and self.category.lower() not in (c.lower() for c in book.categories):
            return False
        if self.title_contains and self.title_contains.lower() not in book.title.lower():
            return False
        if self.min_price is not None and book.price.amount < self.min_price.amount:
            return False
        if self.max_price is not None and book.price.amount > self.max_price.amount:
            return False
        if self.in_stock is not None and book.in_stock != self.in_stock:
            return False
        return True


def parse_price_bound(raw: str | None) -> Money | None:
    if raw is None or raw == "":
        return None
    return Money.of(raw)


def resolve_limit(limit: int | None, page: int, config: OrderingConfig) -> int:
    """Validate paging input and fall back to the configured page size."""
    if page < 1:
        raise ValidationError(f"Page must be at least 1, got {page}")
    if limit is None:
        return config.default_page_size
    if not 1 <= limit <= config.max_page_size:
        raise ValidationError(
            f"Limit must be between 1 and {config.max_page_size}, got {limit}"
        )
    return limit


def sort_items(items: list[T], sort: str, keys: dict[str, Callable[[T], Any]]) -> list[T]:
    """Sort by one enumerated field; a leading ``-`` means descending."""
    descending = sort.startswith("-")
    name = sort[1:] if descending else sort
    if name not in keys:
        allowed = ", ".join(sorted(keys))
        raise ValidationError(f"Cannot sort by {sort!r} (expected one of: {allowed})")
    return sorted(items, key=keys[name], reverse=descending)


def paginate(items: Sequence[T], page: int, limit: int) -> list[T]:
    start = (page - 1) * limit
    return list(items[start:start + limit])
