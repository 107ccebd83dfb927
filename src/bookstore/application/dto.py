"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the outer layers (CLI, HTTP) and the application
layer without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from bookstore.domain.model.book import Book
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.order import Order
from bookstore.domain.model.review import Review

T = TypeVar("T")

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


def _fmt(ts: datetime | None) -> str | None:
    return ts.strftime(_TIMESTAMP_FORMAT) if ts is not None else None


@dataclass(frozen=True)
class BookDTO:

    id: str
    title: str
    authors: list[str]
    price: str  # formatted, e.g. "$15.00"
    currency: str
    stock: int
    in_stock: bool
    rating_average: float
    rating_count: int
    categories: list[str]
    isbn: str | None

    @staticmethod
    def from_book(book: Book) -> BookDTO:
        return BookDTO(
            id=book.id,
            title=book.title,
            authors=list(book.authors),
            price=str(book.price),
            currency=book.price.currency,
            stock=book.stock,
            in_stock=book.in_stock,
            rating_average=book.rating.average,
            rating_count=book.rating.count,
            categories=list(book.categories),
            isbn=book.isbn,
        )


@dataclass(frozen=True)
class CartLineDTO:
    """A single cart line as displayed to the user."""

    id: str
    book_id: str
    title: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:

    user_id: str
    items: list[CartLineDTO]
    total: str
    currency: str

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        return CartDTO(
            user_id=cart.user_id,
            items=[
                CartLineDTO(
                    id=line.id,
                    book_id=line.book_id,
                    title=line.title,
                    quantity=line.quantity.value,
                    unit_price=str(line.price),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            total=str(cart.total),
            currency=cart.currency,
        )


@dataclass(frozen=True)
class OrderLineDTO:

    book_id: str
    title: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """A complete order as displayed to the user."""

    id: int
    user_id: str
    status: str
    items: list[OrderLineDTO]
    total: str
    tax: str
    shipping: str
    grand_total: str
    currency: str
    payment_method: str
    shipping_address: str
    is_paid: bool
    paid_at: str | None
    is_delivered: bool
    delivered_at: str | None
    tracking_number: str | None
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            status=order.status.value,
            items=[
                OrderLineDTO(
                    book_id=line.book_id,
                    title=line.title,
                    quantity=line.quantity.value,
                    unit_price=str(line.price),
                    line_total=str(line.line_total),
                )
                for line in order.lines
            ],
            total=str(order.total_amount),
            tax=str(order.tax_amount),
            shipping=str(order.shipping_amount),
            grand_total=str(order.grand_total),
            currency=order.total_amount.currency,
            payment_method=order.payment_method.value,
            shipping_address=str(order.shipping_address),
            is_paid=order.is_paid,
            paid_at=_fmt(order.paid_at),
            is_delivered=order.is_delivered,
            delivered_at=_fmt(order.delivered_at),
            tracking_number=order.tracking_number,
            created_at=_fmt(order.created_at),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class ReviewDTO:

    id: int
    user_id: str
    book_id: str
    rating: int
    title: str
    comment: str
    is_verified_purchase: bool
    created_at: str

    @staticmethod
    def from_review(review: Review) -> ReviewDTO:
        return ReviewDTO(
            id=review.id,  # type: ignore[arg-type]
            user_id=review.user_id,
            book_id=review.book_id,
            rating=review.rating,
            title=review.title,
            comment=review.comment,
            is_verified_purchase=review.is_verified_purchase,
            created_at=_fmt(review.created_at),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class PageDTO(Generic[T]):
    """One page of a listing plus enough metadata to fetch its neighbours."""

    items: list[T] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1
