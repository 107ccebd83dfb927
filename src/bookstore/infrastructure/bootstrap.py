"""Builds the JSON-backed repositories and handler config from settings.

The CLI commands call these factories; handlers only see the repository
interfaces and an ``OrderingConfig``.
"""

from __future__ import annotations

from bookstore.application.config import OrderingConfig
from bookstore.infrastructure.persistence.json_book_repository import (
    JsonBookRepository,
)
from bookstore.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from bookstore.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from bookstore.infrastructure.persistence.json_review_repository import (
    JsonReviewRepository,
)
from bookstore.infrastructure.settings import get_settings


def ordering_config() -> OrderingConfig:
    return get_settings().ordering_config()


def book_repository() -> JsonBookRepository:
    return JsonBookRepository(get_settings().data_dir / "books.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(get_settings().data_dir / "carts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def review_repository() -> JsonReviewRepository:
    return JsonReviewRepository(get_settings().data_dir / "reviews.json")
