"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so outer layers (CLI, HTTP) can catch them uniformly and map each kind to a
user-facing message or status code.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated business rule."""


class EntityNotFoundError(DomainException):
    """A requested book, cart, order or review does not exist."""


class EmptyCartError(DomainException):
    """An order was requested from a cart with no lines."""


class ConflictError(DomainException):
    """The write would break a uniqueness rule (e.g. a second review)."""


class ForbiddenError(DomainException):
    """The caller does not own the resource and is not an admin."""


class InsufficientStockError(DomainException):
    """A requested quantity exceeds the book's current stock."""

    def __init__(self, book_id: str, title: str, requested: int, available: int) -> None:
        self.book_id = book_id
        self.title = title
        self.requested = requested
        self.available = available
        super().__init__(
            f"{title} is not available in the requested quantity "
            f"(requested {requested}, available stock: {available})"
        )
