"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return every order placed by *user_id*."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def has_paid_order_with_book(self, user_id: str, book_id: str) -> bool:
        """True if the user has at least one paid order containing the book."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""

    @abstractmethod
    def save_if_status(self, order: Order, expected: OrderStatus) -> bool:
        """Write an existing order only if its stored status is still *expected*.

        Returns False (and writes nothing) when another request has moved
        the order in the meantime or the order is not stored.
        """
