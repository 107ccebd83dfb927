"""Abstract repository for the Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_for_user(self, user_id: str) -> Cart | None:
        """Return the user's cart, or None if they never had one."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart (one per user)."""
