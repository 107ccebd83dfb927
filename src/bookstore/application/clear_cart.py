"""Application service: Clear Cart use case."""

from __future__ import annotations

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import CartDTO
from bookstore.application.get_cart import load_or_create_cart
from bookstore.domain.model.identity import Principal
from bookstore.domain.repository.cart_repository import CartRepository


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository, config: OrderingConfig) -> None:
        self._cart_repo = cart_repo
        self._config = config

    def handle(self, principal: Principal) -> CartDTO:
        cart = load_or_create_cart(self._cart_repo, principal.id, self._config.currency)
        cart.clear()
        self._cart_repo.save(cart)
        return CartDTO.from_cart(cart)
