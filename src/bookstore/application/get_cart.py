"""Application service: Get Cart use case (query).

A user who has never added anything still gets a cart back: an empty one
is created and stored on first access.
"""

from __future__ import annotations

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import CartDTO
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.identity import Principal
from bookstore.domain.repository.cart_repository import CartRepository


def load_or_create_cart(cart_repo: CartRepository, user_id: str, currency: str) -> Cart:
    cart = cart_repo.get_for_user(user_id)
    if cart is None:
        cart = Cart(user_id=user_id, currency=currency)
        cart_repo.save(cart)
    return cart


class GetCartHandler:

    def __init__(self, cart_repo: CartRepository, config: OrderingConfig) -> None:
        self._cart_repo = cart_repo
        self._config = config

    def handle(self, principal: Principal) -> CartDTO:
        cart = load_or_create_cart(self._cart_repo, principal.id, self._config.currency)
        return CartDTO.from_cart(cart)
