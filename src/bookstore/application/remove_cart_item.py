"""Application service: Remove Cart Item use case."""

from __future__ import annotations

from bookstore.application.dto import CartDTO
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.model.identity import Principal
from bookstore.domain.repository.cart_repository import CartRepository


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, principal: Principal, line_id: str) -> CartDTO:
        cart = self._cart_repo.get_for_user(principal.id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")

        cart.remove_item(line_id)
        self._cart_repo.save(cart)
        return CartDTO.from_cart(cart)
