"""Application service: Show Order use case (query)."""

from __future__ import annotations

from bookstore.application.dto import OrderDTO
from bookstore.domain.exceptions import EntityNotFoundError, ForbiddenError
from bookstore.domain.model.identity import Principal
from bookstore.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if not principal.can_access(order.user_id):
            raise ForbiddenError("Not authorized to access this order")
        return OrderDTO.from_order(order)
