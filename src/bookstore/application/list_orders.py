"""Application services: order listings (queries)."""

from __future__ import annotations

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import OrderDTO, PageDTO
from bookstore.application.queries import (
    ORDER_SORT_KEYS,
    OrderQuery,
    paginate,
    resolve_limit,
    sort_items,
)
from bookstore.domain.exceptions import ForbiddenError
from bookstore.domain.model.identity import Principal
from bookstore.domain.repository.order_repository import OrderRepository


class ListMyOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal) -> list[OrderDTO]:
        """The caller's own orders, newest first."""
        orders = sort_items(
            self._order_repo.list_for_user(principal.id), "-created_at", ORDER_SORT_KEYS
        )
        return [OrderDTO.from_order(o) for o in orders]


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, config: OrderingConfig) -> None:
        self._order_repo = order_repo
        self._config = config

    def handle(self, principal: Principal, query: OrderQuery) -> PageDTO[OrderDTO]:
        """Every order in the store, filtered and paged (admin only)."""
        if not principal.is_admin:
            raise ForbiddenError("Only admins can list all orders")

        limit = resolve_limit(query.limit, query.page, self._config)
        matching = [o for o in self._order_repo.list_all() if query.matches(o)]
        ordered = sort_items(matching, query.sort, ORDER_SORT_KEYS)

        return PageDTO(
            items=[OrderDTO.from_order(o) for o in paginate(ordered, query.page, limit)],
            page=query.page,
            limit=limit,
            total=len(matching),
        )
