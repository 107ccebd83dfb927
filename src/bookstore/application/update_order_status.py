"""Application service: Update Order Status use case (admin only).

Cancelling an order that has not been delivered puts every line's
quantity back into stock. Cancelling a delivered order does not: those
goods have left the warehouse. Payment is not refunded here.
"""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO
from bookstore.domain.exceptions import ConflictError, EntityNotFoundError, ForbiddenError
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.service.stock_service import StockService

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        book_repo: BookRepository,
    ) -> None:
        self._order_repo = order_repo
        self._book_repo = book_repo

    def handle(
        self,
        principal: Principal,
        order_id: int,
        new_status: OrderStatus | str,
        tracking_number: str | None = None,
    ) -> OrderDTO:
        if not principal.is_admin:
            raise ForbiddenError("Only admins can change an order's status")
        if isinstance(new_status, str):
            new_status = OrderStatus.parse(new_status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        restore_stock = order.transition_to(new_status, tracking_number=tracking_number)

        # Status is written first and only if unchanged since the read;
        # stock for a cancelled order is restored at most once.
        if not self._order_repo.save_if_status(order, previous):
            raise ConflictError(
                f"Order #{order_id} was changed by another request, reload and try again"
            )

        if restore_stock:
            try:
                StockService(self._book_repo).restore(order.lines)
            except Exception:
                logger.exception(
                    "Order cancelled but stock could not be restored",
                    order_id=order.id,
                    lines=len(order.lines),
                )
                raise

        logger.info(
            "Order status changed",
            order_id=order.id,
            previous=previous.value,
            status=order.status.value,
            stock_restored=restore_stock,
        )
        return OrderDTO.from_order(order)
