"""Application service: Mark Order Paid use case."""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO
from bookstore.domain.exceptions import ConflictError, EntityNotFoundError, ForbiddenError
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.value_objects import PaymentResult
from bookstore.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class MarkOrderPaidHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        principal: Principal,
        order_id: int,
        payment_result: PaymentResult,
    ) -> OrderDTO:
        """Record payment for an order. Only its owner or an admin may do this."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if not principal.can_access(order.user_id):
            raise ForbiddenError("Not authorized to update this order")

        previous = order.status
        order.mark_paid(payment_result)
        if not self._order_repo.save_if_status(order, previous):
            raise ConflictError(
                f"Order #{order_id} was changed by another request, reload and try again"
            )

        logger.info(
            "Payment recorded",
            order_id=order.id,
            paid_by=principal.id,
            payment_id=payment_result.id,
            status=order.status.value,
        )
        return OrderDTO.from_order(order)
