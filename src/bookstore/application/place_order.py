"""Application service: Place Order use case.

Turns the caller's cart into an immutable order. This is the only place
that coordinates the cart, the catalog and the order store in one
operation.

Steps:
1. Load the cart; an empty cart never produces an order.
2. Resolve every line to its *current* book and check current stock.
   Any shortfall fails the whole placement before anything is written.
3. Freeze the cart lines into order lines (book, title, quantity, price
   snapshot) and build the pending order.
4. Withdraw stock with one conditional decrement per line. A buyer who
   loses a race for the last copies gets InsufficientStockError and this
   attempt's decrements are undone.
5. Persist the order. If that fails, the withdrawn stock is restored.
6. Empty the cart.

Stock, order and cart are separate documents with no transaction around
them. Step 6 failing leaves a placed order and a full cart; that case is
logged with the order id so it can be reconciled.
"""

from __future__ import annotations

import structlog

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import OrderDTO
from bookstore.domain.exceptions import EmptyCartError, EntityNotFoundError
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.order import Order, OrderLine
from bookstore.domain.model.value_objects import Money, PaymentMethod, ShippingAddress
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.service.stock_service import StockService

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        book_repo: BookRepository,
        config: OrderingConfig,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._book_repo = book_repo
        self._config = config

    def handle(
        self,
        principal: Principal,
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod | str,
        tax_amount: str = "0",
        shipping_amount: str = "0",
    ) -> OrderDTO:
        if isinstance(payment_method, str):
            payment_method = PaymentMethod.parse(payment_method)
        tax = Money.of(tax_amount, self._config.currency)
        shipping = Money.of(shipping_amount, self._config.currency)

        # 1. Load the cart
        cart = self._cart_repo.get_for_user(principal.id)
        if cart is None or cart.is_empty:
            raise EmptyCartError("Cart is empty, cannot create order")

        # 2-3. Freeze lines against current books and check current stock
        lines = self._freeze_lines(cart)
        svc = StockService(self._book_repo)
        svc.check_available(lines)

        order = Order.place(
            user_id=principal.id,
            lines=lines,
            shipping_address=shipping_address,
            payment_method=payment_method,
            tax_amount=tax,
            shipping_amount=shipping,
        )

        # 4. Take stock out (conditional per line, all or nothing)
        svc.withdraw(order.lines)

        # 5. Persist the order, giving the stock back if that fails
        try:
            self._order_repo.save(order)
        except Exception:
            logger.exception(
                "Order persistence failed; restoring stock",
                user_id=principal.id,
                lines=len(order.lines),
            )
            svc.restore(order.lines)
            raise

        # 6. Empty the cart
        try:
            cart.clear()
            self._cart_repo.save(cart)
        except Exception:
            logger.exception(
                "Order placed but cart could not be cleared",
                order_id=order.id,
                user_id=principal.id,
            )
            raise

        logger.info(
            "Order placed",
            order_id=order.id,
            user_id=principal.id,
            lines=len(order.lines),
            total=str(order.total_amount.amount),
            grand_total=str(order.grand_total.amount),
        )
        return OrderDTO.from_order(order)

    def _freeze_lines(self, cart: Cart) -> list[OrderLine]:
        """Copy cart lines into order lines using each book's current title."""
        lines: list[OrderLine] = []
        for cart_line in cart.lines:
            book = self._book_repo.get_by_id(cart_line.book_id)
            if book is None:
                raise EntityNotFoundError(
                    f"Book '{cart_line.title}' in your cart no longer exists"
                )
            lines.append(
                OrderLine(
                    book_id=book.id,
                    title=book.title,
                    quantity=cart_line.quantity,
                    price=cart_line.price,  # <-- price snapshot from the cart
                )
            )
        return lines
