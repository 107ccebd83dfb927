"""Order aggregate: the immutable record of a purchase.

An Order is created once from the contents of a cart. Its lines never
change afterwards; only the payment and delivery status fields do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from bookstore.domain.exceptions import EmptyCartError, ValidationError
from bookstore.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
)


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status {raw!r} (expected one of: {allowed})"
            ) from exc


# Forward-only progression; CANCELLED sits outside it.
_PROGRESSION = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)


@dataclass(frozen=True)
class OrderLine:
    """Frozen copy of a cart line at purchase time."""

    book_id: str
    title: str
    quantity: Quantity
    price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """A placed order: frozen lines, amounts, payment and delivery state.

    ``Order.place()`` builds new orders from cart lines. The plain
    constructor is what the order store uses to load a saved document.
    """

    id: int | None
    user_id: str
    lines: tuple[OrderLine, ...]
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    total_amount: Money
    tax_amount: Money
    shipping_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    is_paid: bool = False
    paid_at: datetime | None = None
    payment_result: PaymentResult | None = None
    is_delivered: bool = False
    delivered_at: datetime | None = None
    tracking_number: str | None = None
    created_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        user_id: str,
        lines: list[OrderLine],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        tax_amount: Money,
        shipping_amount: Money,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not lines:
            raise EmptyCartError("Cart is empty, cannot create order")

        currency = lines[0].price.currency
        total = Money(Decimal("0.00"), currency)
        for line in lines:
            total = total + line.line_total

        # Raises on mismatched currencies.
        total + tax_amount + shipping_amount

        return Order(
            id=None,
            user_id=user_id,
            lines=tuple(lines),
            shipping_address=shipping_address,
            payment_method=payment_method,
            total_amount=total,
            tax_amount=tax_amount,
            shipping_amount=shipping_amount,
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(self, result: PaymentResult, now: datetime | None = None) -> None:
        """Record a captured payment.

        A pending order moves to PROCESSING; an order that has already
        progressed further (e.g. cash on delivery) keeps its status.
        """
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError(f"Cannot pay for order #{self.id}: it is cancelled")
        if self.is_paid:
            raise ValidationError(f"Order #{self.id} is already paid")

        self.is_paid = True
        self.paid_at = now or _now()
        self.payment_result = result
        if self.status == OrderStatus.PENDING:
            self.status = OrderStatus.PROCESSING

    def transition_to(
        self,
        new_status: OrderStatus,
        now: datetime | None = None,
        tracking_number: str | None = None,
    ) -> bool:
        """Move the order to *new_status*.

        Returns True when the caller must put the ordered quantities back
        into stock, which is the case only for cancelling an order whose
        goods have not been delivered.
        """
        if new_status == self.status:
            raise ValidationError(f"Order #{self.id} is already {self.status.value}")
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError(f"Order #{self.id} is cancelled and cannot change status")

        restore_stock = False
        if new_status == OrderStatus.CANCELLED:
            # Delivered goods are gone; cancelling keeps stock as it is.
            restore_stock = not self.is_delivered
        elif _PROGRESSION.index(new_status) < _PROGRESSION.index(self.status):
            raise ValidationError(
                f"Cannot move order #{self.id} back from {self.status.value} "
                f"to {new_status.value}"
            )

        if new_status == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now or _now()
        if tracking_number:
            self.tracking_number = tracking_number.strip()

        self.status = new_status
        return restore_stock

    # --- Computed properties --------------------------------------------------

    @property
    def grand_total(self) -> Money:
        return self.total_amount + self.tax_amount + self.shipping_amount

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    def contains_book(self, book_id: str) -> bool:
        return any(line.book_id == book_id for line in self.lines)
