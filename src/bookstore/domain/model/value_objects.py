"""Immutable values the bookstore aggregates are built from.

Prices, quantities, addresses, payment details and rating summaries.
Each validates itself on construction and compares by value.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from enum import Enum

from bookstore.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """A price or total in one currency.

    Book prices, cart snapshots, order totals, tax and shipping are all
    Money. Amounts are Decimal and never negative; combining two amounts
    in different currencies is a ValidationError.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Parse a price as typed by a user or read from a document."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)

    def __add__(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, quantity: int) -> Money:
        """Line total for *quantity* copies at this unit price."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Can only multiply Money by int, got {type(quantity).__name__}")
        return Money(self.amount * quantity, self.currency)

    def __str__(self) -> str:
        return f"${self.amount:.2f}"


@dataclass(frozen=True)
class Quantity:
    """Number of copies on a cart or order line; always at least 1."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ShippingAddress:
    """Delivery address captured on the order. Every field is required."""

    full_name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    phone_number: str

    def __post_init__(self) -> None:
        missing = [
            f.name
            for f in fields(self)
            if not isinstance(getattr(self, f.name), str) or not getattr(self, f.name).strip()
        ]
        if missing:
            raise ValidationError(
                f"Shipping address is missing required fields: {', '.join(missing)}"
            )

    def __str__(self) -> str:
        return (
            f"{self.full_name}, {self.street}, {self.city}, {self.state} "
            f"{self.zip_code}, {self.country}"
        )


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    CASH_ON_DELIVERY = "cash_on_delivery"

    @staticmethod
    def parse(raw: str) -> PaymentMethod:
        try:
            return PaymentMethod(raw)
        except ValueError as exc:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Unknown payment method {raw!r} (expected one of: {allowed})"
            ) from exc


@dataclass(frozen=True)
class PaymentResult:
    """What the payment provider reported back when the order was paid."""

    id: str | None = None
    status: str | None = None
    update_time: str | None = None
    email_address: str | None = None


@dataclass(frozen=True)
class RatingSummary:
    """Derived rating aggregate of a book: mean of its reviews and their count."""

    average: float
    count: int

    @staticmethod
    def empty() -> RatingSummary:
        return RatingSummary(average=0.0, count=0)
