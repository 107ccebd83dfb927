"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from bookstore.domain.model.order import Order, OrderLine, OrderStatus
from bookstore.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
)
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.json_collection import JsonCollection


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_id(self._collection.load())

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._collection.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_for_user(self, user_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._collection.load()
            if raw["user_id"] == user_id
        ]

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._collection.load()]

    def has_paid_order_with_book(self, user_id: str, book_id: str) -> bool:
        return any(
            raw["user_id"] == user_id
            and raw["is_paid"]
            and any(item["book_id"] == book_id for item in raw["items"])
            for raw in self._collection.load()
        )

    def save(self, order: Order) -> None:
        with self._collection.update() as orders:
            # ID assignment happens under the same lock as the write.
            if order.id is None:
                order.id = self._next_id(orders)

            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))

    def save_if_status(self, order: Order, expected: OrderStatus) -> bool:
        with self._collection.update() as orders:
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    if raw["status"] != expected.value:
                        return False
                    orders[i] = self._to_raw(order)
                    return True
            return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    @staticmethod
    def _to_raw(order: Order) -> dict:
        currency = order.total_amount.currency
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "currency": currency,
            "items": [
                {
                    "book_id": line.book_id,
                    "title": line.title,
                    "quantity": line.quantity.value,
                    "price": str(line.price.amount),
                }
                for line in order.lines
            ],
            "shipping_address": asdict(order.shipping_address),
            "payment_method": order.payment_method.value,
            "payment_result": (
                asdict(order.payment_result) if order.payment_result else None
            ),
            "total_amount": str(order.total_amount.amount),
            "tax_amount": str(order.tax_amount.amount),
            "shipping_amount": str(order.shipping_amount.amount),
            "is_paid": order.is_paid,
            "paid_at": order.paid_at.isoformat() if order.paid_at else None,
            "is_delivered": order.is_delivered,
            "delivered_at": order.delivered_at.isoformat() if order.delivered_at else None,
            "tracking_number": order.tracking_number,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        lines = tuple(
            OrderLine(
                book_id=i["book_id"],
                title=i["title"],
                quantity=Quantity(i["quantity"]),
                price=Money(Decimal(i["price"]), currency),
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            lines=lines,
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            total_amount=Money(Decimal(raw["total_amount"]), currency),
            tax_amount=Money(Decimal(raw["tax_amount"]), currency),
            shipping_amount=Money(Decimal(raw["shipping_amount"]), currency),
            status=OrderStatus(raw["status"]),
            is_paid=raw["is_paid"],
            paid_at=_parse_ts(raw.get("paid_at")),
            payment_result=(
                PaymentResult(**raw["payment_result"]) if raw.get("payment_result") else None
            ),
            is_delivered=raw["is_delivered"],
            delivered_at=_parse_ts(raw.get("delivered_at")),
            tracking_number=raw.get("tracking_number"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
