"""Domain service: Stock.

Coordinates the cross-aggregate work of taking books out of stock when an
order is placed and putting them back when it is cancelled.

Stock is never checked and decremented as two separate steps. Every
decrement is a conditional update on the book document, so two buyers
racing for the last copy cannot both win. A multi-line withdrawal that
fails part-way restores the lines it already took, leaving stock exactly
as it was.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from bookstore.domain.exceptions import EntityNotFoundError, InsufficientStockError
from bookstore.domain.model.order import OrderLine
from bookstore.domain.repository.book_repository import BookRepository

logger = structlog.get_logger(__name__)


class StockService:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def check_available(self, lines: Iterable[OrderLine]) -> None:
        """Fail fast if any line asks for more than the book's current stock.

        Read-only. A passing check does not reserve anything; ``withdraw``
        re-checks atomically.
        """
        for line in lines:
            book = self._book_repo.get_by_id(line.book_id)
            if book is None:
                raise EntityNotFoundError(f"Book '{line.title}' no longer exists")
            qty = line.quantity.value
            if qty > book.stock:
                raise InsufficientStockError(
                    book_id=book.id,
                    title=book.title,
                    requested=qty,
                    available=book.stock,
                )

    def withdraw(self, lines: Iterable[OrderLine]) -> None:
        """Decrement stock for every line, all or nothing."""
        withdrawn: list[OrderLine] = []

        for line in lines:
            qty = line.quantity.value
            if self._book_repo.withdraw_stock(line.book_id, qty):
                withdrawn.append(line)
                continue

            book = self._book_repo.get_by_id(line.book_id)
            available = book.stock if book is not None else 0
            logger.warning(
                "Stock withdrawal rejected",
                book_id=line.book_id,
                requested=qty,
                available=available,
                rolled_back_lines=len(withdrawn),
            )
            self.restore(withdrawn)
            raise InsufficientStockError(
                book_id=line.book_id,
                title=line.title,
                requested=qty,
                available=available,
            )

    def restore(self, lines: Iterable[OrderLine]) -> None:
        """Compensating action: put each line's quantity back into stock."""
        for line in lines:
            self._book_repo.restore_stock(line.book_id, line.quantity.value)
            logger.info(
                "Stock restored",
                book_id=line.book_id,
                quantity=line.quantity.value,
            )
