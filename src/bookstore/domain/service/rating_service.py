"""Domain service: Rating aggregation.

A book's ``rating`` is derived from its reviews. After every review write
the handlers call into this service, which rescans the book's reviews and
writes the new summary onto the book document.

The review write and the rating write are two separate documents with no
transaction around them. ``recompute_quietly`` retries a few times and then
gives up with an error log; the review write is never rolled back, so a
book's rating can briefly lag its reviews.
"""

from __future__ import annotations

import structlog

from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.model.review import summarize
from bookstore.domain.model.value_objects import RatingSummary
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.review_repository import ReviewRepository

logger = structlog.get_logger(__name__)


class RatingService:

    def __init__(
        self,
        review_repo: ReviewRepository,
        book_repo: BookRepository,
        attempts: int = 1,
    ) -> None:
        self._review_repo = review_repo
        self._book_repo = book_repo
        self._attempts = max(1, attempts)

    def recompute(self, book_id: str) -> RatingSummary:
        if self._book_repo.get_by_id(book_id) is None:
            raise EntityNotFoundError(f"Book with ID '{book_id}' not found")

        reviews = self._review_repo.list_for_book(book_id)
        summary = summarize(r.rating for r in reviews)
        self._book_repo.update_rating(book_id, summary)

        logger.info(
            "Rating recomputed",
            book_id=book_id,
            average=summary.average,
            count=summary.count,
        )
        return summary

    def recompute_quietly(self, book_id: str) -> RatingSummary | None:
        """Like ``recompute`` but never raises; returns None on failure."""
        for attempt in range(1, self._attempts + 1):
            try:
                return self.recompute(book_id)
            except Exception as exc:
                logger.warning(
                    "Rating recompute failed",
                    book_id=book_id,
                    attempt=attempt,
                    attempts=self._attempts,
                    error=str(exc),
                )

        logger.error("Giving up on rating recompute", book_id=book_id)
        return None
