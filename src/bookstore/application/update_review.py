"""Application service: Update Review use case."""

from __future__ import annotations

import structlog

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import ReviewDTO
from bookstore.domain.exceptions import EntityNotFoundError, ForbiddenError
from bookstore.domain.model.identity import Principal
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.review_repository import ReviewRepository
from bookstore.domain.service.rating_service import RatingService

logger = structlog.get_logger(__name__)


class UpdateReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        book_repo: BookRepository,
        config: OrderingConfig,
    ) -> None:
        self._review_repo = review_repo
        self._book_repo = book_repo
        self._config = config

    def handle(
        self,
        principal: Principal,
        review_id: int,
        rating: int | None = None,
        title: str | None = None,
        comment: str | None = None,
    ) -> ReviewDTO:
        """Edit a review in place. Fields left as None keep their value.

        Title or comment edits leave the book's rating alone; only a
        changed rating triggers a recompute.
        """
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review #{review_id} not found")
        if not principal.can_access(review.user_id):
            raise ForbiddenError("Not authorized to update this review")

        rating_changed = review.edit(rating=rating, title=title, comment=comment)
        self._review_repo.save(review)

        logger.info(
            "Review updated",
            review_id=review.id,
            book_id=review.book_id,
            rating_changed=rating_changed,
        )

        if rating_changed:
            RatingService(
                self._review_repo,
                self._book_repo,
                attempts=self._config.rating_recompute_attempts,
            ).recompute_quietly(review.book_id)

        return ReviewDTO.from_review(review)
