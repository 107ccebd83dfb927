"""Application service: Delete Review use case."""

from __future__ import annotations

import structlog

from bookstore.application.config import OrderingConfig
from bookstore.domain.exceptions import EntityNotFoundError, ForbiddenError
from bookstore.domain.model.identity import Principal
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.review_repository import ReviewRepository
from bookstore.domain.service.rating_service import RatingService

logger = structlog.get_logger(__name__)


class DeleteReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        book_repo: BookRepository,
        config: OrderingConfig,
    ) -> None:
        self._review_repo = review_repo
        self._book_repo = book_repo
        self._config = config

    def handle(self, principal: Principal, review_id: int) -> None:
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review #{review_id} not found")
        if not principal.can_access(review.user_id):
            raise ForbiddenError("Not authorized to delete this review")

        self._review_repo.delete(review_id)
        logger.info(
            "Review deleted",
            review_id=review_id,
            book_id=review.book_id,
            deleted_by=principal.id,
        )

        RatingService(
            self._review_repo,
            self._book_repo,
            attempts=self._config.rating_recompute_attempts,
        ).recompute_quietly(review.book_id)
