"""Application service: Create Review use case.

The review is written first and the book's rating is recomputed after.
A failed recompute is logged and does not undo the review.
"""

from __future__ import annotations

import structlog

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import ReviewDTO
from bookstore.domain.exceptions import ConflictError, EntityNotFoundError
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.review import Review
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.repository.review_repository import ReviewRepository
from bookstore.domain.service.rating_service import RatingService

logger = structlog.get_logger(__name__)


class CreateReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        book_repo: BookRepository,
        order_repo: OrderRepository,
        config: OrderingConfig,
    ) -> None:
        self._review_repo = review_repo
        self._book_repo = book_repo
        self._order_repo = order_repo
        self._config = config

    def handle(
        self,
        principal: Principal,
        book_id: str,
        rating: int,
        title: str,
        comment: str,
    ) -> ReviewDTO:
        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError(f"Book with ID '{book_id}' not found")

        if self._review_repo.find_by_user_and_book(principal.id, book_id) is not None:
            raise ConflictError("You have already reviewed this book")

        review = Review.create(
            user_id=principal.id,
            book_id=book_id,
            rating=rating,
            title=title,
            comment=comment,
            is_verified_purchase=self._order_repo.has_paid_order_with_book(
                principal.id, book_id
            ),
        )
        self._review_repo.add(review)

        logger.info(
            "Review created",
            review_id=review.id,
            book_id=book_id,
            user_id=principal.id,
            rating=review.rating,
            verified=review.is_verified_purchase,
        )

        RatingService(
            self._review_repo,
            self._book_repo,
            attempts=self._config.rating_recompute_attempts,
        ).recompute_quietly(book_id)

        return ReviewDTO.from_review(review)
