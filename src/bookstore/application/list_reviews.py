"""Application services: review queries."""

from __future__ import annotations

from bookstore.application.dto import ReviewDTO
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.review_repository import ReviewRepository


class ListBookReviewsHandler:

    def __init__(self, review_repo: ReviewRepository, book_repo: BookRepository) -> None:
        self._review_repo = review_repo
        self._book_repo = book_repo

    def handle(self, book_id: str) -> list[ReviewDTO]:
        """All reviews of a book, newest first."""
        if self._book_repo.get_by_id(book_id) is None:
            raise EntityNotFoundError(f"Book with ID '{book_id}' not found")

        reviews = sorted(
            self._review_repo.list_for_book(book_id),
            key=lambda r: r.created_at,
            reverse=True,
        )
        return [ReviewDTO.from_review(r) for r in reviews]


class ShowReviewHandler:

    def __init__(self, review_repo: ReviewRepository) -> None:
        self._review_repo = review_repo

    def handle(self, review_id: int) -> ReviewDTO:
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review #{review_id} not found")
        return ReviewDTO.from_review(review)
