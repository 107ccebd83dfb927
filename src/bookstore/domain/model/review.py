"""Review aggregate and the rating summary derived from it.

At most one review exists per (user, book) pair. The repository enforces
that as a unique key; the create handler also checks it up front so the
caller gets a clean Conflict instead of a store error.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.value_objects import RatingSummary

MIN_RATING = 1
MAX_RATING = 5
MAX_TITLE_LENGTH = 100
MAX_COMMENT_LENGTH = 1000


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Review:

    id: int | None
    user_id: str
    book_id: str
    rating: int
    title: str
    comment: str
    is_verified_purchase: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(
        user_id: str,
        book_id: str,
        rating: int,
        title: str,
        comment: str,
        is_verified_purchase: bool,
    ) -> Review:
        return Review(
            id=None,
            user_id=user_id,
            book_id=book_id,
            rating=_validate_rating(rating),
            title=_validate_title(title),
            comment=_validate_comment(comment),
            is_verified_purchase=is_verified_purchase,
        )

    def edit(
        self,
        rating: int | None = None,
        title: str | None = None,
        comment: str | None = None,
        now: datetime | None = None,
    ) -> bool:
        """Apply a partial edit. Returns True if the rating changed."""
        new_rating = self.rating if rating is None else _validate_rating(rating)
        new_title = self.title if title is None else _validate_title(title)
        new_comment = self.comment if comment is None else _validate_comment(comment)

        rating_changed = new_rating != self.rating
        self.rating = new_rating
        self.title = new_title
        self.comment = new_comment
        self.updated_at = now or _now()
        return rating_changed


def summarize(ratings: Iterable[int]) -> RatingSummary:
    """Arithmetic mean and count of *ratings*; (0, 0) when there are none."""
    values = list(ratings)
    if not values:
        return RatingSummary.empty()
    return RatingSummary(average=sum(values) / len(values), count=len(values))


# --- Validation helpers -------------------------------------------------------


def _validate_rating(rating: int) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"Rating must be an integer, got {type(rating).__name__}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
        )
    return rating


def _validate_title(title: str) -> str:
    if not title or not title.strip():
        raise ValidationError("Please provide a review title")
    if len(title.strip()) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title cannot be more than {MAX_TITLE_LENGTH} characters")
    return title.strip()


def _validate_comment(comment: str) -> str:
    if not comment or not comment.strip():
        raise ValidationError("Please provide a review comment")
    if len(comment) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f"Comment cannot be more than {MAX_COMMENT_LENGTH} characters"
        )
    return comment.strip()
