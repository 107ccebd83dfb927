"""Integration tests for the review use cases and rating upkeep."""

import pytest

from bookstore.application.create_review import CreateReviewHandler
from bookstore.application.delete_review import DeleteReviewHandler
from bookstore.application.list_reviews import ListBookReviewsHandler, ShowReviewHandler
from bookstore.application.update_review import UpdateReviewHandler
from bookstore.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.identity import Principal, Role
from bookstore.domain.model.order import Order, OrderLine
from bookstore.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    RatingSummary,
    ShippingAddress,
)
from tests.fakes import (
    BrokenRatingBookRepository,
    FakeBookRepository,
    FakeOrderRepository,
    FakeReviewRepository,
    ordering_config,
)

ALICE = Principal("alice")
BOB = Principal("bob")
ADMIN = Principal("root", Role.ADMIN)


def _book() -> Book:
    return Book(id="1", title="Dune", authors=["Herbert"], price=Money.of("10.00"), stock=3)


def _setup(book_repo: FakeBookRepository | None = None):
    config = ordering_config()
    review_repo = FakeReviewRepository()
    book_repo = book_repo or FakeBookRepository([_book()])
    order_repo = FakeOrderRepository()
    create = CreateReviewHandler(review_repo, book_repo, order_repo, config)
    return create, review_repo, book_repo, order_repo, config


def _paid_order_for(order_repo: FakeOrderRepository, user_id: str, book_id: str) -> None:
    order = Order.place(
        user_id=user_id,
        lines=[OrderLine(book_id, "Dune", Quantity(1), Money.of("10.00"))],
        shipping_address=ShippingAddress("A", "B", "C", "D", "E", "F", "G"),
        payment_method=PaymentMethod.PAYPAL,
        tax_amount=Money.zero(),
        shipping_amount=Money.zero(),
    )
    order.mark_paid(PaymentResult(id="p"))
    order_repo.save(order)


class TestCreateReview:

    def test_rating_updated(self):
        create, _, book_repo, _, _ = _setup()
        dto = create.handle(ALICE, "1", 4, "Good", "Solid read")
        assert dto.id == 1
        assert not dto.is_verified_purchase
        assert book_repo.get_by_id("1").rating == RatingSummary(4.0, 1)

    def test_average_over_reviewers(self):
        create, _, book_repo, _, _ = _setup()
        create.handle(ALICE, "1", 5, "Great", "x")
        create.handle(BOB, "1", 2, "Meh", "y")
        assert book_repo.get_by_id("1").rating == RatingSummary(3.5, 2)

    def test_duplicate_rejected_and_counted_once(self):
        create, review_repo, book_repo, _, _ = _setup()
        create.handle(ALICE, "1", 5, "Great", "x")
        with pytest.raises(ConflictError, match="already reviewed"):
            create.handle(ALICE, "1", 1, "Changed my mind", "y")
        assert len(review_repo.list_for_book("1")) == 1
        assert book_repo.get_by_id("1").rating == RatingSummary(5.0, 1)

    def test_unknown_book(self):
        create, _, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            create.handle(ALICE, "9", 5, "t", "c")

    def test_invalid_rating(self):
        create, review_repo, _, _, _ = _setup()
        with pytest.raises(ValidationError):
            create.handle(ALICE, "1", 6, "t", "c")
        assert review_repo.list_for_book("1") == []

    def test_verified_purchase(self):
        create, _, _, order_repo, _ = _setup()
        _paid_order_for(order_repo, "alice", "1")
        assert create.handle(ALICE, "1", 5, "t", "c").is_verified_purchase

    def test_rating_failure_keeps_review(self):
        create, review_repo, book_repo, _, _ = _setup(BrokenRatingBookRepository([_book()]))
        dto = create.handle(ALICE, "1", 5, "t", "c")
        assert review_repo.get_by_id(dto.id) is not None
        assert book_repo.rating_write_attempts == 1


class TestUpdateReview:

    def test_rating_change_recomputes(self):
        create, review_repo, book_repo, _, config = _setup()
        review = create.handle(ALICE, "1", 5, "t", "c")
        UpdateReviewHandler(review_repo, book_repo, config).handle(ALICE, review.id, rating=1)
        assert book_repo.get_by_id("1").rating == RatingSummary(1.0, 1)

    def test_text_edit(self):
        create, review_repo, book_repo, _, config = _setup()
        review = create.handle(ALICE, "1", 5, "t", "c")
        dto = UpdateReviewHandler(review_repo, book_repo, config).handle(
            ALICE, review.id, comment="Better on reread"
        )
        assert dto.comment == "Better on reread"
        assert dto.rating == 5

    def test_only_owner_or_admin(self):
        create, review_repo, book_repo, _, config = _setup()
        review = create.handle(ALICE, "1", 5, "t", "c")
        handler = UpdateReviewHandler(review_repo, book_repo, config)
        with pytest.raises(ForbiddenError):
            handler.handle(BOB, review.id, rating=1)
        assert handler.handle(ADMIN, review.id, rating=3).rating == 3


class TestDeleteReview:

    def test_only_review_resets_rating(self):
        create, review_repo, book_repo, _, config = _setup()
        review = create.handle(ALICE, "1", 4, "t", "c")
        DeleteReviewHandler(review_repo, book_repo, config).handle(ALICE, review.id)
        assert review_repo.get_by_id(review.id) is None
        assert book_repo.get_by_id("1").rating == RatingSummary(0.0, 0)

    def test_stranger_forbidden(self):
        create, review_repo, book_repo, _, config = _setup()
        review = create.handle(ALICE, "1", 4, "t", "c")
        with pytest.raises(ForbiddenError):
            DeleteReviewHandler(review_repo, book_repo, config).handle(BOB, review.id)

    def test_unknown_review(self):
        _, review_repo, book_repo, _, config = _setup()
        with pytest.raises(EntityNotFoundError, match="#5"):
            DeleteReviewHandler(review_repo, book_repo, config).handle(ADMIN, 5)


class TestListReviews:

    def test_lists_book_reviews(self):
        create, review_repo, book_repo, _, _ = _setup()
        create.handle(ALICE, "1", 5, "t", "c")
        create.handle(BOB, "1", 3, "t", "c")
        dtos = ListBookReviewsHandler(review_repo, book_repo).handle("1")
        assert {d.user_id for d in dtos} == {"alice", "bob"}

    def test_unknown_book(self):
        _, review_repo, book_repo, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ListBookReviewsHandler(review_repo, book_repo).handle("9")

    def test_show_review(self):
        create, review_repo, _, _, _ = _setup()
        review = create.handle(ALICE, "1", 5, "t", "c")
        assert ShowReviewHandler(review_repo).handle(review.id).title == "t"
