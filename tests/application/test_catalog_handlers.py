"""Integration tests for the catalog use cases."""

import pytest

from bookstore.application.add_book import AddBookHandler
from bookstore.application.list_books import ListBooksHandler, ShowBookHandler
from bookstore.application.queries import BookQuery, parse_price_bound
from bookstore.application.update_book_price import UpdateBookPriceHandler
from bookstore.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.identity import Principal, Role
from bookstore.domain.model.value_objects import Money, RatingSummary
from tests.fakes import FakeBookRepository, RacingBookRepository, ordering_config

ADMIN = Principal("root", Role.ADMIN)
ALICE = Principal("alice")


def _setup():
    books = [
        Book(id="1", title="Dune", authors=["Frank Herbert"], price=Money.of("10.00"),
             stock=4, categories=["Sci-Fi"], rating=RatingSummary(4.5, 2)),
        Book(id="2", title="Emma", authors=["Jane Austen"], price=Money.of("25.00"),
             stock=0, categories=["Classics"]),
        Book(id="3", title="Persuasion", authors=["Jane Austen"], price=Money.of("8.00"),
             stock=2, categories=["Classics"], rating=RatingSummary(3.0, 1)),
    ]
    return FakeBookRepository(books), ordering_config(default_page_size=2)


class TestAddBook:

    def test_admin_adds_book(self):
        repo, config = _setup()
        dto = AddBookHandler(repo, config).handle(ADMIN, "Ulysses", ["Joyce"], "19.99", 3)
        assert dto.id == "4"
        assert dto.price == "$19.99"
        assert dto.categories == ["Uncategorized"]
        assert repo.stock_of("4") == 3

    def test_non_admin_forbidden(self):
        repo, config = _setup()
        with pytest.raises(ForbiddenError):
            AddBookHandler(repo, config).handle(ALICE, "Ulysses", ["Joyce"], "19.99", 3)

    def test_duplicate_isbn(self):
        repo, config = _setup()
        handler = AddBookHandler(repo, config)
        handler.handle(ADMIN, "Ulysses", ["Joyce"], "19.99", 3, isbn="978-0")
        with pytest.raises(ConflictError, match="ISBN"):
            handler.handle(ADMIN, "Ulysses 2", ["Joyce"], "19.99", 3, isbn="978-0")

    def test_negative_stock(self):
        repo, config = _setup()
        with pytest.raises(ValidationError, match="negative"):
            AddBookHandler(repo, config).handle(ADMIN, "Ulysses", ["Joyce"], "19.99", -1)


class TestUpdatePrice:

    def test_price_changes(self):
        repo, _ = _setup()
        dto = UpdateBookPriceHandler(repo).handle(ADMIN, "1", "12.50")
        assert dto.price == "$12.50"

    def test_concurrent_withdrawal_is_kept(self):
        repo = RacingBookRepository([
            Book(id="1", title="Dune", authors=["Herbert"], price=Money.of("10.00"), stock=10),
        ])
        repo.withdraw_after_read = ("1", 4)

        dto = UpdateBookPriceHandler(repo).handle(ADMIN, "1", "12.00")

        assert dto.price == "$12.00"
        assert dto.stock == 6
        assert repo.stock_of("1") == 6

    def test_unknown_book(self):
        repo, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateBookPriceHandler(repo).handle(ADMIN, "9", "1.00")


class TestListBooks:

    def test_default_page(self):
        repo, config = _setup()
        page = ListBooksHandler(repo, config).handle(BookQuery())
        assert [b.title for b in page.items] == ["Dune", "Emma"]
        assert page.total == 3
        assert page.total_pages == 2
        assert page.has_next

    def test_second_page(self):
        repo, config = _setup()
        page = ListBooksHandler(repo, config).handle(BookQuery(page=2))
        assert [b.title for b in page.items] == ["Persuasion"]
        assert not page.has_next
        assert page.has_prev

    def test_filters(self):
        repo, config = _setup()
        handler = ListBooksHandler(repo, config)
        assert handler.handle(BookQuery(author="austen")).total == 2
        assert handler.handle(BookQuery(category="sci-fi")).total == 1
        assert handler.handle(BookQuery(in_stock=True)).total == 2
        assert handler.handle(BookQuery(max_price=parse_price_bound("9"))).total == 1

    def test_sort_by_rating_descending(self):
        repo, config = _setup()
        page = ListBooksHandler(repo, config).handle(BookQuery(sort="-rating", limit=3))
        assert [b.id for b in page.items] == ["1", "3", "2"]

    def test_bad_page(self):
        repo, config = _setup()
        with pytest.raises(ValidationError, match="Page must be"):
            ListBooksHandler(repo, config).handle(BookQuery(page=0))

    def test_show_book(self):
        repo, _ = _setup()
        assert ShowBookHandler(repo).handle("2").in_stock is False
