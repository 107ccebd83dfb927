"""Tests for the JSON-file repositories, using pytest's tmp_path."""

import json
import threading

import pytest

from bookstore.domain.exceptions import ConflictError
from bookstore.domain.model.book import Book
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.order import Order, OrderLine, OrderStatus
from bookstore.domain.model.review import Review
from bookstore.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    RatingSummary,
    ShippingAddress,
)
from bookstore.infrastructure.persistence.json_book_repository import JsonBookRepository
from bookstore.infrastructure.persistence.json_cart_repository import JsonCartRepository
from bookstore.infrastructure.persistence.json_order_repository import JsonOrderRepository
from bookstore.infrastructure.persistence.json_review_repository import JsonReviewRepository


def _book(stock: int = 5) -> Book:
    return Book(
        id="1", title="Dune", authors=["Herbert"], price=Money.of("10.00"),
        stock=stock, categories=["Sci-Fi"], isbn="978-0441",
    )


def _order(user_id: str = "alice") -> Order:
    return Order.place(
        user_id=user_id,
        lines=[OrderLine("1", "Dune", Quantity(2), Money.of("10.00"))],
        shipping_address=ShippingAddress("Alice", "1 Main", "Oslo", "OS", "0150", "NO", "555"),
        payment_method=PaymentMethod.STRIPE,
        tax_amount=Money.of("1.60"),
        shipping_amount=Money.of("4.00"),
    )


class TestJsonBookRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "books.json"
        JsonBookRepository(path)
        assert json.loads(path.read_text()) == []

    def test_save_and_reload(self, tmp_path):
        repo = JsonBookRepository(tmp_path / "books.json")
        repo.save(_book())

        loaded = JsonBookRepository(tmp_path / "books.json").get_by_id("1")

        assert loaded == _book()
        assert repo.next_id() == "2"

    def test_price_stored_as_string(self, tmp_path):
        path = tmp_path / "books.json"
        JsonBookRepository(path).save(_book())
        raw = json.loads(path.read_text())[0]
        assert raw["price"] == {"amount": "10.00", "currency_code": "USD"}

    def test_withdraw_is_conditional(self, tmp_path):
        repo = JsonBookRepository(tmp_path / "books.json")
        repo.save(_book(stock=3))
        assert repo.withdraw_stock("1", 2) is True
        assert repo.withdraw_stock("1", 2) is False
        assert repo.get_by_id("1").stock == 1
        assert repo.withdraw_stock("missing", 1) is False

    def test_restore_and_rating(self, tmp_path):
        repo = JsonBookRepository(tmp_path / "books.json")
        repo.save(_book(stock=0))
        repo.restore_stock("1", 4)
        repo.update_rating("1", RatingSummary(4.5, 2))
        book = repo.get_by_id("1")
        assert book.stock == 4
        assert book.rating == RatingSummary(4.5, 2)

    def test_price_update_keeps_concurrent_withdrawal(self, tmp_path):
        path = tmp_path / "books.json"
        JsonBookRepository(path).save(_book(stock=10))
        stale = JsonBookRepository(path).get_by_id("1")

        JsonBookRepository(path).withdraw_stock("1", 4)
        stale.update_price(Money.of("12.00"))
        JsonBookRepository(path).update_price("1", stale.price)

        book = JsonBookRepository(path).get_by_id("1")
        assert book.price == Money.of("12.00")
        assert book.stock == 6

    def test_save_of_stale_copy_keeps_stock_and_rating(self, tmp_path):
        repo = JsonBookRepository(tmp_path / "books.json")
        repo.save(_book(stock=10))
        stale = repo.get_by_id("1")
        repo.withdraw_stock("1", 3)
        repo.update_rating("1", RatingSummary(5.0, 1))

        stale.title = "Dune (Deluxe)"
        repo.save(stale)

        book = repo.get_by_id("1")
        assert book.title == "Dune (Deluxe)"
        assert book.stock == 7
        assert book.rating == RatingSummary(5.0, 1)

    def test_next_id_skips_non_numeric_ids(self, tmp_path):
        path = tmp_path / "books.json"
        repo = JsonBookRepository(path)
        repo.save(_book())
        imported = _book()
        imported.id = "isbn-9780441"
        repo.save(imported)

        assert repo.next_id() == "2"

    def test_concurrent_withdrawals_never_oversell(self, tmp_path):
        path = tmp_path / "books.json"
        JsonBookRepository(path).save(_book(stock=5))
        results: list[bool] = []

        def buy():
            # Separate instance per thread, same file.
            results.append(JsonBookRepository(path).withdraw_stock("1", 1))

        threads = [threading.Thread(target=buy) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 5
        assert JsonBookRepository(path).get_by_id("1").stock == 0


class TestJsonCartRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart(user_id="alice")
        line = cart.add_item(_book(), 2)
        repo.save(cart)

        loaded = repo.get_for_user("alice")

        assert loaded.lines[0].id == line.id
        assert loaded.lines[0].quantity == Quantity(2)
        assert loaded.total == Money.of("20.00")

    def test_one_cart_per_user(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart(user_id="alice")
        cart.add_item(_book(), 1)
        repo.save(cart)
        cart.clear()
        repo.save(cart)

        assert repo.get_for_user("alice").is_empty
        assert len(json.loads((tmp_path / "carts.json").read_text())) == 1
        assert repo.get_for_user("bob") is None


class TestJsonOrderRepository:

    def test_assigns_sequential_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order(), _order("bob")
        repo.save(first)
        repo.save(second)
        assert (first.id, second.id) == (1, 2)

    def test_round_trip_keeps_every_field(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        order.mark_paid(PaymentResult(id="pay_1", status="COMPLETED", email_address="a@b.c"))
        order.transition_to(OrderStatus.SHIPPED, tracking_number="1Z")
        repo.save(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)

        assert loaded.status == OrderStatus.SHIPPED
        assert loaded.lines == order.lines
        assert loaded.grand_total == Money.of("25.60")
        assert loaded.shipping_address == order.shipping_address
        assert loaded.payment_result == order.payment_result
        assert loaded.paid_at == order.paid_at
        assert loaded.created_at == order.created_at
        assert loaded.tracking_number == "1Z"

    def test_status_write_is_conditional(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        stale = repo.get_by_id(order.id)

        order.transition_to(OrderStatus.CANCELLED)
        assert repo.save_if_status(order, OrderStatus.PENDING) is True

        stale.transition_to(OrderStatus.SHIPPED)
        assert repo.save_if_status(stale, OrderStatus.PENDING) is False
        assert repo.get_by_id(order.id).status == OrderStatus.CANCELLED

    def test_paid_order_lookup(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        assert not repo.has_paid_order_with_book("alice", "1")
        order.mark_paid(PaymentResult())
        repo.save(order)
        assert repo.has_paid_order_with_book("alice", "1")
        assert not repo.has_paid_order_with_book("bob", "1")
        assert len(repo.list_for_user("alice")) == 1


class TestJsonReviewRepository:

    def _review(self, user_id: str = "alice") -> Review:
        return Review.create(user_id, "1", 4, "Good", "Solid", False)

    def test_add_assigns_id(self, tmp_path):
        repo = JsonReviewRepository(tmp_path / "reviews.json")
        review = self._review()
        repo.add(review)
        assert review.id == 1
        assert repo.find_by_user_and_book("alice", "1").rating == 4

    def test_duplicate_rejected(self, tmp_path):
        repo = JsonReviewRepository(tmp_path / "reviews.json")
        repo.add(self._review())
        with pytest.raises(ConflictError):
            repo.add(self._review())
        assert len(repo.list_for_book("1")) == 1

    def test_delete(self, tmp_path):
        repo = JsonReviewRepository(tmp_path / "reviews.json")
        first, second = self._review(), self._review("bob")
        repo.add(first)
        repo.add(second)
        repo.delete(first.id)
        assert [r.user_id for r in repo.list_for_book("1")] == ["bob"]
