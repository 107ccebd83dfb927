import click

from bookstore.infrastructure.cli.book_commands import book_add, book_list, book_price, book_show
from bookstore.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from bookstore.infrastructure.cli.order_commands import (
    order_list,
    order_mine,
    order_pay,
    order_place,
    order_show,
    order_status,
)
from bookstore.infrastructure.cli.review_commands import (
    review_add,
    review_delete,
    review_edit,
    review_list,
)
from bookstore.infrastructure.logging import configure_logging
from bookstore.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """Bookstore: catalog, carts, orders and reviews"""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)


@cli.group()
def book() -> None:
    """Manage the catalog."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def review() -> None:
    """Manage reviews."""


# Register subcommands
book.add_command(book_add)
book.add_command(book_list)
book.add_command(book_price)
book.add_command(book_show)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_list)
order.add_command(order_mine)
order.add_command(order_pay)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
review.add_command(review_add)
review.add_command(review_delete)
review.add_command(review_edit)
review.add_command(review_list)
