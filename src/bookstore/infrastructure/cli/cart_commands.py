"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from bookstore.application.add_to_cart import AddToCartHandler
from bookstore.application.clear_cart import ClearCartHandler
from bookstore.application.dto import CartDTO
from bookstore.application.get_cart import GetCartHandler
from bookstore.application.remove_cart_item import RemoveCartItemHandler
from bookstore.application.update_cart_item import UpdateCartItemHandler
from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.identity import Principal
from bookstore.infrastructure.bootstrap import (
    book_repository,
    cart_repository,
    ordering_config,
)
from bookstore.infrastructure.cli.identity import as_principal


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Line':<34} {'Title':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*86}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<34} {item.title[:24]:<24} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*86}")
    click.echo(f"  {'Cart Total':<64} {dto.total:>22}")


@click.command("show")
@as_principal
def cart_show(principal: Principal) -> None:
    """Show your cart."""
    handler = GetCartHandler(cart_repo=cart_repository(), config=ordering_config())
    _display_cart(handler.handle(principal))


@click.command("add")
@as_principal
@click.option("--book", "book_id", required=True, help="Book ID.")
@click.option("--quantity", default=1, type=int, help="How many copies.")
def cart_add(principal: Principal, book_id: str, quantity: int) -> None:
    """Add a book to your cart."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        book_repo=book_repository(),
        config=ordering_config(),
    )

    try:
        dto = handler.handle(principal, book_id=book_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@as_principal
@click.option("--line", "line_id", required=True, help="Cart line ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(principal: Principal, line_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(),
        book_repo=book_repository(),
        config=ordering_config(),
    )

    try:
        dto = handler.handle(principal, line_id=line_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@as_principal
@click.option("--line", "line_id", required=True, help="Cart line ID.")
def cart_remove(principal: Principal, line_id: str) -> None:
    """Remove a line from your cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(principal, line_id=line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
@as_principal
def cart_clear(principal: Principal) -> None:
    """Empty your cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(), config=ordering_config())
    handler.handle(principal)
    click.echo("Cart cleared.")
