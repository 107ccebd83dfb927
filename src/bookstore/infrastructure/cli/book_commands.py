"""CLI commands for the catalog."""

from __future__ import annotations

import click

from bookstore.application.add_book import AddBookHandler
from bookstore.application.list_books import ListBooksHandler, ShowBookHandler
from bookstore.application.queries import BookQuery, parse_price_bound
from bookstore.application.update_book_price import UpdateBookPriceHandler
from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.identity import Principal
from bookstore.infrastructure.bootstrap import book_repository, ordering_config
from bookstore.infrastructure.cli.identity import as_principal


@click.command("add")
@as_principal
@click.option("--title", required=True, help="Book title.")
@click.option("--author", "authors", required=True, multiple=True, help="Author (repeatable).")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Opening stock.")
@click.option("--category", "categories", multiple=True, help="Category (repeatable).")
@click.option("--isbn", default=None, help="ISBN.")
def book_add(
    principal: Principal,
    title: str,
    authors: tuple[str, ...],
    price: str,
    stock: int,
    categories: tuple[str, ...],
    isbn: str | None,
) -> None:
    """Add a new book to the catalog (admin)."""
    handler = AddBookHandler(book_repo=book_repository(), config=ordering_config())

    try:
        book = handler.handle(
            principal,
            title=title,
            authors=list(authors),
            price=price,
            stock=stock,
            categories=list(categories),
            isbn=isbn,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book #{book.id} '{book.title}' added at {book.price} (stock {book.stock})")


@click.command("list")
@click.option("--author", default=None, help="Author name contains.")
@click.option("--category", default=None, help="Exact category.")
@click.option("--title", "title_contains", default=None, help="Title contains.")
@click.option("--min-price", default=None, help="Lowest price.")
@click.option("--max-price", default=None, help="Highest price.")
@click.option("--in-stock/--out-of-stock", "in_stock", default=None, help="Filter on availability.")
@click.option(
    "--sort",
    default="title",
    type=click.Choice(["title", "-title", "price", "-price", "rating", "-rating"]),
)
@click.option("--page", default=1, type=int)
@click.option("--limit", default=None, type=int)
def book_list(
    author: str | None,
    category: str | None,
    title_contains: str | None,
    min_price: str | None,
    max_price: str | None,
    in_stock: bool | None,
    sort: str,
    page: int,
    limit: int | None,
) -> None:
    """List books in the catalog."""
    handler = ListBooksHandler(book_repo=book_repository(), config=ordering_config())

    try:
        result = handler.handle(
            BookQuery(
                author=author,
                category=category,
                title_contains=title_contains,
                min_price=parse_price_bound(min_price),
                max_price=parse_price_bound(max_price),
                in_stock=in_stock,
                sort=sort,
                page=page,
                limit=limit,
            )
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<6} {'Title':<30} {'Price':>10} {'Stock':>6} {'Rating':>8}")
    click.echo("-" * 64)
    for b in result.items:
        rating = f"{b.rating_average:.1f}/{b.rating_count}"
        click.echo(f"{b.id:<6} {b.title[:30]:<30} {b.price:>10} {b.stock:>6} {rating:>8}")
    click.echo(f"Page {result.page} of {result.total_pages} ({result.total} books)")


@click.command("show")
@click.option("--id", "book_id", required=True, help="Book ID.")
def book_show(book_id: str) -> None:
    """Show one book."""
    handler = ShowBookHandler(book_repo=book_repository())

    try:
        b = handler.handle(book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book #{b.id}: {b.title}")
    click.echo(f"Authors:    {', '.join(b.authors)}")
    click.echo(f"Categories: {', '.join(b.categories)}")
    click.echo(f"Price:      {b.price}")
    click.echo(f"Stock:      {b.stock}")
    click.echo(f"Rating:     {b.rating_average:.2f} ({b.rating_count} reviews)")


@click.command("price")
@as_principal
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def book_price(principal: Principal, book_id: str, price: str) -> None:
    """Update a book's price (admin)."""
    handler = UpdateBookPriceHandler(book_repo=book_repository())

    try:
        book = handler.handle(principal, book_id=book_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book #{book_id} price updated to {book.price}")
