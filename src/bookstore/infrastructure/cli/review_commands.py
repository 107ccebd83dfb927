"""CLI commands for the Review aggregate."""

from __future__ import annotations

import click

from bookstore.application.create_review import CreateReviewHandler
from bookstore.application.delete_review import DeleteReviewHandler
from bookstore.application.list_reviews import ListBookReviewsHandler
from bookstore.application.update_review import UpdateReviewHandler
from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.identity import Principal
from bookstore.infrastructure.bootstrap import (
    book_repository,
    order_repository,
    ordering_config,
    review_repository,
)
from bookstore.infrastructure.cli.identity import as_principal


@click.command("add")
@as_principal
@click.option("--book", "book_id", required=True, help="Book ID.")
@click.option("--rating", required=True, type=int, help="1 to 5.")
@click.option("--title", required=True)
@click.option("--comment", required=True)
def review_add(principal: Principal, book_id: str, rating: int, title: str, comment: str) -> None:
    """Review a book."""
    handler = CreateReviewHandler(
        review_repo=review_repository(),
        book_repo=book_repository(),
        order_repo=order_repository(),
        config=ordering_config(),
    )

    try:
        dto = handler.handle(principal, book_id, rating=rating, title=title, comment=comment)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    badge = " (verified purchase)" if dto.is_verified_purchase else ""
    click.echo(f"Review #{dto.id} added{badge}.")


@click.command("edit")
@as_principal
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
@click.option("--rating", default=None, type=int)
@click.option("--title", default=None)
@click.option("--comment", default=None)
def review_edit(
    principal: Principal,
    review_id: int,
    rating: int | None,
    title: str | None,
    comment: str | None,
) -> None:
    """Edit your review."""
    handler = UpdateReviewHandler(
        review_repo=review_repository(),
        book_repo=book_repository(),
        config=ordering_config(),
    )

    try:
        handler.handle(principal, review_id, rating=rating, title=title, comment=comment)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review #{review_id} updated.")


@click.command("delete")
@as_principal
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
def review_delete(principal: Principal, review_id: int) -> None:
    """Delete a review (yours, or any as admin)."""
    handler = DeleteReviewHandler(
        review_repo=review_repository(),
        book_repo=book_repository(),
        config=ordering_config(),
    )

    try:
        handler.handle(principal, review_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review #{review_id} deleted.")


@click.command("list")
@click.option("--book", "book_id", required=True, help="Book ID.")
def review_list(book_id: str) -> None:
    """List a book's reviews, newest first."""
    handler = ListBookReviewsHandler(
        review_repo=review_repository(),
        book_repo=book_repository(),
    )

    try:
        reviews = handler.handle(book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not reviews:
        click.echo("No reviews yet.")
        return
    for r in reviews:
        badge = " [verified]" if r.is_verified_purchase else ""
        click.echo(f"#{r.id} {r.rating}/5 by {r.user_id}{badge}: {r.title}")
        click.echo(f"    {r.comment}")
