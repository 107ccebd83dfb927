"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from bookstore.application.dto import OrderDTO
from bookstore.application.list_orders import ListMyOrdersHandler, ListOrdersHandler
from bookstore.application.mark_order_paid import MarkOrderPaidHandler
from bookstore.application.place_order import PlaceOrderHandler
from bookstore.application.queries import OrderQuery
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.identity import Principal
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.model.value_objects import PaymentMethod, PaymentResult, ShippingAddress
from bookstore.infrastructure.bootstrap import (
    book_repository,
    cart_repository,
    order_repository,
    ordering_config,
)
from bookstore.infrastructure.cli.identity import as_principal

_STATUSES = [s.value for s in OrderStatus]


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method} ({'paid ' + dto.paid_at if dto.is_paid else 'unpaid'})")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    click.echo()

    click.echo(f"  {'Title':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        click.echo(
            f"  {item.title[:30]:<30} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Items':<37} {dto.total:>20}")
    click.echo(f"  {'Tax':<37} {dto.tax:>20}")
    click.echo(f"  {'Shipping':<37} {dto.shipping:>20}")
    click.echo(f"  {'Grand Total':<37} {dto.grand_total:>20}")


def _display_order_rows(orders: list[OrderDTO]) -> None:
    click.echo(f"{'ID':<6} {'Customer':<12} {'Status':<11} {'Paid':<5} {'Grand Total':>12} {'Created':>22}")
    click.echo("-" * 72)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.user_id[:12]:<12} {o.status:<11} {'yes' if o.is_paid else 'no':<5} "
            f"{o.grand_total:>12} {o.created_at:>22}"
        )


@click.command("place")
@as_principal
@click.option("--name", "full_name", required=True, help="Recipient full name.")
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--zip", "zip_code", required=True)
@click.option("--country", required=True)
@click.option("--phone", "phone_number", required=True)
@click.option(
    "--payment",
    "payment_method",
    required=True,
    type=click.Choice([m.value for m in PaymentMethod]),
)
@click.option("--tax", default="0", help="Tax amount.")
@click.option("--shipping", default="0", help="Shipping amount.")
def order_place(
    principal: Principal,
    full_name: str,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
    phone_number: str,
    payment_method: str,
    tax: str,
    shipping: str,
) -> None:
    """Place an order from everything in your cart."""
    handler = PlaceOrderHandler(
        order_repo=order_repository(),
        cart_repo=cart_repository(),
        book_repo=book_repository(),
        config=ordering_config(),
    )

    try:
        address = ShippingAddress(
            full_name=full_name,
            street=street,
            city=city,
            state=state,
            zip_code=zip_code,
            country=country,
            phone_number=phone_number,
        )
        dto = handler.handle(
            principal,
            shipping_address=address,
            payment_method=payment_method,
            tax_amount=tax,
            shipping_amount=shipping,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    _display_order(dto)


@click.command("show")
@as_principal
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(principal: Principal, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(principal, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("mine")
@as_principal
def order_mine(principal: Principal) -> None:
    """List your orders, newest first."""
    orders = ListMyOrdersHandler(order_repo=order_repository()).handle(principal)
    if not orders:
        click.echo("No orders found.")
        return
    _display_order_rows(orders)


@click.command("list")
@as_principal
@click.option("--status", default=None, type=click.Choice(_STATUSES))
@click.option("--paid/--unpaid", "is_paid", default=None)
@click.option("--customer", "customer_id", default=None, help="Only this user's orders.")
@click.option(
    "--sort",
    default="-created_at",
    type=click.Choice(["created_at", "-created_at", "total_amount", "-total_amount"]),
)
@click.option("--page", default=1, type=int)
@click.option("--limit", default=None, type=int)
def order_list(
    principal: Principal,
    status: str | None,
    is_paid: bool | None,
    customer_id: str | None,
    sort: str,
    page: int,
    limit: int | None,
) -> None:
    """List all orders (admin)."""
    handler = ListOrdersHandler(order_repo=order_repository(), config=ordering_config())

    try:
        result = handler.handle(
            principal,
            OrderQuery(
                status=OrderStatus(status) if status else None,
                is_paid=is_paid,
                user_id=customer_id,
                sort=sort,
                page=page,
                limit=limit,
            ),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No orders found.")
        return
    _display_order_rows(result.items)
    click.echo(f"Page {result.page} of {result.total_pages} ({result.total} orders)")


@click.command("pay")
@as_principal
@click.option("--id", "order_id", required=True, type=int, help="Order ID to mark paid.")
@click.option("--payment-id", default=None, help="Provider's payment ID.")
@click.option("--payment-status", default=None, help="Provider's payment status.")
@click.option("--email", "email_address", default=None, help="Payer's email address.")
def order_pay(
    principal: Principal,
    order_id: int,
    payment_id: str | None,
    payment_status: str | None,
    email_address: str | None,
) -> None:
    """Record payment for an order."""
    handler = MarkOrderPaidHandler(order_repo=order_repository())
    result = PaymentResult(id=payment_id, status=payment_status, email_address=email_address)

    try:
        dto = handler.handle(principal, order_id, result)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} paid, status is now {dto.status}.")


@click.command("status")
@as_principal
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, type=click.Choice(_STATUSES))
@click.option("--tracking", "tracking_number", default=None, help="Carrier tracking number.")
def order_status(
    principal: Principal,
    order_id: int,
    new_status: str,
    tracking_number: str | None,
) -> None:
    """Move an order to a new status (admin). Cancelling restores stock."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        book_repo=book_repository(),
    )

    try:
        dto = handler.handle(principal, order_id, new_status, tracking_number=tracking_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {dto.status}.")
