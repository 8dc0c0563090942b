"""CLI commands for checkout and order history."""

from __future__ import annotations

import click

from storefront.application.dto import OrderConfirmationDTO, OrderDTO, OrderHistoryDTO
from storefront.application.identity import require_user
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.model.order import CardType, PaymentInfo, PaymentMethod, ShippingInfo
from storefront.infrastructure.bootstrap import order_repository, place_order_handler
from storefront.infrastructure.cli.context import CliContext, pass_cli, run_operation


@click.command("place")
@click.option("--city", required=True, help="Shipping city.")
@click.option("--phone", required=True, help="Contact phone.")
@click.option("--full-name", default=None, help="Recipient name.")
@click.option("--address", default=None, help="Street address.")
@click.option("--state", default=None, help="State or region.")
@click.option("--zip", "zip_code", default=None, help="Postal code.")
@click.option(
    "--payment-method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=None,
    help="Recorded payment method.",
)
@click.option("--card-last4", default=None, help="Last four card digits.")
@click.option(
    "--card-type",
    type=click.Choice([t.value for t in CardType]),
    default=None,
    help="Card network.",
)
@pass_cli
def order_place(
    cli: CliContext,
    city: str,
    phone: str,
    full_name: str | None,
    address: str | None,
    state: str | None,
    zip_code: str | None,
    payment_method: str | None,
    card_last4: str | None,
    card_type: str | None,
) -> None:
    """Check out: turn your cart into an order."""
    handler = place_order_handler(cli.settings)

    def place() -> OrderConfirmationDTO:
        user_id = require_user(cli.user_id)
        shipping = ShippingInfo.create(city, phone, full_name, address, state, zip_code)
        payment = None
        if payment_method:
            payment = PaymentInfo.create(payment_method, card_last4, card_type)
        return handler.handle(user_id, shipping, payment)

    def render(confirmation: OrderConfirmationDTO) -> None:
        click.echo(f"Order {confirmation.order_id} placed  (status=pending)")
        click.echo(f"Items: {confirmation.item_count}   Total: {confirmation.total}")
        if not confirmation.cart_cleared:
            click.echo("Warning: your cart could not be cleared.", err=True)

    run_operation(cli, place, lambda c: c.message, render)


@click.command("list")
@pass_cli
def order_list(cli: CliContext) -> None:
    """Show your order history, most recent first."""
    handler = ListOrdersHandler(order_repo=order_repository(cli.settings))

    def render(rows: list[OrderHistoryDTO]) -> None:
        if not rows:
            click.echo("No orders found.")
            return
        click.echo(f"{'Order':<20} {'Date':<26} {'Status':<11} {'Items':>5} {'Total':>10}")
        click.echo("-" * 76)
        for row in rows:
            click.echo(
                f"{row.order_id:<20} {row.order_date:<26} {row.status:<11} "
                f"{row.item_count:>5} {row.total:>10}"
            )

    run_operation(cli, lambda: handler.handle(cli.user_id), "Orders fetched", render)


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.order_id}  (status={dto.status})")
    click.echo(f"Placed:   {dto.order_date}")
    click.echo(f"Ship to:  {dto.shipping_info['city']}, phone {dto.shipping_info['phone']}")
    if dto.payment_info:
        click.echo(f"Payment:  {dto.payment_info['method']}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<27} {dto.shipping:>20}")
    click.echo(f"  {'Tax':<27} {dto.tax:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID, e.g. ORD-20240101-12345.")
@pass_cli
def order_show(cli: CliContext, order_id: str) -> None:
    """Show details of one of your orders."""
    handler = ShowOrderHandler(order_repo=order_repository(cli.settings))
    run_operation(
        cli,
        lambda: handler.handle(cli.user_id, order_id),
        "Order fetched",
        _display_order,
    )
