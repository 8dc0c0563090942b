"""CLI commands for the caller's cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartChangeDTO, CartItemDTO
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.cli.context import CliContext, pass_cli, run_operation


@click.command("show")
@pass_cli
def cart_show(cli: CliContext) -> None:
    """Show the items in your cart, newest first."""
    handler = ShowCartHandler(
        cart_repo=cart_repository(cli.settings),
        product_repo=product_repository(cli.settings),
    )

    def render(items: list[CartItemDTO]) -> None:
        if not items:
            click.echo("Your cart is empty.")
            return
        click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
        click.echo(f"  {'-'*54}")
        for item in items:
            click.echo(
                f"  {item.product_id:<6} {item.name:<20} {item.quantity:>5} "
                f"{item.price:>10} {item.line_total:>10}"
            )

    run_operation(cli, lambda: handler.handle(cli.user_id), "Cart fetched", render)


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
@pass_cli
def cart_add(cli: CliContext, product_id: str, quantity: int) -> None:
    """Add a product to your cart (accumulates on repeat adds)."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(cli.settings),
        product_repo=product_repository(cli.settings),
    )

    def render(change: CartChangeDTO) -> None:
        click.echo(f"'{change.product_name}' in cart, quantity {change.quantity}")

    run_operation(
        cli,
        lambda: handler.handle(cli.user_id, product_id, quantity),
        "Item added to cart successfully",
        render,
    )


@click.command("update")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (at least 1).")
@pass_cli
def cart_update(cli: CliContext, product_id: str, quantity: int) -> None:
    """Set the quantity of a product already in your cart."""
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(cli.settings),
        product_repo=product_repository(cli.settings),
    )

    def render(change: CartChangeDTO) -> None:
        click.echo(f"'{change.product_name}' quantity set to {change.quantity}")

    run_operation(
        cli,
        lambda: handler.handle(cli.user_id, product_id, quantity),
        "Cart updated successfully",
        render,
    )


@click.command("remove")
@click.option("--product", "product_id", required=True, help="Product ID.")
@pass_cli
def cart_remove(cli: CliContext, product_id: str) -> None:
    """Remove a product from your cart."""
    handler = RemoveFromCartHandler(
        cart_repo=cart_repository(cli.settings),
        product_repo=product_repository(cli.settings),
    )
    run_operation(
        cli,
        lambda: handler.handle(cli.user_id, product_id),
        "Item removed from cart successfully",
        lambda change: click.echo(f"'{change.product_name}' removed from cart"),
    )


@click.command("clear")
@pass_cli
def cart_clear(cli: CliContext) -> None:
    """Remove everything from your cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(cli.settings))
    run_operation(
        cli,
        lambda: handler.handle(cli.user_id),
        "Cart cleared",
        lambda _: click.echo("Cart cleared."),
    )
