"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.cli.context import CliContext, pass_cli, run_operation


def _product_row(product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "price": str(product.price),
        "description": product.description,
        "category": product.category,
    }


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--description", default="", help="Short description.")
@click.option("--category", default="", help="Catalog category.")
@pass_cli
def product_add(cli: CliContext, name: str, price: str, description: str, category: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(cli.settings))

    def render(row: dict) -> None:
        click.echo(f"Product #{row['id']} '{row['name']}' added at {row['price']}")

    run_operation(
        cli,
        lambda: _product_row(handler.handle(name, price, description, category)),
        "Product added",
        render,
    )


@click.command("list")
@pass_cli
def product_list(cli: CliContext) -> None:
    """List all products in the catalog."""
    repo = product_repository(cli.settings)

    def render(rows: list[dict]) -> None:
        if not rows:
            click.echo("No products found.")
            return
        click.echo(f"{'ID':<6} {'Name':<24} {'Category':<14} {'Price':>10}")
        click.echo("-" * 57)
        for row in rows:
            click.echo(
                f"{row['id']:<6} {row['name']:<24} {row['category']:<14} {row['price']:>10}"
            )

    run_operation(
        cli,
        lambda: [_product_row(p) for p in repo.list_all()],
        "Products fetched",
        render,
    )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@pass_cli
def product_update(cli: CliContext, product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository(cli.settings))
    run_operation(
        cli,
        lambda: handler.handle(product_id=product_id, new_price=price),
        "Product updated",
        lambda _: click.echo(f"Product #{product_id} price updated to ${price}"),
    )
