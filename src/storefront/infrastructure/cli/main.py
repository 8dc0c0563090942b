import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Settings
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.context import CliContext
from storefront.infrastructure.cli.order_commands import order_list, order_place, order_show
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option("--user", "user_id", envvar="STOREFRONT_USER", default=None, help="Authenticated user id.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the response envelope as JSON.")
@click.pass_context
def cli(ctx: click.Context, user_id: str | None, as_json: bool) -> None:
    """Storefront: cart and checkout"""
    configure_logging()
    try:
        settings = Settings.from_env()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    ctx.obj = CliContext(user_id=user_id, as_json=as_json, settings=settings)


@cli.group()
def product() -> None:
    """Browse and manage the catalog."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """Check out and view orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
