import click

from fulfillment.application.dashboard import DashboardHandler
from fulfillment.infrastructure.bootstrap import init_db, unit_of_work
from fulfillment.infrastructure.cli.order_commands import (
    order_cancel,
    order_complete,
    order_list,
    order_place,
    order_recent,
    order_show,
)
from fulfillment.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from fulfillment.infrastructure.cli.warehouse_commands import (
    stock_set,
    warehouse_add,
    warehouse_list,
    warehouse_metrics,
    warehouse_stock,
)
from fulfillment.infrastructure.config import get_settings
from fulfillment.infrastructure.logging import setup_logging


@click.group()
def cli() -> None:
    """Warehouse order fulfillment"""
    setup_logging(get_settings().log_level)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def warehouse() -> None:
    """Manage warehouses."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Provision stock."""


@cli.group()
def order() -> None:
    """Manage orders."""


@db.command("init")
def db_init() -> None:
    """Create the database tables."""
    init_db()
    click.echo("Database initialised.")


@cli.command("dashboard")
def dashboard() -> None:
    """Show order counts by status."""
    counts = DashboardHandler(unit_of_work()).handle()
    click.echo(f"Total orders:      {counts.total_orders}")
    click.echo(f"Placed (pending):  {counts.placed_orders}")
    click.echo(f"Completed:         {counts.completed_orders}")
    click.echo(f"Cancelled:         {counts.cancelled_orders}")


# Register subcommands
warehouse.add_command(warehouse_add)
warehouse.add_command(warehouse_list)
warehouse.add_command(warehouse_metrics)
warehouse.add_command(warehouse_stock)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
stock.add_command(stock_set)
order.add_command(order_cancel)
order.add_command(order_complete)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_recent)
order.add_command(order_show)
