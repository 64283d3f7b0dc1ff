"""CLI commands for warehouses and their stock."""

from __future__ import annotations

import click

from fulfillment.application.add_warehouse import AddWarehouseHandler
from fulfillment.application.set_stock import SetStockHandler
from fulfillment.application.show_stock import ShowStockHandler
from fulfillment.application.warehouse_metrics import WarehouseMetricsHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Warehouse name.")
@click.option("--location", default="", help="Warehouse location.")
def warehouse_add(name: str, location: str) -> None:
    """Register a new warehouse."""
    handler = AddWarehouseHandler(unit_of_work())

    try:
        warehouse = handler.handle(name=name, location=location)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse #{warehouse.id} '{warehouse.name}' added")


@click.command("list")
def warehouse_list() -> None:
    """List all warehouses."""
    with unit_of_work() as uow:
        warehouses = uow.warehouses.list_all()

    if not warehouses:
        click.echo("No warehouses found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Location':<30}")
    click.echo("-" * 58)
    for w in warehouses:
        click.echo(f"{w.id:<6} {w.name:<20} {w.location:<30}")


@click.command("stock")
@click.option("--id", "warehouse_id", required=True, type=int, help="Warehouse ID.")
def warehouse_stock(warehouse_id: int) -> None:
    """Show stock levels of a warehouse."""
    handler = ShowStockHandler(unit_of_work())

    try:
        lines = handler.handle(warehouse_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'SKU':<10} {'Qty':>6} {'Price':>10}  {'Status'}")
    click.echo("-" * 70)
    for line in lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.sku:<10} "
            f"{line.quantity:>6} {line.price:>10}  {line.status}"
        )


@click.command("metrics")
@click.option("--id", "warehouse_id", required=True, type=int, help="Warehouse ID.")
def warehouse_metrics(warehouse_id: int) -> None:
    """Show stock metrics of a warehouse."""
    handler = WarehouseMetricsHandler(unit_of_work())

    try:
        metrics = handler.handle(warehouse_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products:      {metrics.total_products}")
    click.echo(f"Units:         {metrics.total_units}")
    click.echo(f"Low stock:     {metrics.low_stock_count}")
    click.echo(f"Out of stock:  {metrics.out_of_stock_count}")


@click.command("set")
@click.option("--warehouse", "warehouse_id", required=True, type=int, help="Warehouse ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Quantity in stock.")
def stock_set(warehouse_id: int, product_id: int, quantity: int) -> None:
    """Set the stock level of a product in a warehouse."""
    handler = SetStockHandler(unit_of_work())

    try:
        handler.handle(warehouse_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock of product #{product_id} in warehouse #{warehouse_id} set to {quantity}")
