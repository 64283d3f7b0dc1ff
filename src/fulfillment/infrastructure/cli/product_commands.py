"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from fulfillment.application.add_product import AddProductHandler
from fulfillment.application.update_product import UpdateProductHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Product name (unique).")
@click.option("--sku", required=True, help="Stock keeping unit (unique).")
@click.option("--price", required=True, help="Unit price, e.g. 15.00.")
def product_add(name: str, sku: str, price: str) -> None:
    """Add a product to the catalog."""
    try:
        product = AddProductHandler(unit_of_work()).handle(name=name, sku=sku, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} {product.sku} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List the catalog with current unit prices."""
    with unit_of_work() as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("Catalog is empty.")
        return

    click.echo(f"{'ID':<6} {'SKU':<12} {'Name':<24} {'Price':>10} {'Cur':>4}")
    click.echo("-" * 60)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.sku:<12} {p.name:<24} {str(p.price):>10} {p.price.currency:>4}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", required=True, help="New unit price, e.g. 29.99.")
def product_update(product_id: int, price: str) -> None:
    """Reprice a product; placed orders keep their old price."""
    try:
        product, previous = UpdateProductHandler(unit_of_work()).handle(
            product_id=product_id, new_price=price
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}': {previous} -> {product.price}")
