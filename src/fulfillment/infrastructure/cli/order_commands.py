"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from fulfillment.application.cancel_order import CancelOrderHandler
from fulfillment.application.complete_order import CompleteOrderHandler
from fulfillment.application.dto import LineItemRequest, OrderSummaryDTO
from fulfillment.application.list_orders import ListOrdersHandler
from fulfillment.application.place_order import PlaceOrderHandler
from fulfillment.application.show_order import ShowOrderHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.order import OrderStatus
from fulfillment.infrastructure.bootstrap import retry_policy, unit_of_work


def _parse_items(raw: str) -> list[LineItemRequest]:
    """Parse '1:3,2:5' (product ID:quantity) into LineItemRequest list."""
    requests: list[LineItemRequest] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(product_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid item '{pair}'. Both parts must be integers.")
        requests.append(LineItemRequest(product_id=product_id, quantity=qty))
    return requests


@click.command("place")
@click.option("--warehouse", "warehouse_id", required=True, type=int, help="Warehouse ID.")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
def order_place(warehouse_id: int, customer: str, items: str) -> None:
    """Place an order, taking stock from one warehouse."""
    requests = _parse_items(items)
    handler = PlaceOrderHandler(unit_of_work(), retry_policy())

    try:
        order_id = handler.handle(warehouse_id, customer, requests)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} placed.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel a placed order (restores its stock)."""
    handler = CancelOrderHandler(unit_of_work(), retry_policy())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock restored.")


@click.command("complete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to complete.")
def order_complete(order_id: int) -> None:
    """Mark a placed order as completed (fulfilled)."""
    handler = CompleteOrderHandler(unit_of_work(), retry_policy())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} completed.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer:  {dto.customer_name}")
    click.echo(f"Warehouse: {dto.warehouse_name} (#{dto.warehouse_id})")
    click.echo(f"Created:   {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'SKU':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.sku:<10} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Order Total':<38} {dto.total:>20}")


def _display_summaries(summaries: list[OrderSummaryDTO]) -> None:
    if not summaries:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'ID':<6} {'Customer':<20} {'Warehouse':<16} {'Status':<10} "
        f"{'Total':>10}  {'Created'}"
    )
    click.echo("-" * 86)
    for s in summaries:
        click.echo(
            f"{s.id:<6} {s.customer_name:<20} {s.warehouse_name:<16} {s.status:<10} "
            f"{s.total:>10}  {s.created_at}"
        )


@click.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    default=None,
    help="Only orders in this status.",
)
def order_list(status: str | None) -> None:
    """List orders with their totals."""
    handler = ListOrdersHandler(unit_of_work())
    _display_summaries(handler.handle(OrderStatus(status.upper()) if status else None))


@click.command("recent")
@click.option("--limit", default=5, show_default=True, type=click.IntRange(min=1))
def order_recent(limit: int) -> None:
    """List the most recently placed orders."""
    handler = ListOrdersHandler(unit_of_work())
    _display_summaries(handler.recent(limit))
