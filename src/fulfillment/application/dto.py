"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItemRequest:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: int
    product_name: str
    sku: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    warehouse_id: int
    warehouse_name: str
    customer_name: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: one row of an order listing, with its computed total."""

    id: int
    warehouse_id: int
    warehouse_name: str
    customer_name: str
    status: str
    total: str
    created_at: str


@dataclass(frozen=True)
class StockLineDTO:
    product_id: int
    product_name: str
    sku: str
    quantity: int
    price: str
    status: str  # "In Stock" / "Low Stock" / "Out of Stock"


@dataclass(frozen=True)
class WarehouseMetricsDTO:
    warehouse_id: int
    total_products: int
    total_units: int
    low_stock_count: int
    out_of_stock_count: int


@dataclass(frozen=True)
class DashboardDTO:
    total_orders: int
    placed_orders: int
    completed_orders: int
    cancelled_orders: int


def format_timestamp(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")
