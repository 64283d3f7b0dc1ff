"""Relational schema (SQLAlchemy Core).

The CHECK constraints restate the domain invariants so that no writer,
however buggy, can store a negative stock level or an empty line item.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    UniqueConstraint,
)

metadata = MetaData()

warehouses = Table(
    "warehouses",
    metadata,
    Column("warehouse_id", Integer, primary_key=True, autoincrement=True),
    Column("warehouse_name", String(100), nullable=False),
    Column("location", String(200), nullable=False, default=""),
)

products = Table(
    "products",
    metadata,
    Column("product_id", Integer, primary_key=True, autoincrement=True),
    Column("product_name", String(100), nullable=False, unique=True),
    Column("sku", String(64), nullable=False, unique=True),
    Column("price", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
)

warehouse_stock = Table(
    "warehouse_stock",
    metadata,
    Column(
        "warehouse_id",
        Integer,
        ForeignKey("warehouses.warehouse_id"),
        primary_key=True,
    ),
    Column(
        "product_id",
        Integer,
        ForeignKey("products.product_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("quantity", Integer, nullable=False),
    CheckConstraint("quantity >= 0", name="ck_warehouse_stock_quantity_non_negative"),
)

orders = Table(
    "orders",
    metadata,
    Column("order_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "warehouse_id",
        Integer,
        ForeignKey("warehouses.warehouse_id"),
        nullable=False,
        index=True,
    ),
    Column("customer_name", String(200), nullable=False),
    Column("order_date", DateTime(timezone=True), nullable=False),
    Column("status", String(16), nullable=False, index=True),
    CheckConstraint(
        "status IN ('PLACED', 'COMPLETED', 'CANCELLED')", name="ck_orders_status"
    ),
)

order_items = Table(
    "order_items",
    metadata,
    Column("order_item_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "order_id",
        Integer,
        ForeignKey("orders.order_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("product_id", Integer, nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    UniqueConstraint("order_id", "product_id", name="uq_order_items_order_product"),
)
