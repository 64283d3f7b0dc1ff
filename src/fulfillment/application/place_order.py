"""Application service: Place Order use case.

Validates the request, then runs one all-or-nothing unit of work:

1. Check the warehouse and every product exist.
2. Reserve stock line by line, in ascending product ID order, so that
   two orders touching the same products always lock them in the same
   sequence and can never deadlock each other.
3. Create the PLACED order and its line items with price snapshots.
4. Commit.

Reservation happens before the order row is written, so a failed
reservation never leaves a visible order behind.  Any failure rolls the
whole attempt back.
"""

from __future__ import annotations

import logging

from fulfillment.application.dto import LineItemRequest
from fulfillment.application.retry import RetryPolicy
from fulfillment.domain.exceptions import (
    DomainException,
    InvalidInput,
    UnknownProduct,
    UnknownWarehouse,
)
from fulfillment.domain.model.order import Order, OrderLineItem
from fulfillment.domain.model.value_objects import MAX_DB_INT, Quantity
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork, retry: RetryPolicy | None = None) -> None:
        self._uow = uow
        self._retry = retry or RetryPolicy()

    def handle(
        self,
        warehouse_id: int,
        customer_name: str,
        line_items: list[LineItemRequest],
    ) -> int:
        """Place an order and return its newly assigned ID."""
        lines = self._validate(warehouse_id, customer_name, line_items)

        try:
            order_id = self._retry.run(
                lambda: self._place(warehouse_id, customer_name.strip(), lines),
                f"place order in warehouse #{warehouse_id}",
            )
        except DomainException as exc:
            logger.warning(
                "Order for %r in warehouse #%s rejected: %s",
                customer_name,
                warehouse_id,
                exc,
            )
            raise

        logger.info(
            "Order #%s placed for %r in warehouse #%s (%d line items)",
            order_id,
            customer_name,
            warehouse_id,
            len(lines),
        )
        return order_id

    def _place(
        self,
        warehouse_id: int,
        customer_name: str,
        lines: list[tuple[int, Quantity]],
    ) -> int:
        with self._uow as uow:
            if uow.warehouses.get_by_id(warehouse_id) is None:
                raise UnknownWarehouse(f"Warehouse #{warehouse_id} not found")

            products = uow.products.get_many([product_id for product_id, _ in lines])
            for product_id, _ in lines:
                if product_id not in products:
                    raise UnknownProduct(f"Product #{product_id} not found")

            # lines are sorted by product ID: deterministic lock order
            for product_id, quantity in lines:
                uow.stock.reserve(warehouse_id, product_id, quantity.value)

            order = Order.place(
                warehouse_id=warehouse_id,
                customer_name=customer_name,
                items=[
                    OrderLineItem(
                        product_id=product_id,
                        quantity=quantity,
                        unit_price=products[product_id].price,  # <-- price snapshot
                    )
                    for product_id, quantity in lines
                ],
            )
            order_id = uow.orders.add(order)
            uow.commit()
        return order_id

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _validate(
        warehouse_id: int,
        customer_name: str,
        line_items: list[LineItemRequest],
    ) -> list[tuple[int, Quantity]]:
        """Reject malformed requests and merge repeated products.

        Returns (product_id, quantity) pairs sorted by product ID.
        """
        if isinstance(warehouse_id, bool) or not isinstance(warehouse_id, int):
            raise InvalidInput("Warehouse ID must be an integer")
        if abs(warehouse_id) > MAX_DB_INT:
            raise InvalidInput(f"Warehouse ID out of range: {warehouse_id}")
        if not isinstance(customer_name, str) or not customer_name.strip():
            raise InvalidInput("Customer name is required")
        if not line_items:
            raise InvalidInput("Order must contain at least one item")

        merged: dict[int, int] = {}
        for item in line_items:
            if isinstance(item.product_id, bool) or not isinstance(item.product_id, int):
                raise InvalidInput(f"Invalid product ID: {item.product_id!r}")
            if abs(item.product_id) > MAX_DB_INT:
                raise InvalidInput(f"Product ID out of range: {item.product_id}")
            Quantity(item.quantity)  # rejects non-positive / non-integer / too large
            total = merged.get(item.product_id, 0) + item.quantity
            if total > MAX_DB_INT:
                raise InvalidInput(
                    f"Total quantity of product #{item.product_id} must not exceed "
                    f"{MAX_DB_INT}, got {total}"
                )
            merged[item.product_id] = total

        return [(product_id, Quantity(qty)) for product_id, qty in sorted(merged.items())]
