"""SQL implementation of OrderRepository.

An order is stored as one ``orders`` row plus one ``order_items`` row
per line item.  Line items are only ever inserted, never updated.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import timezone

from sqlalchemy import func, insert, select, update
from sqlalchemy.orm import Session

from fulfillment.domain.model.order import Order, OrderLineItem, OrderStatus
from fulfillment.domain.model.value_objects import Money, Quantity
from fulfillment.domain.repository.order_repository import OrderRepository
from fulfillment.infrastructure.persistence.tables import order_items, orders


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> int:
        result = self._session.execute(
            insert(orders).values(
                warehouse_id=order.warehouse_id,
                customer_name=order.customer_name,
                order_date=order.created_at,
                status=order.status.value,
            )
        )
        order.id = result.inserted_primary_key[0]

        self._session.execute(
            insert(order_items),
            [
                {
                    "order_id": order.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "price": item.unit_price.amount,
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        )
        return order.id

    def get_by_id(self, order_id: int, *, for_update: bool = False) -> Order | None:
        stmt = select(orders).where(orders.c.order_id == order_id)
        if for_update:
            stmt = stmt.with_for_update()
        row = self._session.execute(stmt).first()
        if row is None:
            return None
        return self._to_domain(row, self._load_items([order_id])[order_id])

    def save_status(self, order: Order, expected: OrderStatus) -> bool:
        result = self._session.execute(
            update(orders)
            .where(orders.c.order_id == order.id, orders.c.status == expected.value)
            .values(status=order.status.value)
        )
        return result.rowcount == 1

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        stmt = select(orders).order_by(orders.c.order_id)
        if status is not None:
            stmt = stmt.where(orders.c.status == status.value)
        return self._load_orders(stmt)

    def list_recent(self, limit: int) -> list[Order]:
        stmt = (
            select(orders)
            .order_by(orders.c.order_date.desc(), orders.c.order_id.desc())
            .limit(limit)
        )
        return self._load_orders(stmt)

    def count_by_status(self) -> dict[OrderStatus, int]:
        rows = self._session.execute(
            select(orders.c.status, func.count()).group_by(orders.c.status)
        )
        return {OrderStatus(status): count for status, count in rows}

    # --- Loading --------------------------------------------------------------

    def _load_orders(self, stmt) -> list[Order]:
        rows = self._session.execute(stmt).all()
        items = self._load_items([row.order_id for row in rows])
        return [self._to_domain(row, items[row.order_id]) for row in rows]

    def _load_items(self, order_ids: list[int]) -> dict[int, list[OrderLineItem]]:
        grouped: dict[int, list[OrderLineItem]] = defaultdict(list)
        if not order_ids:
            return grouped
        rows = self._session.execute(
            select(order_items)
            .where(order_items.c.order_id.in_(order_ids))
            .order_by(order_items.c.order_id, order_items.c.product_id)
        )
        for row in rows:
            grouped[row.order_id].append(
                OrderLineItem(
                    product_id=row.product_id,
                    quantity=Quantity(row.quantity),
                    unit_price=Money(row.price, row.currency),
                )
            )
        return grouped

    @staticmethod
    def _to_domain(row, items: list[OrderLineItem]) -> Order:
        created_at = row.order_date
        if created_at.tzinfo is None:
            # SQLite drops the offset; timestamps are always stored in UTC
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=row.order_id,
            warehouse_id=row.warehouse_id,
            customer_name=row.customer_name,
            items=tuple(items),
            status=OrderStatus(row.status),
            created_at=created_at,
        )
