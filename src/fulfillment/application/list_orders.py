"""Application service: List Orders use case (query).

Order totals are computed from the line-item price snapshots, never
from current product prices.
"""

from __future__ import annotations

from fulfillment.application.dto import OrderSummaryDTO, format_timestamp
from fulfillment.domain.model.order import Order, OrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork

RECENT_ORDERS_LIMIT = 5


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, status: OrderStatus | None = None) -> list[OrderSummaryDTO]:
        with self._uow as uow:
            orders = uow.orders.list_all(status=status)
            names = {w.id: w.name for w in uow.warehouses.list_all()}
        return [self._to_dto(order, names) for order in orders]

    def recent(self, limit: int = RECENT_ORDERS_LIMIT) -> list[OrderSummaryDTO]:
        """Newest orders first."""
        with self._uow as uow:
            orders = uow.orders.list_recent(limit)
            names = {w.id: w.name for w in uow.warehouses.list_all()}
        return [self._to_dto(order, names) for order in orders]

    @staticmethod
    def _to_dto(order: Order, warehouse_names: dict) -> OrderSummaryDTO:
        return OrderSummaryDTO(
            id=order.id,  # type: ignore[arg-type]
            warehouse_id=order.warehouse_id,
            warehouse_name=warehouse_names.get(order.warehouse_id, "?"),
            customer_name=order.customer_name,
            status=order.status.value,
            total=str(order.total),
            created_at=format_timestamp(order.created_at),
        )
