"""Application service: Show Order use case (query)."""

from __future__ import annotations

from fulfillment.application.dto import OrderDTO, OrderLineItemDTO, format_timestamp
from fulfillment.domain.exceptions import UnknownOrder
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise UnknownOrder(f"Order #{order_id} not found")

            warehouse = uow.warehouses.get_by_id(order.warehouse_id)
            products = uow.products.get_many([item.product_id for item in order.items])

        items = []
        for item in order.items:
            product = products.get(item.product_id)
            items.append(
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=product.name if product else "?",
                    sku=product.sku if product else "?",
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
            )

        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            warehouse_id=order.warehouse_id,
            warehouse_name=warehouse.name if warehouse else "?",
            customer_name=order.customer_name,
            status=order.status.value,
            items=items,
            total=str(order.total),
            created_at=format_timestamp(order.created_at),
        )
