"""Application service: Show Warehouse Stock use case (query)."""

from __future__ import annotations

from fulfillment.application.dto import StockLineDTO
from fulfillment.domain.exceptions import UnknownWarehouse
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, warehouse_id: int) -> list[StockLineDTO]:
        with self._uow as uow:
            if uow.warehouses.get_by_id(warehouse_id) is None:
                raise UnknownWarehouse(f"Warehouse #{warehouse_id} not found")

            entries = uow.stock.list_for_warehouse(warehouse_id)
            products = uow.products.get_many([entry.product_id for entry in entries])

        return [
            StockLineDTO(
                product_id=entry.product_id,
                product_name=products[entry.product_id].name,
                sku=products[entry.product_id].sku,
                quantity=entry.quantity,
                price=str(products[entry.product_id].price),
                status=entry.status.value,
            )
            for entry in entries
            if entry.product_id in products
        ]
