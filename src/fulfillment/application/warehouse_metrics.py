"""Application service: Warehouse Metrics use case (query)."""

from __future__ import annotations

from fulfillment.application.dto import WarehouseMetricsDTO
from fulfillment.domain.exceptions import UnknownWarehouse
from fulfillment.domain.model.stock import StockStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class WarehouseMetricsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, warehouse_id: int) -> WarehouseMetricsDTO:
        with self._uow as uow:
            if uow.warehouses.get_by_id(warehouse_id) is None:
                raise UnknownWarehouse(f"Warehouse #{warehouse_id} not found")
            entries = uow.stock.list_for_warehouse(warehouse_id)

        return WarehouseMetricsDTO(
            warehouse_id=warehouse_id,
            total_products=len(entries),
            total_units=sum(entry.quantity for entry in entries),
            low_stock_count=sum(1 for e in entries if e.status is StockStatus.LOW_STOCK),
            out_of_stock_count=sum(
                1 for e in entries if e.status is StockStatus.OUT_OF_STOCK
            ),
        )
