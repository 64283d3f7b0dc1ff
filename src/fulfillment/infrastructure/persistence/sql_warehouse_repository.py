"""SQL implementation of WarehouseRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from fulfillment.domain.model.warehouse import Warehouse
from fulfillment.domain.repository.warehouse_repository import WarehouseRepository
from fulfillment.infrastructure.persistence.tables import warehouses


class SqlWarehouseRepository(WarehouseRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        row = self._session.execute(
            select(warehouses).where(warehouses.c.warehouse_id == warehouse_id)
        ).first()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Warehouse]:
        rows = self._session.execute(select(warehouses).order_by(warehouses.c.warehouse_id))
        return [self._to_domain(row) for row in rows]

    def add(self, warehouse: Warehouse) -> Warehouse:
        result = self._session.execute(
            insert(warehouses).values(
                warehouse_name=warehouse.name, location=warehouse.location
            )
        )
        return Warehouse(
            id=result.inserted_primary_key[0],
            name=warehouse.name,
            location=warehouse.location,
        )

    @staticmethod
    def _to_domain(row) -> Warehouse:
        return Warehouse(id=row.warehouse_id, name=row.warehouse_name, location=row.location)
