"""Abstract repository for warehouses (reference data)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.warehouse import Warehouse


class WarehouseRepository(ABC):

    @abstractmethod
    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        """Return a warehouse by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Warehouse]:
        """Return every warehouse."""

    @abstractmethod
    def add(self, warehouse: Warehouse) -> Warehouse:
        """Persist a new warehouse and return it with its assigned ID."""
