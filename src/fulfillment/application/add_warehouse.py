"""Application service: Add Warehouse use case."""

from __future__ import annotations

import logging

from fulfillment.domain.exceptions import InvalidInput
from fulfillment.domain.model.warehouse import Warehouse
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddWarehouseHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, location: str) -> Warehouse:
        if not name or not name.strip():
            raise InvalidInput("Warehouse name is required")

        with self._uow as uow:
            warehouse = uow.warehouses.add(
                Warehouse(id=None, name=name.strip(), location=(location or "").strip())
            )
            uow.commit()

        logger.info("Warehouse #%s '%s' added", warehouse.id, warehouse.name)
        return warehouse
