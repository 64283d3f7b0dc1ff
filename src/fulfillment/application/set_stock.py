"""Application service: Set Stock use case.

Provisioning only: sets the level of a (warehouse, product) entry, for
instance when goods are received.  Orders never go through here.
"""

from __future__ import annotations

import logging

from fulfillment.domain.exceptions import InvalidInput, UnknownProduct, UnknownWarehouse
from fulfillment.domain.model.value_objects import MAX_DB_INT
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, warehouse_id: int, product_id: int, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidInput("Stock quantity must be a non-negative integer")
        if quantity > MAX_DB_INT:
            raise InvalidInput(f"Stock quantity must not exceed {MAX_DB_INT}")

        with self._uow as uow:
            if uow.warehouses.get_by_id(warehouse_id) is None:
                raise UnknownWarehouse(f"Warehouse #{warehouse_id} not found")
            if uow.products.get_by_id(product_id) is None:
                raise UnknownProduct(f"Product #{product_id} not found")

            uow.stock.set_quantity(warehouse_id, product_id, quantity)
            uow.commit()

        logger.info(
            "Stock of product #%s in warehouse #%s set to %d",
            product_id,
            warehouse_id,
            quantity,
        )
