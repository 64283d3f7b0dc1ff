"""SQL implementation of the Stock Ledger.

``reserve`` is a single conditional UPDATE::

    UPDATE warehouse_stock
       SET quantity = quantity - :q
     WHERE warehouse_id = :w AND product_id = :p AND quantity >= :q

The check and the decrement are evaluated by the database as one
statement while it holds the row's write lock, so two concurrent
reservations can never both see the same quantity.  The lock is kept
until the surrounding unit of work commits or rolls back.
"""

from __future__ import annotations

from sqlalchemy import insert, select, update
from sqlalchemy.orm import Session

from fulfillment.domain.exceptions import InsufficientStock, InvalidInput, NoSuchEntry
from fulfillment.domain.model.stock import StockEntry
from fulfillment.domain.repository.stock_ledger import StockLedger
from fulfillment.infrastructure.persistence.tables import warehouse_stock

_stock = warehouse_stock.c


class SqlStockLedger(StockLedger):

    def __init__(self, session: Session) -> None:
        self._session = session

    def reserve(self, warehouse_id: int, product_id: int, quantity: int) -> None:
        self._check_positive(quantity)
        result = self._session.execute(
            update(warehouse_stock)
            .where(
                _stock.warehouse_id == warehouse_id,
                _stock.product_id == product_id,
                _stock.quantity >= quantity,
            )
            .values(quantity=_stock.quantity - quantity)
        )
        if result.rowcount == 1:
            return

        available = self.get_quantity(warehouse_id, product_id)
        raise InsufficientStock(product_id, quantity, available or 0)

    def release(self, warehouse_id: int, product_id: int, quantity: int) -> None:
        self._check_positive(quantity)
        result = self._session.execute(
            update(warehouse_stock)
            .where(_stock.warehouse_id == warehouse_id, _stock.product_id == product_id)
            .values(quantity=_stock.quantity + quantity)
        )
        if result.rowcount != 1:
            raise NoSuchEntry(
                f"No stock entry for product #{product_id} "
                f"in warehouse #{warehouse_id}"
            )

    def get_quantity(self, warehouse_id: int, product_id: int) -> int | None:
        return self._session.execute(
            select(_stock.quantity).where(
                _stock.warehouse_id == warehouse_id, _stock.product_id == product_id
            )
        ).scalar_one_or_none()

    def list_for_warehouse(self, warehouse_id: int) -> list[StockEntry]:
        rows = self._session.execute(
            select(warehouse_stock)
            .where(_stock.warehouse_id == warehouse_id)
            .order_by(_stock.product_id)
        )
        return [
            StockEntry(
                warehouse_id=row.warehouse_id,
                product_id=row.product_id,
                quantity=row.quantity,
            )
            for row in rows
        ]

    def set_quantity(self, warehouse_id: int, product_id: int, quantity: int) -> None:
        if quantity < 0:
            raise InvalidInput("Stock quantity cannot be negative")
        result = self._session.execute(
            update(warehouse_stock)
            .where(_stock.warehouse_id == warehouse_id, _stock.product_id == product_id)
            .values(quantity=quantity)
        )
        if result.rowcount == 0:
            self._session.execute(
                insert(warehouse_stock).values(
                    warehouse_id=warehouse_id, product_id=product_id, quantity=quantity
                )
            )

    @staticmethod
    def _check_positive(quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidInput("Stock movement quantity must be a positive integer")
