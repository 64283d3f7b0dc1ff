"""Abstract unit of work: one transaction scope over all repositories.

Usage::

    with uow:
        uow.stock.reserve(...)
        uow.orders.add(...)
        uow.commit()

Leaving the block without ``commit()`` (normally or through an
exception) rolls back every effect.  A unit of work may be entered
again after it exits, which opens a fresh transaction; it must not be
shared between threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.repository.order_repository import OrderRepository
from fulfillment.domain.repository.product_repository import ProductRepository
from fulfillment.domain.repository.stock_ledger import StockLedger
from fulfillment.domain.repository.warehouse_repository import WarehouseRepository


class UnitOfWork(ABC):

    warehouses: WarehouseRepository
    products: ProductRepository
    stock: StockLedger
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # no-op after a successful commit
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every effect of this transaction durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted effect."""
