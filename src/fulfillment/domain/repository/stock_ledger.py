"""Abstract Stock Ledger: the authoritative per-warehouse stock store.

``reserve`` must be atomic with respect to concurrent callers on the
same (warehouse_id, product_id) key: the availability check and the
decrement are one indivisible step, otherwise two placements can both
pass the check and oversell.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.stock import StockEntry


class StockLedger(ABC):

    @abstractmethod
    def reserve(self, warehouse_id: int, product_id: int, quantity: int) -> None:
        """Decrement stock by *quantity* if at least that much is available.

        Raises InsufficientStock otherwise, leaving the entry untouched.
        A missing entry counts as zero available.
        """

    @abstractmethod
    def release(self, warehouse_id: int, product_id: int, quantity: int) -> None:
        """Add *quantity* back to stock.

        Raises NoSuchEntry if the entry does not exist.
        """

    @abstractmethod
    def get_quantity(self, warehouse_id: int, product_id: int) -> int | None:
        """Return the current quantity, or None if there is no entry."""

    @abstractmethod
    def list_for_warehouse(self, warehouse_id: int) -> list[StockEntry]:
        """Return every stock entry of a warehouse, ordered by product ID."""

    @abstractmethod
    def set_quantity(self, warehouse_id: int, product_id: int, quantity: int) -> None:
        """Create or overwrite an entry (provisioning only)."""
