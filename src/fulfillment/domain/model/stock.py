"""StockEntry: available quantity of one product in one warehouse.

Stock entries are shared mutable state: no aggregate owns them.  They are
the contended resource that placement and cancellation coordinate on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fulfillment.domain.exceptions import InsufficientStock, InvalidInput

# ---------------------------------------------------------------------------
# Reporting thresholds for the stock status label
# ---------------------------------------------------------------------------
IN_STOCK_ABOVE = 20
LOW_STOCK_FROM = 1


class StockStatus(Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"

    @staticmethod
    def for_quantity(quantity: int) -> StockStatus:
        if quantity > IN_STOCK_ABOVE:
            return StockStatus.IN_STOCK
        if quantity >= LOW_STOCK_FROM:
            return StockStatus.LOW_STOCK
        return StockStatus.OUT_OF_STOCK


@dataclass
class StockEntry:
    """Invariant: ``quantity`` is never negative."""

    warehouse_id: int
    product_id: int
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise InvalidInput("Stock quantity cannot be negative")

    @property
    def status(self) -> StockStatus:
        return StockStatus.for_quantity(self.quantity)

    def reserve(self, quantity: int) -> None:
        """Take *quantity* units out of stock, all or nothing."""
        if quantity <= 0:
            raise InvalidInput("Reservation quantity must be positive")
        if quantity > self.quantity:
            raise InsufficientStock(self.product_id, quantity, self.quantity)
        self.quantity -= quantity

    def release(self, quantity: int) -> None:
        """Put *quantity* units back; no upper bound is enforced."""
        if quantity <= 0:
            raise InvalidInput("Release quantity must be positive")
        self.quantity += quantity
