"""Unit tests for StockEntry and the stock status policy."""

import pytest

from fulfillment.domain.exceptions import InsufficientStock, InvalidInput
from fulfillment.domain.model.stock import (
    IN_STOCK_ABOVE,
    LOW_STOCK_FROM,
    StockEntry,
    StockStatus,
)


class TestStockEntryReserve:

    def test_reserve_decrements(self):
        entry = StockEntry(warehouse_id=1, product_id=1, quantity=5)
        entry.reserve(3)
        assert entry.quantity == 2

    def test_reserve_everything(self):
        entry = StockEntry(warehouse_id=1, product_id=1, quantity=5)
        entry.reserve(5)
        assert entry.quantity == 0

    def test_reserve_more_than_available_rejected(self):
        entry = StockEntry(warehouse_id=1, product_id=7, quantity=2)
        with pytest.raises(InsufficientStock) as excinfo:
            entry.reserve(3)
        assert excinfo.value.product_id == 7
        assert excinfo.value.requested == 3
        assert excinfo.value.available == 2
        assert entry.quantity == 2

    def test_reserve_zero_rejected(self):
        entry = StockEntry(warehouse_id=1, product_id=1, quantity=5)
        with pytest.raises(InvalidInput, match="must be positive"):
            entry.reserve(0)


class TestStockEntryRelease:

    def test_release_adds_back(self):
        entry = StockEntry(warehouse_id=1, product_id=1, quantity=2)
        entry.release(3)
        assert entry.quantity == 5

    def test_release_has_no_upper_bound(self):
        entry = StockEntry(warehouse_id=1, product_id=1, quantity=0)
        entry.release(10_000)
        assert entry.quantity == 10_000

    def test_release_negative_rejected(self):
        entry = StockEntry(warehouse_id=1, product_id=1, quantity=2)
        with pytest.raises(InvalidInput, match="must be positive"):
            entry.release(-1)


def test_negative_entry_rejected():
    with pytest.raises(InvalidInput, match="cannot be negative"):
        StockEntry(warehouse_id=1, product_id=1, quantity=-1)


class TestStockStatus:

    @pytest.mark.parametrize(
        "quantity, expected",
        [
            (0, StockStatus.OUT_OF_STOCK),
            (1, StockStatus.LOW_STOCK),
            (20, StockStatus.LOW_STOCK),
            (21, StockStatus.IN_STOCK),
            (500, StockStatus.IN_STOCK),
        ],
    )
    def test_labels(self, quantity, expected):
        assert StockStatus.for_quantity(quantity) is expected

    def test_thresholds(self):
        assert IN_STOCK_ABOVE == 20
        assert LOW_STOCK_FROM == 1

    def test_label_text(self):
        assert StockEntry(1, 1, 3).status.value == "Low Stock"
