"""Tests for the reference-data and stock provisioning use cases."""

import logging
from decimal import Decimal

import pytest

from fulfillment.application.add_product import AddProductHandler
from fulfillment.application.add_warehouse import AddWarehouseHandler
from fulfillment.application.set_stock import SetStockHandler
from fulfillment.application.update_product import UpdateProductHandler
from fulfillment.domain.exceptions import InvalidInput, UnknownProduct, UnknownWarehouse
from tests.fakes import FakeUnitOfWork


def _catalog() -> FakeUnitOfWork:
    uow = FakeUnitOfWork()
    AddWarehouseHandler(uow).handle("Main", "Berlin")
    AddProductHandler(uow).handle("Widget", "WID-1", "15.00")
    return uow


class TestAddWarehouse:

    def test_assigns_ids(self):
        uow = FakeUnitOfWork()
        first = AddWarehouseHandler(uow).handle("Main", "Berlin")
        second = AddWarehouseHandler(uow).handle("North", "Oslo")
        assert (first.id, second.id) == (1, 2)
        assert uow.store.warehouses[2].location == "Oslo"

    def test_name_required(self):
        with pytest.raises(InvalidInput):
            AddWarehouseHandler(FakeUnitOfWork()).handle(" ", "Berlin")


class TestAddProduct:

    def test_adds_product(self):
        uow = _catalog()
        product = uow.store.products[1]
        assert product.sku == "WID-1"
        assert product.price.amount == Decimal("15.00")

    def test_addition_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="fulfillment.application"):
            _catalog()
        assert "Warehouse #1 'Main' added" in caplog.text
        assert "Product #1 WID-1 'Widget' added at 15.00" in caplog.text

    def test_duplicate_name_rejected(self):
        uow = _catalog()
        with pytest.raises(InvalidInput, match="already exists"):
            AddProductHandler(uow).handle("widget", "WID-2", "1.00")

    def test_duplicate_sku_rejected(self):
        uow = _catalog()
        with pytest.raises(InvalidInput, match="already in use"):
            AddProductHandler(uow).handle("Gadget", "WID-1", "1.00")

    def test_zero_price_rejected(self):
        with pytest.raises(InvalidInput, match="greater than zero"):
            AddProductHandler(FakeUnitOfWork()).handle("Widget", "WID-1", "0")


class TestUpdateProduct:

    def test_updates_price(self):
        uow = _catalog()
        UpdateProductHandler(uow).handle(1, "29.99")
        assert uow.store.products[1].price.amount == Decimal("29.99")

    def test_unknown_product(self):
        with pytest.raises(UnknownProduct):
            UpdateProductHandler(_catalog()).handle(9, "1.00")


class TestSetStock:

    def test_creates_then_overwrites(self):
        uow = _catalog()
        SetStockHandler(uow).handle(1, 1, 40)
        assert uow.store.quantity(1, 1) == 40
        SetStockHandler(uow).handle(1, 1, 7)
        assert uow.store.quantity(1, 1) == 7

    def test_negative_rejected(self):
        with pytest.raises(InvalidInput, match="non-negative"):
            SetStockHandler(_catalog()).handle(1, 1, -1)

    def test_too_large_rejected(self):
        uow = _catalog()
        with pytest.raises(InvalidInput, match="must not exceed"):
            SetStockHandler(uow).handle(1, 1, 2**31)
        assert uow.store.quantity(1, 1) is None

    def test_unknown_warehouse(self):
        with pytest.raises(UnknownWarehouse):
            SetStockHandler(_catalog()).handle(5, 1, 1)

    def test_unknown_product(self):
        with pytest.raises(UnknownProduct):
            SetStockHandler(_catalog()).handle(1, 5, 1)
