"""Fixtures for tests that run against a real SQLite database file."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from sqlalchemy.orm import sessionmaker

from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Money
from fulfillment.domain.model.warehouse import Warehouse
from fulfillment.infrastructure.bootstrap import build_engine
from fulfillment.infrastructure.config import Settings
from fulfillment.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from fulfillment.infrastructure.persistence.tables import metadata


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'fulfillment.db'}",
        lock_timeout_seconds=10.0,
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def make_uow(engine):
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    return lambda: SqlUnitOfWork(factory)


@pytest.fixture
def seeded(make_uow) -> SimpleNamespace:
    """Warehouse 'Main' with Widget (P, 15.00) x5 and Gadget (Q, 25.00) x3."""
    with make_uow() as uow:
        warehouse = uow.warehouses.add(Warehouse(id=None, name="Main", location="Berlin"))
        p = uow.products.add(
            Product(id=None, name="Widget", sku="WID-1", price=Money.of("15.00"))
        )
        q = uow.products.add(
            Product(id=None, name="Gadget", sku="GAD-1", price=Money.of("25.00"))
        )
        uow.stock.set_quantity(warehouse.id, p.id, 5)
        uow.stock.set_quantity(warehouse.id, q.id, 3)
        uow.commit()
    return SimpleNamespace(warehouse=warehouse.id, p=p.id, q=q.id)


@pytest.fixture
def quantity(make_uow):
    def _quantity(warehouse_id: int, product_id: int) -> int | None:
        with make_uow() as uow:
            return uow.stock.get_quantity(warehouse_id, product_id)

    return _quantity
