"""Tests for SqlUnitOfWork: repositories, transactions and error mapping."""

import sqlite3
from datetime import timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from fulfillment.domain.exceptions import (
    AmbiguousCommit,
    ConstraintViolation,
    StorageError,
    TransactionConflict,
)
from fulfillment.domain.model.order import Order, OrderLineItem, OrderStatus
from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Money, Quantity
from fulfillment.infrastructure.persistence.sql_unit_of_work import is_conflict


def _operational_error(message: str) -> OperationalError:
    return OperationalError("UPDATE warehouse_stock ...", {}, sqlite3.OperationalError(message))


def _order(seeded, customer: str = "Alice") -> Order:
    return Order.place(
        seeded.warehouse,
        customer,
        [
            OrderLineItem(seeded.q, Quantity(2), Money.of("25.00")),
            OrderLineItem(seeded.p, Quantity(1), Money.of("15.00")),
        ],
    )


class TestOrderRepository:

    def test_add_and_load(self, make_uow, seeded):
        with make_uow() as uow:
            order_id = uow.orders.add(_order(seeded))
            uow.commit()

        with make_uow() as uow:
            order = uow.orders.get_by_id(order_id)

        assert order.status == OrderStatus.PLACED
        assert order.customer_name == "Alice"
        assert order.created_at.tzinfo == timezone.utc
        assert [(i.product_id, i.quantity.value) for i in order.items] == [
            (seeded.p, 1),
            (seeded.q, 2),
        ]
        assert order.items[1].unit_price.amount == Decimal("25.00")
        assert order.total == Money.of("65.00")

    def test_missing_order(self, make_uow, seeded):
        with make_uow() as uow:
            assert uow.orders.get_by_id(123, for_update=True) is None

    def test_save_status_is_guarded(self, make_uow, seeded):
        with make_uow() as uow:
            order_id = uow.orders.add(_order(seeded))
            uow.commit()

        with make_uow() as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            order.cancel()
            assert uow.orders.save_status(order, expected=OrderStatus.PLACED)
            # second attempt sees CANCELLED, not PLACED
            assert not uow.orders.save_status(order, expected=OrderStatus.PLACED)
            uow.commit()

    def test_listing_and_counts(self, make_uow, seeded):
        with make_uow() as uow:
            first = uow.orders.add(_order(seeded, "Alice"))
            second = uow.orders.add(_order(seeded, "Bob"))
            uow.commit()

        with make_uow() as uow:
            order = uow.orders.get_by_id(second)
            order.complete()
            uow.orders.save_status(order, expected=OrderStatus.PLACED)
            uow.commit()

        with make_uow() as uow:
            assert [o.id for o in uow.orders.list_all()] == [first, second]
            assert [o.id for o in uow.orders.list_all(OrderStatus.COMPLETED)] == [second]
            assert [o.id for o in uow.orders.list_recent(1)] == [second]
            assert uow.orders.count_by_status() == {
                OrderStatus.PLACED: 1,
                OrderStatus.COMPLETED: 1,
            }

    def test_uncommitted_order_is_discarded(self, make_uow, seeded):
        with make_uow() as uow:
            uow.orders.add(_order(seeded))

        with make_uow() as uow:
            assert uow.orders.list_all() == []


class TestProductAndWarehouseRepositories:

    def test_product_lookups(self, make_uow, seeded):
        with make_uow() as uow:
            assert uow.products.get_by_name("widget").id == seeded.p
            assert uow.products.get_by_sku("GAD-1").id == seeded.q
            assert set(uow.products.get_many([seeded.p, 999])) == {seeded.p}
            assert uow.products.get_many([]) == {}

    def test_price_update(self, make_uow, seeded):
        with make_uow() as uow:
            product = uow.products.get_by_id(seeded.p)
            product.update_price(Money.of("19.99"))
            uow.products.save(product)
            uow.commit()

        with make_uow() as uow:
            assert uow.products.get_by_id(seeded.p).price.amount == Decimal("19.99")

    def test_warehouses(self, make_uow, seeded):
        with make_uow() as uow:
            assert [w.name for w in uow.warehouses.list_all()] == ["Main"]
            assert uow.warehouses.get_by_id(seeded.warehouse).location == "Berlin"


class TestErrorMapping:

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("database is locked", True),
            ("database table is locked", True),
            ("disk I/O error", False),
        ],
    )
    def test_is_conflict(self, message, expected):
        assert is_conflict(_operational_error(message)) is expected

    def test_postgres_sqlstate_is_conflict(self):
        class _PgError(Exception):
            sqlstate = "40P01"

        error = OperationalError("UPDATE ...", {}, _PgError("deadlock detected"))
        assert is_conflict(error)

    def test_lock_error_in_body_becomes_conflict(self, make_uow, seeded):
        with pytest.raises(TransactionConflict):
            with make_uow():
                raise _operational_error("database is locked")

    def test_lock_error_on_commit_becomes_conflict(self, make_uow, seeded, monkeypatch):
        with pytest.raises(TransactionConflict):
            with make_uow() as uow:
                uow.stock.reserve(seeded.warehouse, seeded.p, 1)
                monkeypatch.setattr(
                    uow._session, "commit", _raiser(_operational_error("database is locked"))
                )
                uow.commit()

    def test_other_commit_failure_is_ambiguous(self, make_uow, seeded, monkeypatch):
        with pytest.raises(AmbiguousCommit):
            with make_uow() as uow:
                uow.stock.reserve(seeded.warehouse, seeded.p, 1)
                monkeypatch.setattr(
                    uow._session,
                    "commit",
                    _raiser(_operational_error("server closed the connection unexpectedly")),
                )
                uow.commit()

    def test_other_error_in_body_becomes_storage_error(self, make_uow, seeded, quantity):
        with pytest.raises(StorageError, match="disk I/O error"):
            with make_uow() as uow:
                uow.stock.reserve(seeded.warehouse, seeded.p, 1)
                raise _operational_error("disk I/O error")
        assert quantity(seeded.warehouse, seeded.p) == 5

    def test_unique_violation_becomes_constraint_violation(self, make_uow, seeded):
        with pytest.raises(ConstraintViolation):
            with make_uow() as uow:
                uow.products.add(
                    Product(id=None, name="Widget", sku="WID-2", price=Money.of("1.00"))
                )
                uow.commit()

        with make_uow() as uow:
            assert [p.sku for p in uow.products.list_all()] == ["WID-1", "GAD-1"]

    def test_constraint_failure_on_commit_is_not_ambiguous(
        self, make_uow, seeded, monkeypatch
    ):
        error = IntegrityError(
            "COMMIT", {}, sqlite3.IntegrityError("FOREIGN KEY constraint failed")
        )
        with pytest.raises(ConstraintViolation):
            with make_uow() as uow:
                monkeypatch.setattr(uow._session, "commit", _raiser(error))
                uow.commit()

    def test_unit_of_work_is_not_reentrant(self, make_uow, seeded):
        uow = make_uow()
        with uow:
            with pytest.raises(RuntimeError):
                uow.__enter__()


def _raiser(error: Exception):
    def _raise(*args, **kwargs):
        raise error

    return _raise
