"""SQLAlchemy-backed unit of work.

Each ``with uow:`` block opens a fresh Session, i.e. one database
transaction.  Storage errors are translated at this boundary:

- lock timeouts, deadlocks and serialization failures (and SQLite's
  "database is locked") become ``TransactionConflict``; nothing was
  committed, so callers may retry;
- unique, foreign-key and check violations become ``ConstraintViolation``;
- any other error raised inside the block becomes ``StorageError``;
- any other failure of the COMMIT itself becomes ``AmbiguousCommit``,
  because the server may or may not have applied it.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fulfillment.domain.exceptions import (
    AmbiguousCommit,
    ConstraintViolation,
    StorageError,
    TransactionConflict,
)
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from fulfillment.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from fulfillment.infrastructure.persistence.sql_stock_ledger import SqlStockLedger
from fulfillment.infrastructure.persistence.sql_warehouse_repository import (
    SqlWarehouseRepository,
)

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected, lock_not_available
_RETRYABLE_SQLSTATES = frozenset({"40001", "40P01", "55P03"})
_SQLITE_LOCK_MESSAGES = ("database is locked", "database table is locked")


def is_conflict(exc: DBAPIError) -> bool:
    """True if *exc* means "lost a race for a lock", safe to retry."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(text in message for text in _SQLITE_LOCK_MESSAGES)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        if self._session is not None:
            raise RuntimeError("Unit of work is already active")
        self._session = self._session_factory()
        self.warehouses = SqlWarehouseRepository(self._session)
        self.products = SqlProductRepository(self._session)
        self.stock = SqlStockLedger(self._session)
        self.orders = SqlOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        except SQLAlchemyError:
            if exc is None:
                raise
            # keep the original error
            logger.exception("Rollback failed while handling %r", exc)
        finally:
            self._session.close()
            self._session = None

        if isinstance(exc, DBAPIError):
            if is_conflict(exc):
                raise TransactionConflict(str(exc.orig)) from exc
            if isinstance(exc, IntegrityError):
                raise ConstraintViolation(str(exc.orig)) from exc
            logger.error("Storage error, transaction rolled back: %s", exc)
            raise StorageError(str(exc.orig)) from exc

    def commit(self) -> None:
        try:
            self._session.commit()
        except DBAPIError as exc:
            if is_conflict(exc):
                raise TransactionConflict(str(exc.orig)) from exc
            if isinstance(exc, IntegrityError):
                # deferred constraint: the server refused the commit
                raise ConstraintViolation(str(exc.orig)) from exc
            logger.error("Commit outcome unknown: %s", exc)
            raise AmbiguousCommit(
                "Commit failed with an unknown outcome; reconcile manually"
            ) from exc

    def rollback(self) -> None:
        self._session.rollback()
