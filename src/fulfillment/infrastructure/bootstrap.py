"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from fulfillment.application.retry import RetryPolicy
from fulfillment.infrastructure.config import Settings, get_settings
from fulfillment.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from fulfillment.infrastructure.persistence.tables import metadata


def build_engine(settings: Settings) -> Engine:
    """Create an engine whose lock waits are bounded by the settings."""
    url = make_url(settings.database_url)
    backend = url.get_backend_name()

    connect_args: dict = {}
    if backend == "sqlite":
        connect_args = {
            "timeout": settings.lock_timeout_seconds,
            "check_same_thread": False,
        }
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    elif backend == "postgresql":
        lock_timeout_ms = int(settings.lock_timeout_seconds * 1000)
        connect_args = {"options": f"-c lock_timeout={lock_timeout_ms}"}

    engine = create_engine(url, echo=settings.sql_echo, connect_args=connect_args)
    if backend == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def engine() -> Engine:
    return build_engine(get_settings())


@lru_cache
def session_factory() -> sessionmaker:
    return sessionmaker(bind=engine(), expire_on_commit=False)


def unit_of_work() -> SqlUnitOfWork:
    """A fresh unit of work; give each thread its own."""
    return SqlUnitOfWork(session_factory())


def retry_policy() -> RetryPolicy:
    settings = get_settings()
    return RetryPolicy(
        attempts=settings.retry_attempts,
        backoff_seconds=settings.retry_backoff_seconds,
    )


def init_db() -> None:
    """Create any missing tables."""
    metadata.create_all(engine())
