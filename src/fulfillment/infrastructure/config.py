"""Application settings, read from ``FULFILLMENT_*`` environment variables.

A ``.env`` file in the working directory is honoured as well.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):

    database_url: str = Field(default=f"sqlite:///{_DATA_DIR / 'fulfillment.db'}")
    sql_echo: bool = False

    # How long a transaction waits for a stock row lock before failing
    # with a retryable TransactionConflict.
    lock_timeout_seconds: float = Field(default=5.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1)
    retry_backoff_seconds: float = Field(default=0.05, ge=0)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="FULFILLMENT_", env_file=".env", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
