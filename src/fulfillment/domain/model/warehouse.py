"""Warehouse: immutable reference data for the fulfillment core."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Warehouse:
    id: int | None
    name: str
    location: str
