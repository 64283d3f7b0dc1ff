"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> int:
        """Persist a new order with its line items and assign its ID."""

    @abstractmethod
    def get_by_id(self, order_id: int, *, for_update: bool = False) -> Order | None:
        """Return an order by its ID, or None if not found.

        With ``for_update`` the order row stays locked until the unit of
        work ends, on engines that support row locks.
        """

    @abstractmethod
    def save_status(self, order: Order, expected: OrderStatus) -> bool:
        """Store ``order.status`` if the stored status is still *expected*.

        Returns False when a concurrent transaction changed it first.
        """

    @abstractmethod
    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        """Return orders ordered by ID, optionally filtered by status."""

    @abstractmethod
    def list_recent(self, limit: int) -> list[Order]:
        """Return the newest orders first."""

    @abstractmethod
    def count_by_status(self) -> dict[OrderStatus, int]:
        """Return the number of orders in each status."""
