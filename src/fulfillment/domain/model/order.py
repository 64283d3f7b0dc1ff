"""Order aggregate: the core of the domain.

The Order is an aggregate root that exclusively owns its line items.
Line items are immutable: cancelling an order only changes its status,
the lines stay behind as a historical record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from fulfillment.domain.exceptions import (
    InvalidInput,
    InvalidStateTransition,
    NotCancellable,
)
from fulfillment.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PLACED = "PLACED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PLACED


@dataclass(frozen=True)
class OrderLineItem:
    """One product of an order, with the unit price locked at placement."""

    product_id: int
    quantity: Quantity
    unit_price: Money  # snapshot, immune to later price changes

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.place()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` does no validation so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    warehouse_id: int
    customer_name: str
    items: tuple[OrderLineItem, ...]
    status: OrderStatus = OrderStatus.PLACED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        warehouse_id: int,
        customer_name: str,
        items: list[OrderLineItem],
    ) -> Order:
        """Create a new PLACED order, enforcing all invariants."""
        if not customer_name or not customer_name.strip():
            raise InvalidInput("Customer name is required")

        if not items:
            raise InvalidInput("Order must contain at least one item")

        product_ids = [item.product_id for item in items]
        if len(set(product_ids)) != len(product_ids):
            raise InvalidInput("Each product may appear only once per order")

        return Order(
            id=None,
            warehouse_id=warehouse_id,
            customer_name=customer_name.strip(),
            items=tuple(sorted(items, key=lambda item: item.product_id)),
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition PLACED -> CANCELLED.

        Stock release must happen within the same unit of work
        (coordinated by the cancellation handler).
        """
        if self.status is not OrderStatus.PLACED:
            raise NotCancellable(
                f"Order #{self.id} cannot be cancelled; current status is "
                f"{self.status.value}"
            )
        self.status = OrderStatus.CANCELLED

    def complete(self) -> None:
        """Transition PLACED -> COMPLETED (external fulfillment)."""
        if self.status is not OrderStatus.PLACED:
            raise InvalidStateTransition(
                f"Order #{self.id} cannot be completed; current status is "
                f"{self.status.value}"
            )
        self.status = OrderStatus.COMPLETED

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        return Money.sum(item.line_total for item in self.items)
