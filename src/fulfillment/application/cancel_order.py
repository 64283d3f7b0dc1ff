"""Application service: Cancel Order use case.

The compensating action for a placement.  Within one unit of work the
order is loaded (and locked), every line item's quantity is released
back to the warehouse, and the status flips PLACED -> CANCELLED.  If any
release fails the order stays PLACED and no stock is restored: an
order's stock effect is either fully outstanding or fully reversed.

Cancellation is not idempotent.  Cancelling a CANCELLED
order is rejected so its stock can never be restored twice.
"""

from __future__ import annotations

import logging

from fulfillment.application.retry import RetryPolicy
from fulfillment.domain.exceptions import DomainException, NotCancellable, UnknownOrder
from fulfillment.domain.model.order import OrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork, retry: RetryPolicy | None = None) -> None:
        self._uow = uow
        self._retry = retry or RetryPolicy()

    def handle(self, order_id: int) -> None:
        try:
            self._retry.run(lambda: self._cancel(order_id), f"cancel order #{order_id}")
        except DomainException as exc:
            logger.warning("Cancellation of order #%s rejected: %s", order_id, exc)
            raise
        logger.info("Order #%s cancelled, stock restored", order_id)

    def _cancel(self, order_id: int) -> None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise UnknownOrder(f"Order #{order_id} not found")

            # Checks the state machine before any stock is touched
            order.cancel()

            for item in order.items:  # ascending product ID
                uow.stock.release(order.warehouse_id, item.product_id, item.quantity.value)

            if not uow.orders.save_status(order, expected=OrderStatus.PLACED):
                # Another transaction finished the order first
                raise NotCancellable(f"Order #{order_id} is no longer PLACED")

            uow.commit()
