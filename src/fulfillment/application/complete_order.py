"""Application service: Complete Order use case.

Entry point for the external fulfillment process.  Moves a PLACED order
to COMPLETED; stock was already taken at placement, so nothing else
changes.
"""

from __future__ import annotations

import logging

from fulfillment.application.retry import RetryPolicy
from fulfillment.domain.exceptions import InvalidStateTransition, UnknownOrder
from fulfillment.domain.model.order import OrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CompleteOrderHandler:

    def __init__(self, uow: UnitOfWork, retry: RetryPolicy | None = None) -> None:
        self._uow = uow
        self._retry = retry or RetryPolicy()

    def handle(self, order_id: int) -> None:
        self._retry.run(lambda: self._complete(order_id), f"complete order #{order_id}")
        logger.info("Order #%s completed", order_id)

    def _complete(self, order_id: int) -> None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise UnknownOrder(f"Order #{order_id} not found")

            order.complete()
            if not uow.orders.save_status(order, expected=OrderStatus.PLACED):
                raise InvalidStateTransition(f"Order #{order_id} is no longer PLACED")
            uow.commit()
