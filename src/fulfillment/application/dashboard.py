"""Application service: Dashboard use case (query): order counts by status."""

from __future__ import annotations

from fulfillment.application.dto import DashboardDTO
from fulfillment.domain.model.order import OrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class DashboardHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> DashboardDTO:
        with self._uow as uow:
            counts = uow.orders.count_by_status()

        return DashboardDTO(
            total_orders=sum(counts.values()),
            placed_orders=counts.get(OrderStatus.PLACED, 0),
            completed_orders=counts.get(OrderStatus.COMPLETED, 0),
            cancelled_orders=counts.get(OrderStatus.CANCELLED, 0),
        )
