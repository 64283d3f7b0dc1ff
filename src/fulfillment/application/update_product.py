"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from fulfillment.domain.exceptions import UnknownProduct
from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Money
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int, new_price: str) -> tuple[Product, Money]:
        """Reprice a product; returns it together with its previous price.

        Placed orders keep the unit prices snapshotted on their lines.
        """
        price = Money.of(new_price)
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise UnknownProduct(f"Product #{product_id} not found")

            previous = product.price
            product.update_price(price)
            uow.products.save(product)
            uow.commit()

        logger.info("Product #%s repriced %s -> %s", product_id, previous, price)
        return product, previous
