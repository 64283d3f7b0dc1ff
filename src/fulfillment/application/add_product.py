"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from fulfillment.domain.exceptions import ConstraintViolation, InvalidInput
from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Money
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, sku: str, price: str) -> Product:
        """Add a new product to the catalog.

        Name and SKU are unique.  The lookups below give friendly errors;
        the table's unique constraints catch a concurrent add that slips
        past them.
        """
        if not name or not name.strip():
            raise InvalidInput("Product name is required")
        if not sku or not sku.strip():
            raise InvalidInput("Product SKU is required")
        name, sku = name.strip(), sku.strip()

        unit_price = Money.of(price)
        if unit_price.amount <= 0:
            raise InvalidInput("Product price must be greater than zero")

        try:
            with self._uow as uow:
                if uow.products.get_by_name(name) is not None:
                    raise InvalidInput(f"Product '{name}' already exists")
                if uow.products.get_by_sku(sku) is not None:
                    raise InvalidInput(f"SKU '{sku}' already in use")

                product = uow.products.add(
                    Product(id=None, name=name, sku=sku, price=unit_price)
                )
                uow.commit()
        except ConstraintViolation as exc:
            raise InvalidInput(
                f"Product '{name}' or SKU '{sku}' already exists"
            ) from exc

        logger.info("Product #%s %s '%s' added at %s", product.id, sku, name, unit_price)
        return product
