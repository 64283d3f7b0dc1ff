"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added to the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from fulfillment.domain.exceptions import InvalidInput
from fulfillment.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because price updates are a legitimate
    mutation on the aggregate.
    """

    id: int | None
    name: str
    sku: str
    price: Money

    def update_price(self, new_price: Money) -> None:
        """Change the canonical unit price.

        This does NOT affect any existing orders because their line
        items capture a price snapshot at placement time.
        """
        if new_price.amount <= 0:
            raise InvalidInput("Product price must be greater than zero")
        self.price = new_price
