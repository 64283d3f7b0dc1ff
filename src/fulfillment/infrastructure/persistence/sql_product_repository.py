"""SQL implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import func, insert, select, update
from sqlalchemy.orm import Session

from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Money
from fulfillment.domain.repository.product_repository import ProductRepository
from fulfillment.infrastructure.persistence.tables import products


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        return self._first(select(products).where(products.c.product_id == product_id))

    def get_many(self, product_ids: list[int]) -> dict[int, Product]:
        if not product_ids:
            return {}
        rows = self._session.execute(
            select(products).where(products.c.product_id.in_(set(product_ids)))
        )
        return {row.product_id: self._to_domain(row) for row in rows}

    def get_by_name(self, name: str) -> Product | None:
        return self._first(
            select(products).where(func.lower(products.c.product_name) == name.lower())
        )

    def get_by_sku(self, sku: str) -> Product | None:
        return self._first(select(products).where(products.c.sku == sku))

    def list_all(self) -> list[Product]:
        rows = self._session.execute(select(products).order_by(products.c.product_id))
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> Product:
        result = self._session.execute(
            insert(products).values(
                product_name=product.name,
                sku=product.sku,
                price=product.price.amount,
                currency=product.price.currency,
            )
        )
        return Product(
            id=result.inserted_primary_key[0],
            name=product.name,
            sku=product.sku,
            price=product.price,
        )

    def save(self, product: Product) -> None:
        self._session.execute(
            update(products)
            .where(products.c.product_id == product.id)
            .values(
                product_name=product.name,
                sku=product.sku,
                price=product.price.amount,
                currency=product.price.currency,
            )
        )

    # --- Mapping --------------------------------------------------------------

    def _first(self, stmt) -> Product | None:
        row = self._session.execute(stmt).first()
        return self._to_domain(row) if row else None

    @staticmethod
    def _to_domain(row) -> Product:
        return Product(
            id=row.product_id,
            name=row.product_name,
            sku=row.sku,
            price=Money(row.price, row.currency),
        )
