"""Product persistence with soft deletes."""

from __future__ import annotations

from sqlalchemy import select

from models.product import Product

from .base import SessionRepository


class ProductRepository(SessionRepository):
    def _active(self):
        return select(Product).where(Product.deleted_at.is_(None))

    def find_all(self) -> list[Product]:
        statement = self._active().order_by(Product.id)
        return list(self._session.execute(statement).scalars())

    def find_by_id(self, product_id: int) -> Product | None:
        statement = self._active().where(Product.id == product_id)
        return self._session.execute(statement).scalars().first()

    def insert(self, product: Product) -> Product:
        self._session.add(product)
        self._commit()
        return product

    def update(self, product: Product) -> Product:
        self._commit()
        return product

    def delete(self, product: Product) -> None:
        product.mark_deleted()
        self._commit()
