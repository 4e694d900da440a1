"""Product Repository — SQLAlchemy implementation of core ProductRepository.

Invariants:
    - One logical store operation per call, committed before returning
    - Session is injected, never created here: its lifecycle belongs to get_db
    - Missing ids raise NotFoundError; SQLAlchemy failures raise DatabaseError
    - Ids outside the INTEGER key range are missing by definition: no query is issued
    - list() projects only the five public columns, newest first (id breaks ties)
    - update() replaces every writable field: omitted optionals become NULL

Design Decisions:
    - session.get() for id lookups: primary-key fetch, uses the identity map
    - Successful operations logged at debug via ContextLogger.database();
      failures are left to the global error handler so each error is logged once
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.core.domain_types import ProductFields, ProductId
from stockroom.core.errors import NotFoundError
from stockroom.infrastructure.database import translate_store_errors
from stockroom.infrastructure.observability import ContextLogger
from stockroom.models.product import Product

PRODUCT_NOT_FOUND_MESSAGE = "Product not found"

# products.id is a 32-bit INTEGER column
_MIN_STORED_ID = -(2**31)
_MAX_STORED_ID = 2**31 - 1


class SqlProductRepository:
    """Product persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession, logger: ContextLogger):
        self._db = db
        self._logger = logger

    async def list(self) -> Sequence:
        async with translate_store_errors("list"):
            result = await self._db.execute(
                select(
                    Product.id,
                    Product.name,
                    Product.description,
                    Product.quantity,
                    Product.image_url,
                ).order_by(Product.created_at.desc(), Product.id.desc()),
            )
            rows = result.all()
        self._logger.database("list", count=len(rows))
        return rows

    async def get(self, product_id: ProductId) -> Product:
        async with translate_store_errors("get"):
            product = await self._require(product_id)
        self._logger.database("get", product_id=product_id)
        return product

    async def create(self, fields: ProductFields) -> Product:
        product = Product(
            name=fields.name,
            description=fields.description,
            quantity=fields.quantity,
            image_url=fields.image_url,
        )
        async with translate_store_errors("create"):
            self._db.add(product)
            await self._db.commit()
            await self._db.refresh(product)
        self._logger.database("create", product_id=product.id)
        return product

    async def update(
        self, product_id: ProductId, fields: ProductFields,
    ) -> Product:
        async with translate_store_errors("update"):
            product = await self._require(product_id)
            product.name = fields.name
            product.description = fields.description
            product.quantity = fields.quantity
            product.image_url = fields.image_url
            await self._db.commit()
            await self._db.refresh(product)
        self._logger.database("update", product_id=product_id)
        return product

    async def delete(self, product_id: ProductId) -> None:
        async with translate_store_errors("delete"):
            product = await self._require(product_id)
            await self._db.delete(product)
            await self._db.commit()
        self._logger.database("delete", product_id=product_id)

    async def _require(self, product_id: ProductId) -> Product:
        if not _MIN_STORED_ID <= product_id <= _MAX_STORED_ID:
            raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)
        product = await self._db.get(Product, product_id)
        if product is None:
            raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)
        return product
