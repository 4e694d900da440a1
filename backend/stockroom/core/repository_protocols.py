"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Missing records signal NotFoundError; store failures signal DatabaseError

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; validation in core stays sync and pure
"""

from datetime import datetime
from typing import Protocol, Sequence

from stockroom.core.domain_types import ProductFields, ProductId


class ProductSummaryLike(Protocol):
    """Projection returned by list() — the five public product fields."""
    id: int
    name: str
    description: str | None
    quantity: int
    image_url: str | None


class ProductLike(ProductSummaryLike, Protocol):
    """Full stored product, including persistence-managed timestamps."""
    created_at: datetime
    updated_at: datetime


class ProductRepository(Protocol):
    """Contract for product persistence — implemented by shell."""
    async def list(self) -> Sequence[ProductSummaryLike]: ...
    async def get(self, product_id: ProductId) -> ProductLike: ...
    async def create(self, fields: ProductFields) -> ProductLike: ...
    async def update(
        self, product_id: ProductId, fields: ProductFields,
    ) -> ProductLike: ...
    async def delete(self, product_id: ProductId) -> None: ...
