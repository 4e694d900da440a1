"""Products Routes — CRUD endpoints for inventory products.

Invariants:
    - Handlers are stateless: every call re-validates and re-queries
    - Validation runs before any repository call (bad input never reaches the store)
    - Errors are raised, never rendered here: api/error_handlers.py owns the envelope
    - update/delete remap a store-level NoResultFound to 404
    - GET list carries the shared-cache directive from settings

Design Decisions:
    - Path id taken as str and parsed in core: FastAPI's int coercion would answer
      "abc" with its own validation error instead of "Invalid product ID"
    - Bodies taken as raw JSON (Any) so the required-fields message is ours, not Pydantic's
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.exc import NoResultFound

from stockroom.api.dependencies import get_app_logger, get_product_repository
from stockroom.config import get_settings
from stockroom.core.errors import NotFoundError
from stockroom.core.product_input import parse_product_id, validate_product_fields
from stockroom.core.repository_protocols import ProductRepository
from stockroom.infrastructure.observability import ContextLogger
from stockroom.infrastructure.product_repository import PRODUCT_NOT_FOUND_MESSAGE
from stockroom.schemas.product import (
    ErrorResponse, MessageResponse, ProductResponse, ProductSummary,
)

router = APIRouter(prefix="/api/products", tags=["products"])

PRODUCT_DELETED_MESSAGE = "Product deleted successfully"

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@asynccontextmanager
async def _missing_record_as_404() -> AsyncGenerator[None, None]:
    """Store reported no matching row → NotFoundError."""
    try:
        yield
    except NoResultFound as e:
        raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE, cause=e) from e


@router.get(
    "", response_model=list[ProductSummary],
    responses={500: {"model": ErrorResponse}},
)
async def list_products(
    response: Response,
    repo: ProductRepository = Depends(get_product_repository),
    logger: ContextLogger = Depends(get_app_logger),
):
    """List all products, newest first."""
    rows = await repo.list()
    response.headers["Cache-Control"] = get_settings().products_cache_control
    logger.api("GET", router.prefix, count=len(rows))
    return [ProductSummary.model_validate(row) for row in rows]


@router.post(
    "", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED, responses=_ERROR_RESPONSES,
)
async def create_product(
    body: Any = Body(None),
    repo: ProductRepository = Depends(get_product_repository),
    logger: ContextLogger = Depends(get_app_logger),
):
    """Create a product from {name, description?, quantity, imageUrl?}."""
    fields = validate_product_fields(body)
    product = await repo.create(fields)
    logger.api("POST", router.prefix, product_id=product.id)
    return ProductResponse.model_validate(product)


@router.get(
    "/{product_id}", response_model=ProductResponse,
    responses=_ERROR_RESPONSES,
)
async def get_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
    logger: ContextLogger = Depends(get_app_logger),
):
    """Get a single product."""
    pid = parse_product_id(product_id)
    product = await repo.get(pid)
    logger.api("GET", f"{router.prefix}/{pid}", product_id=pid)
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}", response_model=ProductResponse,
    responses=_ERROR_RESPONSES,
)
async def update_product(
    product_id: str,
    body: Any = Body(None),
    repo: ProductRepository = Depends(get_product_repository),
    logger: ContextLogger = Depends(get_app_logger),
):
    """Replace name, description, quantity and imageUrl of a product."""
    pid = parse_product_id(product_id)
    fields = validate_product_fields(body)
    async with _missing_record_as_404():
        product = await repo.update(pid, fields)
    logger.api("PUT", f"{router.prefix}/{pid}", product_id=pid)
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}", response_model=MessageResponse,
    responses=_ERROR_RESPONSES,
)
async def delete_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
    logger: ContextLogger = Depends(get_app_logger),
):
    """Delete a product."""
    pid = parse_product_id(product_id)
    async with _missing_record_as_404():
        await repo.delete(pid)
    logger.api("DELETE", f"{router.prefix}/{pid}", product_id=pid)
    return MessageResponse(message=PRODUCT_DELETED_MESSAGE)
