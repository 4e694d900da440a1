"""Request Dependencies — wires the logger and repository into route handlers.

Invariants:
    - A fresh repository per request, bound to that request's session
    - The logger is the single ContextLogger built at app creation (app.state)

Design Decisions:
    - Depends() over module singletons: tests swap get_db/get_product_repository
      through app.dependency_overrides
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.core.repository_protocols import ProductRepository
from stockroom.infrastructure.database import get_db
from stockroom.infrastructure.observability import ContextLogger
from stockroom.infrastructure.product_repository import SqlProductRepository


def get_app_logger(request: Request) -> ContextLogger:
    return request.app.state.app_logger


def get_product_repository(
    db: AsyncSession = Depends(get_db),
    logger: ContextLogger = Depends(get_app_logger),
) -> ProductRepository:
    return SqlProductRepository(db, logger)
