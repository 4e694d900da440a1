"""Product Schemas — Pydantic models for the products API surface.

Invariants:
    - ProductSummary exposes exactly id, name, description, quantity, imageUrl
    - ProductResponse adds createdAt/updatedAt for single-record responses
    - Absent description/imageUrl serialize as null, never omitted
    - ErrorResponse mirrors core.errors.build_error_payload

Design Decisions:
    - from_attributes: validate straight from ORM objects and projected rows
    - to_camel alias generator over per-field aliases: one rule for every field
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ProductSummary(_CamelModel):
    """Product as listed on the dashboard grid."""
    id: int
    name: str
    description: str | None = None
    quantity: int
    image_url: str | None = None


class ProductResponse(ProductSummary):
    """Stored product, including persistence-managed timestamps."""
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Confirmation body for operations with no record to return."""
    message: str


class ErrorResponse(BaseModel):
    """Standard error envelope (documentation only — built by error handlers)."""
    model_config = ConfigDict(populate_by_name=True)

    error: str
    message: str
    status_code: int = Field(alias="statusCode")
