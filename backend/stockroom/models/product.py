"""Product ORM — the single persisted inventory record.

Invariants:
    - id is an autoincrement integer primary key, assigned on insert, never reused
    - name and quantity are non-nullable; description and image_url nullable
    - created_at set on insert; updated_at set on insert and refreshed on every update

Design Decisions:
    - Timestamps set application-side (timezone-aware UTC): microsecond resolution
      keeps newest-first ordering stable on SQLite as well as PostgreSQL
    - image_url column is snake_case; the camelCase wire name lives in schemas/
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """Inventory product."""
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
