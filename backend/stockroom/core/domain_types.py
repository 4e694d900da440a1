"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProductId wraps the store-assigned integer key — never reassigned after create
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: compare equal to their raw settings values
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", int)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class ProductFields:
    """Validated, normalized writable fields of a product (create or full update)."""
    name: str
    quantity: int
    description: str | None = None
    image_url: str | None = None


# ─── Enums ───────────────────────────────────────────────────────

class Environment(str, Enum):
    """Deployment environment — drives log verbosity and error sanitization."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"
