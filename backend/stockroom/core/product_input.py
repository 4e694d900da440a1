"""Product Input Validation — parses path ids and request bodies into domain values.

Invariants:
    - Pure functions: no IO, no logging, raise ValidationError on bad input
    - Create and update share validate_product_fields (identical contract)
    - quantity 0 is a legal value; only a missing key counts as "not provided"
    - Falsy description/imageUrl normalize to None, never to ""
    - Integers parse with leading-integer semantics: "12abc" → 12, "abc" → error

Design Decisions:
    - Negative quantities accepted: no server-side bound (ADR: parity with dashboard form)
    - Unparseable quantity is a 400, not a store failure (ADR: reject before the repository)
"""

import math
import re
from typing import Any

from stockroom.core.domain_types import ProductFields, ProductId
from stockroom.core.errors import ValidationError


REQUIRED_FIELDS_MESSAGE = "Name and quantity are required"
INVALID_ID_MESSAGE = "Invalid product ID"
INVALID_QUANTITY_MESSAGE = "Quantity must be a whole number"

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_leading_int(value: Any) -> int | None:
    """Parse an integer prefix from a str/int/float; None when there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def parse_product_id(raw: str) -> ProductId:
    """Path segment → ProductId, or ValidationError("Invalid product ID")."""
    parsed = parse_leading_int(raw)
    if parsed is None:
        raise ValidationError(INVALID_ID_MESSAGE)
    return ProductId(parsed)


def validate_product_fields(body: Any) -> ProductFields:
    """Validate a create/update body and normalize it to ProductFields."""
    if not isinstance(body, dict):
        raise ValidationError()

    name = body.get("name")
    if not name or "quantity" not in body:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    if not isinstance(name, str):
        raise ValidationError()

    quantity = parse_leading_int(body["quantity"])
    if quantity is None:
        raise ValidationError(INVALID_QUANTITY_MESSAGE)

    return ProductFields(
        name=name,
        quantity=quantity,
        description=_optional_text(body.get("description")),
        image_url=_optional_text(body.get("imageUrl")),
    )


def _optional_text(value: Any) -> str | None:
    """Falsy → None; non-string truthy values are rejected."""
    if not value:
        return None
    if not isinstance(value, str):
        raise ValidationError()
    return value
