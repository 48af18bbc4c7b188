"""Validation of product create/update payloads.

The schema lives in ``ProductSchema``. Pydantic collects every violation in
one pass; ``validate_product_payload`` turns those into the catalog's own
``ValidationError`` with one ``{"field", "message"}`` entry per field, so
clients see all problems at once rather than just the first.
"""

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from product_catalog.core.exceptions import ValidationError
from product_catalog.domain.products import ProductPayload

NonEmptyStr = Annotated[str, Field(strict=True), StringConstraints(min_length=1)]

# Custom messages keyed by pydantic error type
_FIELD_MESSAGES: dict[str, str] = {
    "missing": "is required",
    "string_type": "must be a string",
    "string_too_short": "must be a non-empty string",
    "float_type": "must be a number",
    "finite_number": "must be a finite number",
    "greater_than_equal": "must be greater than or equal to 0",
    "bool_type": "must be a boolean",
    "bool_parsing": "must be a boolean",
}


class ProductSchema(BaseModel):
    """Wire schema for product create/update bodies."""

    model_config = ConfigDict(extra="ignore")

    name: NonEmptyStr
    description: NonEmptyStr
    price: Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]
    category: NonEmptyStr
    in_stock: bool = Field(default=True, alias="inStock")


def _field_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    """Collapse pydantic errors into one message per field."""
    details: list[dict[str, Any]] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ())) or "body"
        if field in seen:
            continue
        seen.add(field)
        reason = _FIELD_MESSAGES.get(error["type"], error.get("msg", "is invalid"))
        details.append({"field": field, "message": f"{field} {reason}"})
    return details


def _blank_string_errors(payload: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Whitespace-only strings pass the length check but still count as empty."""
    return [
        {"field": field, "message": f"{field} must be a non-empty string"}
        for field in ("name", "description", "category")
        if isinstance(payload.get(field), str)
        and payload[field]
        and not payload[field].strip()
    ]


def validate_product_payload(payload: object) -> ProductPayload:
    """Check a request body and return the normalized product fields.

    Args:
        payload: Decoded JSON body of a create or update request.

    Returns:
        ProductPayload: Fields with defaults applied (``in_stock`` is True
            when absent); unknown keys are dropped.

    Raises:
        ValidationError: If any field is missing or malformed. ``details``
            lists every violated field.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(
            "Validation failed",
            details=[{"field": "body", "message": "body must be a JSON object"}],
        )

    details: list[dict[str, Any]] = []
    schema: ProductSchema | None = None
    try:
        schema = ProductSchema.model_validate(payload)
    except PydanticValidationError as exc:
        details.extend(_field_errors(exc))

    reported = {entry["field"] for entry in details}
    details.extend(
        entry for entry in _blank_string_errors(payload) if entry["field"] not in reported
    )

    if details or schema is None:
        raise ValidationError("Validation failed", details=details)

    return ProductPayload(
        name=schema.name,
        description=schema.description,
        price=schema.price,
        category=schema.category,
        in_stock=schema.in_stock,
    )
