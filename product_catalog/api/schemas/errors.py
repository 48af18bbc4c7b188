"""Error response schema shared by every failing request.

All errors, whatever raised them, reach the client as::

    {"error": "<kind>", "message": "<human text>", "details": [...]}

``details`` is only present when there is structured information to report,
such as the per-field violations of a rejected product payload.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standardized error body."""

    error: str = Field(
        ...,
        description="Machine-readable error kind",
        examples=["ValidationError", "NotFoundError", "Unauthorized"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Product with id 42 not found", "Invalid API key"],
    )

    details: list[dict[str, Any]] | None = Field(
        default=None,
        description="Field-level problems, one entry per violated field",
        examples=[[{"field": "price", "message": "price must be a number"}]],
    )

    def to_content(self) -> dict[str, Any]:
        """Serialize for a JSON response, leaving out absent details."""
        return self.model_dump(mode="json", exclude_none=True)
