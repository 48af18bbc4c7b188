"""JSON responses rendered with orjson.

``ORJSONResponse`` is the application's default response class. orjson
serializes datetimes natively, which the product timestamps rely on.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ORJSONResponse(JSONResponse):
    """JSONResponse variant that serializes with orjson."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - any JSON-serializable content
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json", by_alias=True)

        # Key order is kept as built: product fields and pagination read naturally
        return orjson.dumps(content, option=orjson.OPT_NON_STR_KEYS)
