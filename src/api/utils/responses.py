"""JSON response class backed by orjson.

Set as the default response class of the application. Saleor parses the
tax webhook response strictly, so bodies are rendered without key sorting
surprises: Pydantic models are dumped in field order, plain dicts as given.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ORJSONResponse(JSONResponse):
    """FastAPI response class serializing with orjson.

    Handles datetime and UUID natively, and accepts Pydantic models directly
    (dumped by alias, so camelCase models keep their wire names).

    Attributes:
        media_type: The media type for the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json", by_alias=True)

        return orjson.dumps(content)


def message_response(status_code: int, message: str) -> ORJSONResponse:
    """Build the ``{"message": ...}`` error body of the Saleor facing routes."""
    return ORJSONResponse(status_code=status_code, content={"message": message})
