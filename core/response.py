"""
Response helpers

Error bodies are always a JSON object with an ``error`` string and, for
validation-style failures, an optional ``details`` field.
"""
from typing import Any, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorBody(BaseModel):
    """Body of every error response."""
    error: str
    details: Optional[Any] = None


def error_response(
    status_code: int,
    message: str,
    details: Any = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Build an error response

    Args:
        status_code: HTTP status code
        message: Human readable error message
        details: Optional structured details (validation errors only)
        headers: Extra response headers

    Returns:
        JSONResponse: ``{"error": message[, "details": details]}``
    """
    body = ErrorBody(error=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )
