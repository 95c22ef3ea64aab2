"""Response envelope shared by every generation endpoint.

Success and error bodies share one shape so the studio client can branch on
``success`` without inspecting HTTP status codes. ``data`` may be a plain
mapping or a pydantic model; both are serialised in JSON mode so enums and
URLs arrive as strings.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    code: int = Field(..., description="HTTP-like status code mirrored into the body")
    success: bool = Field(..., description="False for any code >= 400")
    message: str = Field(..., description="Short human readable summary")
    data: Optional[T] = Field(None, description="Endpoint payload")
    meta: Optional[Dict[str, Any]] = Field(None, description="Batch counts, request ids and similar")


def api_response(
    *,
    code: int = 200,
    message: str,
    data: T | None = None,
    meta: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """Build the envelope and return it as a JSON-ready dict."""

    envelope: ApiResponse[Any] = ApiResponse(
        code=code,
        success=code < 400,
        message=message,
        data=data,
        meta=meta,
    )
    return envelope.model_dump(mode="json")


def ok(message: str, data: T | None = None, meta: Dict[str, Any] | None = None) -> Dict[str, Any]:
    return api_response(code=200, message=message, data=data, meta=meta)


def error(
    code: int,
    message: str,
    data: Any | None = None,
    meta: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """Error envelope; ``code`` must be an error status."""

    if code < 400:
        raise ValueError("Error responses must use an error HTTP status code (>= 400)")
    return api_response(code=code, message=message, data=data, meta=meta)


__all__ = ["ApiResponse", "api_response", "error", "ok"]
