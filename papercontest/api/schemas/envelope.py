"""Success envelope wrapped around feature endpoint payloads.

Feature routers answer with::

    {"code": 200, "data": ..., "message": "success", "timestamp": "..."}

Errors never use this envelope; they are rendered as ``ErrorResponse``.
"""

from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Successful response body of a feature endpoint."""

    code: int = Field(default=200, description="HTTP status code of the response")
    data: T = Field(description="Endpoint payload")
    message: str = Field(default="success", description="Human-readable status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Time the response was produced (with timezone)",
    )


def success(data: T, message: str = "success") -> ApiResponse[T]:
    """Wrap a payload in the success envelope.

    Args:
        data: Endpoint payload.
        message: Optional status message.

    Returns:
        ApiResponse[T]: The enveloped payload.
    """
    return ApiResponse(data=data, message=message)
