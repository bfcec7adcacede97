"""Standardized error response schemas.

Every error leaving the API, whether raised on purpose, produced by request
validation or unexpected, is rendered as an ``ErrorResponse`` so clients
can rely on one shape.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceInfo(BaseModel):
    """Identifies the service instance that produced an error."""

    name: str = Field(..., description="Name of the service", examples=["PaperContest"])
    version: str = Field(..., description="Version of the service", examples=["1.0.0"])
    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "staging", "production"],
    )


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    error_code: str = Field(
        ...,
        description="Unique error code identifying the error type",
        examples=["VALIDATION_ERROR", "NOT_FOUND", "UNAUTHORIZED"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Request validation failed", "Competition not found"],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details (e.g., field-specific validation errors)",
        examples=[{"validation_errors": {"pageSize": ["Input should be <= 100"]}}],
    )
    path: str | None = Field(
        default=None,
        description="Request path that produced the error",
        examples=["/api/v1/system/statuses/competition"],
    )
    method: str | None = Field(
        default=None, description="HTTP method of the request", examples=["GET"]
    )
    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )
    request_id: str | None = Field(
        default=None,
        description="Identifier of this single request",
        examples=["req-550e8400-e29b-41d4-a716-446655440000"],
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )
    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["LOW"],
    )
    service_info: ServiceInfo | None = Field(
        default=None,
        description="Information about the service that generated the error",
    )
    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development environments)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error_code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": {
                        "validation_errors": {
                            "pageSize": ["Input should be less than or equal to 100"]
                        }
                    },
                    "path": "/api/v1/system/statuses/competition",
                    "method": "GET",
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2026-03-01T08:00:00+00:00",
                    "severity": "LOW",
                    "service_info": {
                        "name": "PaperContest",
                        "version": "1.0.0",
                        "environment": "production",
                    },
                },
            ]
        }
    )
