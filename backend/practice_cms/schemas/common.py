"""
Practice CMS Backend — Shared Pydantic Schemas
==============================================

What:  Base model and envelopes shared by every endpoint.
Why:   The admin dashboard and public site speak camelCase JSON
       (`isActive`, `createdAt`); Python code stays snake_case.
How:   CamelModel generates camelCase aliases, accepts either spelling on
       input, and FastAPI serializes responses by alias.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for all API schemas: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ReorderItem(CamelModel):
    """One (id, order) assignment of a reorder batch."""
    id: int = Field(description="Row identifier")
    order: int = Field(description="New display position")


class SuccessResponse(BaseModel):
    """Returned by deletes, which succeed whether or not the row existed."""
    success: bool = True


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "faq item with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
