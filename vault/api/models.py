"""Pydantic models for API requests and responses.

Component payloads reuse the catalog models in :mod:`vault.models`; this
module holds the envelopes, uploads, categories, migration and health shapes.
"""

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from vault.media.types import MediaType
from vault.models.component import CamelModel, CategorySummary


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Common Models
# =============================================================================


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


# =============================================================================
# Category Models
# =============================================================================


class CategoryCreate(BaseModel):
    """Request model for creating a category."""

    name: str = Field(
        ...,
        max_length=100,
        description="Category name",
        json_schema_extra={"example": "Buttons"},
    )
    description: Optional[str] = Field(
        None,
        max_length=500,
        description="Optional description; defaults to '<name> components'",
    )


class CategoryResponse(CamelModel):
    """A category with the flag telling whether this request created it."""

    category: CategorySummary
    created: bool


# =============================================================================
# Media Models
# =============================================================================


class UploadResponse(CamelModel):
    """Response model for a media upload."""

    message: str = "File uploaded successfully"
    url: str = Field(..., description="Public URL of the stored file")
    path: str = Field(..., description="Storage-relative path")
    media_type: MediaType = Field(..., description="image, video or unknown")


# =============================================================================
# Migration Models
# =============================================================================


class MigrationRequest(BaseModel):
    """Components to migrate. When omitted, the configured local file is used."""

    components: Optional[list[dict[str, Any]]] = Field(
        None,
        description="Raw custom component records in either spelling",
    )
    prune: bool = Field(
        default=False,
        description="Remove migrated items from the local custom components file",
    )


# =============================================================================
# Health Models
# =============================================================================


class HealthStatus(BaseModel):
    """Health status for a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded", "not_configured"] = Field(
        ..., description="Dependency health status"
    )
    latency_ms: Optional[float] = Field(None, description="Response latency in milliseconds")
    message: Optional[str] = Field(None, description="Additional status message")


class HealthCheckResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall system health status"
    )
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Check timestamp")
    services: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Health status of individual services",
    )
    uptime_seconds: Optional[float] = Field(None, description="Server uptime in seconds")


# =============================================================================
# Error Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    fields: Optional[list[str]] = Field(None, description="Offending fields for validation errors")
    path: Optional[str] = Field(None, description="Request path that caused the error")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Optional[Any] = Field(None, description="Invalid value provided")


class ValidationErrorResponse(BaseModel):
    """Response model for request validation errors."""

    error: str = Field(default="validation_error", description="Error type")
    message: str = Field(default="Request validation failed", description="Error message")
    errors: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
