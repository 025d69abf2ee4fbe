"""
Flavors API — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the JSON contract of the flavors endpoints.
Why:   Input validation at the application boundary, response serialization,
       and OpenAPI doc generation.

Boundary rules:
    - name is required, non-empty, at most 255 characters (the column width)
    - is_favorite defaults to false when omitted
    Rejected bodies never reach the store; they become 400 responses.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class FlavorIn(BaseModel):
    """
    Body of POST /api/flavors and PUT /api/flavors/{id}.

    PUT replaces both fields wholesale, so the same model serves both routes:
    an update that omits is_favorite resets it to false.
    """
    name: str = Field(min_length=1, max_length=255, description="Flavor name")
    is_favorite: bool = Field(default=False, description="Whether this is a favorite flavor")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class FlavorResponse(BaseModel):
    """A stored flavor row, as returned by every successful read or write."""
    id: int = Field(description="Store-assigned identifier")
    name: str
    is_favorite: Optional[bool] = None
    created_at: datetime = Field(description="Creation time (store clock)")
    updated_at: datetime = Field(description="Last update time (store clock)")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "Flavor not found"}
    """
    error: str = Field(description="Human-readable error message")
    details: Optional[List[Any]] = Field(
        default=None,
        description="Field-level validation errors (400 responses only)",
    )


class HealthResponse(BaseModel):
    """Returned by GET /health for probes and monitoring."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
