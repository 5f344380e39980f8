"""
Contacts API — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract.
Why:   Automatic serialization and OpenAPI doc generation.
How:   Route handlers declare these as response models; FastAPI serializes
       them by alias, so the wire form is camelCase (createdAt, updatedAt).

Design Decision:
    Request bodies are NOT declared as Pydantic models. FastAPI would reject
    bad bodies with its own 422 format, one field at a time. Bodies are read
    as raw JSON, checked by app.services.validation (every rule, 400), then
    turned into a ContactPatch by app.services.sanitizer.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain Input — the explicit partial-update structure
# ══════════════════════════════════════════════════════════════════════════


class ContactPatch(BaseModel):
    """
    Sanitized contact fields.

    Only the fields actually supplied by the client are "set"; use
    `model_dump(exclude_unset=True)` to merge without clobbering the rest.
    """
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class ContactResponse(BaseModel):
    """Full representation of a contact."""
    id: str = Field(description="Contact identifier (UUID, or a numeral for example data)")
    name: str = Field(description="Contact name")
    phone: str = Field(description="Mobile phone number")
    email: Optional[str] = Field(default=None, description="Email address (null when absent)")
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(alias="updatedAt", description="Last modification time (UTC ISO 8601)")

    model_config = {"populate_by_name": True}


class ContactStatsResponse(BaseModel):
    """Aggregate counts, computed fresh on every call."""
    total_count: int = Field(alias="totalCount")
    with_email_count: int = Field(alias="withEmailCount")
    without_email_count: int = Field(alias="withoutEmailCount")

    model_config = {"populate_by_name": True}


class DeleteResponse(BaseModel):
    """Acknowledgment returned by DELETE /contacts/{id}."""
    success: bool = True
    message: str


# ══════════════════════════════════════════════════════════════════════════
# Error / Service Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "ValidationError",
            "message": "Input validation failed",
            "details": ["Please enter a valid mobile phone number"]
        }
    """
    error: str = Field(description="Error kind, e.g. ValidationError, NotFoundError")
    message: str = Field(description="Human-readable error description")
    details: Optional[List[str]] = Field(default=None, description="Every violated rule")


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    message: str
    timestamp: datetime


class ServiceInfoResponse(BaseModel):
    """Service descriptor returned by GET /."""
    message: str
    version: str
    endpoints: Dict[str, str]
