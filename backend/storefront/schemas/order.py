"""
Storefront Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract with the storefront client.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.
Who:   Used by route handlers as request/return types.

Schemas are separate from the dataclass records in `storefront.models` so the
wire format (e.g. ignoring client-sent ids) can differ from what the store keeps.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Shared Models
# ══════════════════════════════════════════════════════════════════════════


class ProductSchema(BaseModel):
    """
    What:  One catalog entry, as listed by GET /api/categories/{name}.
    Note:  `id` is a position within a single listing, not a stable identifier.
    """
    id: int = Field(description="Position of the file within this listing (1-based)")
    url: str = Field(description="Absolute URL of the product image")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What the client sends
# ══════════════════════════════════════════════════════════════════════════


class OrderCreate(BaseModel):
    """
    What:  Body of POST /api/orders.

    Only `username` and `items` are read. Any `id`, `created_at` or `hidden`
    sent by the client is dropped (pydantic ignores unknown fields); the store
    assigns those itself.

    `username` defaults to "" so a missing field reaches the service layer and
    is reported as a validation error naming the field, rather than as a
    schema error.
    """
    username: str = Field(default="", description="Customer placing the order")
    items: Optional[List[ProductSchema]] = Field(
        default=None,
        description="Products in the order; omitted or null means no items",
    )

    @field_validator("username", mode="before")
    @classmethod
    def null_username_is_blank(cls, v):
        """null is treated like a missing username (rejected by the store)."""
        return "" if v is None else v


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class OrderResponse(BaseModel):
    """
    What:  Full representation of a stored order.
    Who:   Returned by GET /api/orders (as array items) and POST /api/orders.
    """
    id: int = Field(description="Server-assigned order id, increasing in creation order")
    username: str = Field(description="Customer who placed the order")
    items: List[ProductSchema] = Field(default_factory=list, description="Ordered products")
    created_at: datetime = Field(description="When the order was created (UTC ISO 8601)")
    hidden: bool = Field(default=False, description="Hidden from the owner, still visible to admin")

    model_config = {"from_attributes": True}


class DeleteOrdersResponse(BaseModel):
    """Returned by DELETE /api/orders?username=U."""
    deleted: int = Field(description="Number of orders removed")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models - Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "validation_error",
            "message": "username required",
            "details": {"field": "username"},
            "request_id": "1f0c2a9e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service status.
    Who:   Returned by GET /health for monitoring and load balancer health checks.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    images: str = Field(description="Images directory: readable, unavailable")
    orders: int = Field(description="Number of orders currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
