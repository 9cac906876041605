"""
DressStore Backend: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for the product endpoints.
Why:   Each operation gets its own validated input struct instead of an
       arbitrary JSON object: required fields, types and defaults are
       checked before anything reaches the database.
How:   FastAPI validates request bodies against ProductCreate/ProductUpdate
       and serializes responses through ProductResponse.

Schemas are kept apart from the SQLAlchemy models so the API can reject bad
input with a readable message before the database sees it.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductCreate(BaseModel):
    """
    What:  Body of POST /product.
    Rules: name and price are required; quantity defaults to 1.
    Unknown fields are ignored.
    """
    name: str = Field(min_length=1, description="Product name (required, non-empty)")
    description: Optional[str] = Field(default=None, description="Free-text description")
    price: float = Field(description="Unit price (required)")
    quantity: int = Field(default=1, description="Units in stock (default 1)")
    category: Optional[str] = Field(default=None, description="Category label, e.g. 'Men'")


class ProductUpdate(BaseModel):
    """
    What:  Body of PUT /product/{id}.
    How:   Every field is optional. Only the fields present in the request are
           applied (`model_dump(exclude_unset=True)`); the rest keep their
           stored values.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    category: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """A stored product as returned by every product endpoint."""
    id: uuid.UUID = Field(description="Identifier assigned on creation")
    name: str
    description: Optional[str] = None
    price: float
    quantity: int
    category: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, description="Insertion time (UTC)")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Confirmation or not-found body, e.g. {"message": "Product deleted"}."""
    message: str


class ErrorResponse(BaseModel):
    """Operation failure body. `error` is the underlying failure text."""
    error: str


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
