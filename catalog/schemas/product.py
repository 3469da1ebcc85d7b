"""
Catalog Backend: Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract of the catalog.
How:   FastAPI validates request bodies against the *Request/Create/Update
       models and serializes responses through the *Response models
       (by alias, so the wire keeps camelCase names like `imageUrl`).

Wire names follow the stored documents: `_id`, `imageUrl`, `createdAt`.
Products also carry `id` (same value as `_id`) for clients that expect it.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, computed_field

from catalog.models.product import DEFAULT_PRICE


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class LoginRequest(BaseModel):
    """Body of POST /api/login. Password presence is checked by the service."""
    password: Optional[str] = Field(default=None, description="Admin password")


class ProductCreate(BaseModel):
    """
    Body of POST /api/products.

    `name` is optional at the schema level so that a missing name reaches
    ProductService and is reported as "Name is required" (400) rather than a
    framework validation error. Unknown keys are ignored.
    """
    name: Optional[str] = Field(default=None, description="Product name (required)")
    brand: Optional[str] = None
    size: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, description="Price, defaults to 0")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    model_config = {"populate_by_name": True}


class ProductUpdate(BaseModel):
    """
    Body of PUT /api/products/{id}.

    Only the keys actually sent are applied (see `model_dump(exclude_unset=True)`
    in the service). `_id` and `createdAt` are not part of the model and are
    therefore dropped.
    """
    name: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """Full representation of a stored product."""
    id: str = Field(description="Product identifier (24-hex ObjectId)")
    name: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = 0
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    # Documents written outside this API may lack a timestamp
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = {"populate_by_name": True}

    @computed_field(alias="_id")
    @property
    def object_id(self) -> str:
        return self.id

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "ProductResponse":
        """Build a response from a raw MongoDB document."""
        return cls(
            id=str(document["_id"]),
            name=document.get("name"),
            brand=document.get("brand"),
            size=document.get("size"),
            description=document.get("description"),
            price=document.get("price", DEFAULT_PRICE),
            image_url=document.get("imageUrl"),
            created_at=document.get("createdAt"),
        )


class LoginResponse(BaseModel):
    ok: bool = True
    token: str


class AckResponse(BaseModel):
    ok: bool = True


class UploadResponse(BaseModel):
    """Returned by POST /api/upload once the media host has the image."""
    ok: bool = True
    url: str = Field(description="Public HTTPS URL of the hosted image")
    public_id: str = Field(description="Media host identifier of the image")


class ErrorResponse(BaseModel):
    """
    Error body shared by every failing endpoint.

    Example:
        {"ok": false, "error": "Unauthorized"}
    """
    ok: bool = False
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    media: str = Field(description="Media host status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
