"""
Product API - Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to bind request bodies, serialize responses,
       and generate the OpenAPI document served at /docs.

The wire shape of a product is deliberately flat and permissive: every field
except quantity may be null, and nothing is cross-validated. The mapping to
the stored MongoDB document lives in app/models/product.py.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Quantity is a 32-bit signed integer in stored documents.
QUANTITY_MIN = -(2**31)
QUANTITY_MAX = 2**31 - 1


class Product(BaseModel):
    """
    A product record as exchanged over HTTP.

    id is assigned by the store on create and is the string form of a MongoDB
    ObjectId. Clients may send it, but it is ignored on create and on replace.
    """
    id: Optional[str] = Field(default=None, description="Store-assigned identifier (ObjectId hex)")
    name: Optional[str] = Field(default=None, description="Product label")
    description: Optional[str] = Field(default=None, description="Free-text description")
    quantity: int = Field(
        default=0,
        ge=QUANTITY_MIN,
        le=QUANTITY_MAX,
        description="Item count (32-bit signed, no business bounds)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Widget", "description": "A small widget", "quantity": 5},
            ]
        }
    }


class ErrorResponse(BaseModel):
    """
    Standardized error body returned by the global exception handlers.

    Example:
        {
            "error": "not_found",
            "message": "product with ID '65f1c0...' was not found",
            "details": {"resource": "product", "resource_id": "65f1c0..."},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
