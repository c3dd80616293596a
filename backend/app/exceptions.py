"""
Product API - Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios the API knows about.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the collection accessor and the product service.

Exception Hierarchy:
    ProductAPIError (base)       → 500 Internal Server Error
    ├── ConfigurationError       → fatal at startup (never reaches a client)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

Storage and transport failures raised by pymongo itself are not wrapped; they
propagate to the PyMongoError handler in main.py.
"""

from typing import Any, Dict, List, Optional


class ProductAPIError(Exception):
    """
    Base exception for all Product API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(ProductAPIError):
    """
    Raised when required settings are missing.

    When:    ProductDbContext is constructed without a connection string,
             database name or collection name.
    Effect:  Raised inside the lifespan, so uvicorn aborts startup and the
             process never serves a request.
    """

    def __init__(
        self,
        missing: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.missing = list(missing or [])
        message = "Configuration validation failed"
        if self.missing:
            message = "Missing required configuration: " + ", ".join(self.missing)
        ctx = context or {}
        ctx["missing"] = self.missing
        super().__init__(message=message, context=ctx)


class NotFoundError(ProductAPIError):
    """
    Raised when a requested resource does not exist.

    When:    PUT or DELETE /api/Product/{id} matches no document, and
             GET /api/Product/{id} misses while strict_not_found is enabled.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ProductAPIError):
    """
    Raised when the store answers in a way the service cannot use.

    When:    A write comes back unacknowledged (w=0 write concern), so the
             matched/deleted counts the endpoints depend on do not exist.
    HTTP:    500 Internal Server Error (generic message; context is logged only)
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
