"""
Catalog Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for each failure class the API reports.
How:   Each exception carries a client-safe `message` and an optional
       `context` dict. Global handlers registered in main.py turn them into
       `{"ok": false, "error": <message>}` responses with the right status.
       Context is logged server-side and never returned.
Who:   Raised by services and dependencies; caught by the global handlers.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError      → 400 Bad Request
    ├── AuthorizationError   → 401 Unauthorized
    ├── NotFoundError        → 404 Not Found
    ├── DatabaseError        → 500 Internal Server Error
    ├── MediaUploadError     → 500 Internal Server Error
    ├── FileStorageError     → 500 Internal Server Error
    └── ConfigurationError   → fatal at startup
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """
    Raised when client input is missing or invalid.

    When:    Missing product name, missing login password, no uploaded file.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthorizationError(CatalogError):
    """
    Raised when a request lacks valid admin credentials.

    When:    Missing or wrong admin token, wrong login password.
    HTTP:    401 Unauthorized

    The gate uses the same message for a missing token and a wrong one.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CatalogError):
    """
    Raised when a requested resource does not exist.

    When:    Get/update/delete of an unknown or malformed product id.
    HTTP:    404 Not Found

    The client always sees "Not found"; resource and id go to the log context.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Not found", context=ctx)


class DatabaseError(CatalogError):
    """
    Raised when a store operation fails unexpectedly.

    When:    MongoDB unreachable, server selection timeout, write errors.
    HTTP:    500 Internal Server Error (generic message, details logged only)
    """

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MediaUploadError(CatalogError):
    """
    Raised when the media host rejects or fails an upload.

    When:    Cloudinary returns an error, credentials are wrong, network failure.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Upload failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(CatalogError):
    """
    Raised when the transient staging file cannot be written.

    When:    Disk full, permission denied, staging directory missing.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Upload failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(CatalogError):
    """
    Raised at startup when required configuration is missing.

    Never reaches a client: the lifespan lets it abort the process.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
