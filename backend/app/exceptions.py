"""
VenueAtlas Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the access control chain; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    VenueAtlasError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── DuplicateKeyError        → 400 Bad Request (unique code/email taken)
    ├── ConflictError            → 400 Bad Request (delete blocked by children)
    ├── UnauthenticatedError     → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden (role or ownership)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class VenueAtlasError(Exception):
    """
    Base exception for all VenueAtlas application errors.

    Attributes:
        message:  User-facing error description (returned in API response)
        context:  Additional debug info (returned as `details` where useful)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VenueAtlasError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, malformed IDs, invalid role or email,
             capacity below 1, a location set as its own parent.
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


class DuplicateKeyError(VenueAtlasError):
    """
    Raised when a unique field collides with an existing record.

    When:    Location code or user email already taken.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Duplicate value",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(VenueAtlasError):
    """
    Raised when an operation conflicts with the current state of the data.

    When:    Deleting a location that still has child locations.
    HTTP:    400 Bad Request
    """


class UnauthenticatedError(VenueAtlasError):
    """
    Raised when the caller identity cannot be resolved.

    When:    Identity header missing, malformed, or naming a user that does not exist.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(VenueAtlasError):
    """
    Raised when an authenticated caller may not perform the operation.

    When:    Caller role not permitted, or caller does not own the venue.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Access denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VenueAtlasError):
    """
    Raised when a requested resource, or a record it references, does not exist.

    HTTP:    404 Not Found

    The message is the resource label plus "not found", e.g. "Venue not found",
    "Parent location not found".
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(VenueAtlasError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, deadlock, unexpected constraint failure.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
