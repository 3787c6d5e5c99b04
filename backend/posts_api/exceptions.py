"""
Posts API: Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the failures an operation can have.
How:   Each exception carries a message and an optional context dict.
       The exception handlers registered in main.py catch these and return
       structured JSON error responses with the right status code.
Who:   Raised by TableQuery and PostService; caught by the global handlers.

Exception Hierarchy:
    PostsAPIError (base)     → 500 Internal Server Error
    ├── NotFoundError        → 404 Not Found
    └── DatabaseError        → 500 Internal Server Error

Every operation either returns its result or raises one of these. Nothing
below the handlers in main.py decides how a failure looks on the wire.
"""

from typing import Any, Dict, Optional


class PostsAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(PostsAPIError):
    """
    Raised when a requested resource does not exist.

    What:    No row matches the identifier from the request path.
    When:    GET/PUT/DELETE /posts/{id} with an id that isn't stored.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows (not an exception); the
    service layer converts None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(PostsAPIError):
    """
    Raised when a database statement fails.

    What:    A query, insert, update or delete raised inside SQLAlchemy.
    When:    Connection lost mid-query, constraint violation, malformed query, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The failing
    statement and the original exception type stay in `context` and are
    only logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
