"""
Flavors API — Custom Exception Hierarchy
=========================================

What:  Typed errors distinguishing not-found, bad input, store outage and
       generic statement failure.
Why:   Lets route handlers and global exception handlers pick status codes
       deliberately instead of collapsing every failure into a 500.
How:   Each exception carries a user-facing message and an optional context
       dict. Handlers registered in main.py turn them into `{"error": ...}`
       JSON responses; context is logged, never returned.

Exception Hierarchy:
    FlavorsError (base)
    ├── ValidationError        → 400 Bad Request
    ├── NotFoundError          → 404 Not Found
    ├── DatabaseError          → 500 Internal Server Error
    └── StoreUnavailableError  → 503 Service Unavailable
"""

from typing import Any, Dict, Optional


class FlavorsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FlavorsError):
    """
    Raised when client input is rejected.

    When: The store refuses the values (NOT NULL violation, value too long,
          wrong type), after the request body already passed Pydantic.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid flavor data",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(FlavorsError):
    """
    Raised when a requested flavor does not exist.

    SQLAlchemy returns None for missing rows; the repository converts
    that None into this exception so handlers can answer 404.
    """

    status_code = 404

    def __init__(
        self,
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message="Flavor not found", context=ctx)
        self.resource_id = resource_id


class DatabaseError(FlavorsError):
    """
    Raised when a statement fails for any reason other than bad input or
    an unreachable store.

    The message is the action-specific text the client sees
    (e.g. "Failed to create flavor"); driver details stay in `context`.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(FlavorsError):
    """
    Raised when the store cannot be reached at all.

    When: Connection refused, connection dropped mid-statement, DNS failure.
    HTTP: 503, since the request may succeed once the database is back.
    """

    status_code = 503

    def __init__(
        self,
        message: str = "Database unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
