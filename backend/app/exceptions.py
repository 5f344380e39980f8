"""
Contacts API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the contact workflows.
Why:   Targeted error handling with the right HTTP status code and a
       consistent response body, without try/except in every route.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses.
Who:   Raised by ContactService; caught by global handlers.

Exception Hierarchy:
    ContactsError (base)     → 500 Internal Server Error
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── NotFoundError        → 404 Not Found
    └── ConflictError        → 409 Conflict (duplicate phone number)

Response body:
    {"error": "<ErrorName>", "message": "...", "details": ["...", ...]}
    `details` is only present for validation errors.
"""

from typing import Any, Dict, List, Optional


class ContactsError(Exception):
    """
    Base exception for all Contacts API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    error_name = "InternalServerError"
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ContactsError):
    """
    Raised when client input fails validation.

    Carries every violated rule in `details` so the client can fix all of
    them in one round trip.

    Example response:
        {
            "error": "ValidationError",
            "message": "Input validation failed",
            "details": ["Name is required and must be a string",
                        "Please enter a valid mobile phone number"]
        }
    """

    error_name = "ValidationError"
    status_code = 400

    def __init__(
        self,
        details: Optional[List[str]] = None,
        message: str = "Input validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = list(details or [])


class NotFoundError(ContactsError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /contacts/{id} with an id the store doesn't hold.
    HTTP:    404 Not Found
    """

    error_name = "NotFoundError"
    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class ConflictError(ContactsError):
    """
    Raised when a write would break a uniqueness rule.

    When:    Creating a contact, or changing a contact's phone, to a number
             another contact already holds.
    HTTP:    409 Conflict
    """

    error_name = "ConflictError"
    status_code = 409

    def __init__(
        self,
        message: str = "Resource conflict",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
