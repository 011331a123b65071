"""
Points API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for every failure kind the handlers know.
How:   Each exception carries a message and an optional context dict.
       The response mapper (responses.py) and the FastAPI exception handlers
       (main.py) translate them into HTTP responses at the surface boundary.
Who:   Raised by the validation layer, the store accessor and the service.

Exception Hierarchy:
    PointsAPIError (base)
    ├── MalformedPayloadError    → 400 {"error": "invalid request body format : ..."}
    ├── PayloadValidationError   → 400 {"errors": [...]}
    ├── HttpError                → its own status code, raw message as body
    │   └── UserAlreadyExistsError → 409 Conflict
    └── StoreUnavailableError    → not mapped; propagates to the platform
"""

import json
from typing import Any, Dict, List, Optional


class PointsAPIError(Exception):
    """
    Base exception for all Points API errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MalformedPayloadError(PointsAPIError):
    """
    Raised when the request body is not valid JSON.

    `message` is the JSON parser's own diagnostic, e.g.
    "Expecting property name enclosed in double quotes: line 1 column 2 (char 1)".
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class PayloadValidationError(PointsAPIError):
    """
    Raised when the body parses as JSON but does not match the PointsRecord shape.

    Carries every violation found, not just the first one:
        {}  →  ["userId is a required field", "points is a required field"]
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = list(errors)
        super().__init__(
            message=f"{len(self.errors)} validation error(s) occurred",
            context=context,
        )


class HttpError(PointsAPIError):
    """
    A deliberately raised application error with a chosen HTTP status code.

    The body dict is JSON-encoded into `message`, and the response mapper
    returns that text verbatim as the response body.
    """

    def __init__(
        self,
        status_code: int,
        body: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.body = body or {}
        super().__init__(message=json.dumps(self.body), context=context)


class UserAlreadyExistsError(HttpError):
    """
    Raised when an insert targets a userId that already has a points record.

    HTTP: 409 Conflict. Raised both by the existence check and when a
    conditional write loses a race against a concurrent insert.
    """

    def __init__(self, user_id: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["user_id"] = user_id
        super().__init__(
            status_code=409,
            body={"error": f"user '{user_id}' already has a points record"},
            context=ctx,
        )
        self.user_id = user_id


class StoreUnavailableError(PointsAPIError):
    """
    Raised when a DynamoDB call fails (throttling, timeout, connectivity,
    missing table, permissions).

    Not mapped to a response by the handlers: it propagates to the hosting
    platform, which answers with a generic server error. The context holds
    the table name, the operation and the AWS error code for the logs.
    """

    def __init__(
        self,
        message: str = "The points store is currently unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
