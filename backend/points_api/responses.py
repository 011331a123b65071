"""
Points API — Response Mapper
==============================

What:  Translates service outcomes into HTTP status, headers and JSON body.
How:   error_response_parts() knows the recognised failure kinds; anything
       else is not mapped and is re-raised to the hosting platform.
Who:   Used by the Lambda entry points (API Gateway proxy results) and by the
       FastAPI exception handlers in main.py.

Error Mapping:
    MalformedPayloadError   → 400 {"error": "invalid request body format : \"<msg>\""}
    PayloadValidationError  → 400 {"errors": [...]}
    HttpError (incl. 409)   → exc.status_code, exc.message verbatim
    anything else           → re-raised
"""

import json
from typing import Any, Dict, Optional, Tuple

from points_api.exceptions import HttpError, MalformedPayloadError, PayloadValidationError

JSON_HEADERS: Dict[str, str] = {
    "content-type": "application/json",
}


def build_response(status_code: int, body: Any) -> Dict[str, Any]:
    """API Gateway proxy result with a JSON-encoded body."""
    return build_raw_response(status_code, json.dumps(body))


def build_raw_response(status_code: int, body: str) -> Dict[str, Any]:
    """API Gateway proxy result with a body that is already text."""
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": body,
    }


def error_response_parts(exc: BaseException) -> Optional[Tuple[int, str]]:
    """
    Status code and body text for a recognised error, None otherwise.
    """
    if isinstance(exc, PayloadValidationError):
        return 400, json.dumps({"errors": exc.errors})

    if isinstance(exc, MalformedPayloadError):
        return 400, json.dumps({"error": f'invalid request body format : "{exc.message}"'})

    if isinstance(exc, HttpError):
        return exc.status_code, exc.message

    return None


def handle_error(exc: BaseException) -> Dict[str, Any]:
    """
    Proxy result for a recognised error; re-raises any other exception.
    """
    parts = error_response_parts(exc)
    if parts is None:
        raise exc
    status_code, body = parts
    return build_raw_response(status_code, body)
