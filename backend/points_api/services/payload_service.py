"""
Points API — Payload Validation
=================================

What:  Turns a raw request body into a validated PointsRecord.
How:   Two stages, each with its own failure kind:
         1. json.loads          → MalformedPayloadError (parser diagnostic)
         2. PointsRecord schema → PayloadValidationError (all violations)
Who:   Called by PointsService.add_points() before any store access.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from points_api.exceptions import MalformedPayloadError, PayloadValidationError
from points_api.schemas.points import PointsRecord

logger = logging.getLogger(__name__)

RawBody = Union[str, bytes, None]

# Pydantic error type → violation template. {field} is the wire name.
_VIOLATION_TEMPLATES: Dict[str, str] = {
    "missing": "{field} is a required field",
    "string_type": "{field} must be a string",
    "string_too_short": "{field} must not be empty",
    "int_type": "{field} must be a number",
    "float_type": "{field} must be a number",
}

_NOT_AN_OBJECT = "body must be a JSON object"


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN, Infinity and -Infinity; JSON does not
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_body(body: RawBody, is_base64_encoded: bool = False) -> str:
    """
    Normalise an incoming body to text.

    API Gateway sets isBase64Encoded for binary media types; a missing body
    becomes "" so it fails JSON parsing like any other empty payload.
    """
    if body is None:
        return ""
    if is_base64_encoded:
        try:
            body = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedPayloadError(str(e)) from e
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayloadError(str(e)) from e
    return body


def format_violations(exc: ValidationError) -> List[str]:
    """
    Collapse pydantic errors into one readable violation per field.

    A union field reports one error per member type (points → int, float);
    only the first error for each field is kept.
    """
    violations: List[str] = []
    seen = set()
    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc or error["type"] in ("model_type", "model_attributes_type", "dict_type"):
            key, violation = "__root__", _NOT_AN_OBJECT
        else:
            key = str(loc[0])
            template = _VIOLATION_TEMPLATES.get(error["type"])
            if template is not None:
                violation = template.format(field=key)
            elif error["type"] == "value_error":
                # Raised by a field validator; its text already names the field
                violation = str(error["ctx"]["error"]) if "ctx" in error else error["msg"]
            else:
                violation = f"{key}: {error['msg']}"
        if key in seen:
            continue
        seen.add(key)
        violations.append(violation)
    return violations


def parse_points_payload(body: RawBody, is_base64_encoded: bool = False) -> PointsRecord:
    """
    Parse and validate a request body.

    Returns:
        PointsRecord holding exactly userId and points.

    Raises:
        MalformedPayloadError: body is not valid JSON (or undecodable bytes)
        PayloadValidationError: JSON does not match the PointsRecord shape
    """
    text = decode_body(body, is_base64_encoded)

    try:
        data: Any = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning("Malformed request body: %s", e)
        raise MalformedPayloadError(str(e)) from e

    if not isinstance(data, dict):
        logger.warning("Request body is a JSON %s, not an object", type(data).__name__)
        raise PayloadValidationError([_NOT_AN_OBJECT])

    try:
        return PointsRecord.model_validate(data)
    except ValidationError as e:
        violations = format_violations(e)
        logger.warning("Request body failed validation: %s", violations)
        raise PayloadValidationError(violations, context={"fields": sorted(data)}) from e

