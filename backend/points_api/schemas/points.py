"""
Points API — Pydantic Request/Response Schemas
================================================

What:  The PointsRecord contract shared by the request body, the stored
       DynamoDB item and the response body, plus the error body shapes.
How:   Field names are snake_case in Python and camelCase on the wire
       (`user_id` ↔ `userId`); `model_dump(by_alias=True)` produces the
       wire/item form.
"""

import math
from decimal import Decimal
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr, field_validator


# DynamoDB number limits
DYNAMODB_MAX_DIGITS = 38
DYNAMODB_MIN_MAGNITUDE = Decimal("1E-130")
DYNAMODB_MAX_MAGNITUDE = Decimal("9.9999999999999999999999999999999999999E+125")

class PointsRecord(BaseModel):
    """
    One user's points. `userId` is the partition key of the points table.

    Unrecognised input fields are ignored, so the stored item only ever
    holds these two attributes.
    """

    user_id: StrictStr = Field(
        alias="userId",
        min_length=1,
        description="Unique user identifier (table partition key)",
    )
    # StrictInt first: integral JSON numbers stay ints (10, not 10.0)
    points: Union[StrictInt, StrictFloat] = Field(description="Points held by the user")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("points")
    @classmethod
    def validate_storable(cls, v: Union[int, float]) -> Union[int, float]:
        """
        Points must fit a DynamoDB number: finite, at most 38 significant
        digits, magnitude between 1E-130 and 9.99...E+125 (or zero).
        """
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("points must be a finite number")

        # Same text the store writes: Decimal(str(points))
        number = Decimal(str(v))
        if len(number.as_tuple().digits) > DYNAMODB_MAX_DIGITS:
            raise ValueError(
                f"points must have at most {DYNAMODB_MAX_DIGITS} significant digits"
            )
        if number and not DYNAMODB_MIN_MAGNITUDE <= abs(number) <= DYNAMODB_MAX_MAGNITUDE:
            raise ValueError("points is outside the range a DynamoDB number can hold")
        return v

    def to_item(self) -> Dict[str, Any]:
        """Wire/item representation: {"userId": ..., "points": ...}."""
        return self.model_dump(by_alias=True)


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: documented in OpenAPI, built by responses.py
# ══════════════════════════════════════════════════════════════════════════


class ValidationErrorResponse(BaseModel):
    """Body returned when the JSON does not match PointsRecord."""
    errors: List[str] = Field(
        description="One violation per offending field",
        examples=[["userId is a required field", "points is a required field"]],
    )


class ConflictResponse(BaseModel):
    """Body returned when the user already has a points record."""
    error: str = Field(examples=["user 'u1' already has a points record"])
