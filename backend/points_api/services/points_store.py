"""
Points API — Points Store (DynamoDB accessor)
===============================================

What:  get / put / put_if_absent / scan_all against the points table.
How:   Thin wrapper over a boto3 Table. Converts between PointsRecord and
       DynamoDB items and wraps every botocore failure in StoreUnavailableError.
Who:   Used by PointsService only.

Number handling:
    The DynamoDB document API rejects Python floats and returns numbers as
    Decimal. Items are written with Decimal(str(points)) and read back as int
    when integral, float otherwise, so records stay JSON-serializable.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError

from points_api.exceptions import StoreUnavailableError
from points_api.schemas.points import PointsRecord

logger = logging.getLogger(__name__)

KEY_ATTRIBUTE = "userId"

_CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _to_dynamo_number(value: Union[int, float]) -> Decimal:
    # str() keeps the shortest repr: Decimal(0.1) would be 0.1000000000000000055...
    return Decimal(str(value))


def _from_dynamo_number(value: Any) -> Union[int, float]:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def record_to_item(record: PointsRecord) -> Dict[str, Any]:
    """PointsRecord → DynamoDB item."""
    item = record.to_item()
    item["points"] = _to_dynamo_number(item["points"])
    return item


def item_to_dict(item: Dict[str, Any]) -> Dict[str, Any]:
    """DynamoDB item → plain JSON-compatible dict."""
    return {key: _from_dynamo_number(value) for key, value in item.items()}


class PointsStore:
    """
    Data access layer for the points table.

    All direct boto3 interaction lives here, so the service can be tested
    against any object exposing get_item / put_item / scan.
    """

    def __init__(self, table: Any):
        self.table = table

    @property
    def table_name(self) -> str:
        return getattr(self.table, "name", "<unknown>")

    def _unavailable(self, operation: str, exc: Exception) -> StoreUnavailableError:
        code = "BotoCoreError"
        if isinstance(exc, ClientError):
            code = exc.response.get("Error", {}).get("Code", "ClientError")
        logger.error(
            "DynamoDB %s on table %s failed: %s (%s)",
            operation,
            self.table_name,
            code,
            exc,
        )
        return StoreUnavailableError(
            context={"table": self.table_name, "operation": operation, "code": code},
        )

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one record by userId.

        Returns:
            The record as a dict, or None when no item has that key.

        Raises:
            StoreUnavailableError: any DynamoDB failure
        """
        try:
            response = self.table.get_item(Key={KEY_ATTRIBUTE: user_id})
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable("GetItem", e) from e

        item = response.get("Item")
        if item is None:
            return None
        return item_to_dict(item)

    def put(self, record: PointsRecord) -> None:
        """
        Write a record unconditionally. An existing item with the same
        userId is replaced.
        """
        try:
            self.table.put_item(Item=record_to_item(record))
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable("PutItem", e) from e

    def put_if_absent(self, record: PointsRecord) -> bool:
        """
        Write a record only if no item with its userId exists, as one
        conditional PutItem.

        Returns:
            True when written, False when an item already existed.
        """
        try:
            self.table.put_item(
                Item=record_to_item(record),
                ConditionExpression="attribute_not_exists(#pk)",
                ExpressionAttributeNames={"#pk": KEY_ATTRIBUTE},
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == _CONDITIONAL_CHECK_FAILED:
                logger.info("Conditional put rejected: userId=%s already exists", record.user_id)
                return False
            raise self._unavailable("PutItem", e) from e
        except BotoCoreError as e:
            raise self._unavailable("PutItem", e) from e
        return True

    def scan_all(self) -> List[Dict[str, Any]]:
        """
        Every item in the table, in DynamoDB's order.

        Follows LastEvaluatedKey across 1 MB scan pages.
        """
        items: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {}
        pages = 0
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                pages += 1
                items.extend(item_to_dict(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable("Scan", e) from e

        logger.debug("Scanned %d items from %s in %d page(s)", len(items), self.table_name, pages)
        return items
