"""
Points API — Points Service (Business Logic)
==============================================

What:  The two operations of the API: add_points and list_points.
How:   Composes the payload validator and the PointsStore. Errors are raised
       as typed exceptions; HTTP mapping happens at the surface boundary
       (responses.py for Lambda, exception handlers in main.py for ASGI).
Who:   Called by the Lambda entry points (handlers.py) and the /points routes.

Insert Flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────────┐
    │ Raw body │───▶│  Validate    │───▶│ Existence    │───▶│ Put (if      │
    │          │    │  (payload)   │    │ check (get)  │    │ absent)      │
    └──────────┘    └──────────────┘    └──────────────┘    └──────────────┘
                     400 on failure      409 if present      409 if a
                                                             concurrent insert won
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List

from points_api.config import settings
from points_api.database import get_points_table
from points_api.exceptions import UserAlreadyExistsError
from points_api.schemas.points import PointsRecord
from points_api.services.payload_service import RawBody, parse_points_payload
from points_api.services.points_store import PointsStore, item_to_dict, record_to_item

logger = logging.getLogger(__name__)


class PointsService:
    """
    Business logic for points records.

    Stateless apart from its injected store, so one instance serves every
    request in the process.

    Args:
        store: PointsStore over the points table
        conditional_writes: insert with a single conditional put; when False
            the existence check is followed by a plain overwrite
    """

    def __init__(self, store: PointsStore, conditional_writes: bool = True):
        self.store = store
        self.conditional_writes = conditional_writes

    def add_points(self, body: RawBody, is_base64_encoded: bool = False) -> Dict[str, Any]:
        """
        Create a points record for a user that has none yet.

        Returns:
            The stored record, {"userId": ..., "points": ...}, with points
            as GET /points will return them (10.0 comes back as 10)

        Raises:
            MalformedPayloadError: body is not JSON
            PayloadValidationError: body does not match PointsRecord
            UserAlreadyExistsError: the user already has a record (409)
            StoreUnavailableError: DynamoDB failed
        """
        record: PointsRecord = parse_points_payload(body, is_base64_encoded)

        existing = self.store.get(record.user_id)
        if existing is not None:
            logger.info("Points record for userId=%s already exists", record.user_id)
            raise UserAlreadyExistsError(record.user_id)

        if self.conditional_writes:
            if not self.store.put_if_absent(record):
                raise UserAlreadyExistsError(
                    record.user_id, context={"reason": "concurrent insert"}
                )
        else:
            self.store.put(record)

        logger.info("Created points record: userId=%s points=%s", record.user_id, record.points)
        return item_to_dict(record_to_item(record))

    def list_points(self) -> List[Dict[str, Any]]:
        """Every points record in the table, in no particular order."""
        items = self.store.scan_all()
        logger.info("Listed %d points record(s)", len(items))
        return items


@lru_cache(maxsize=1)
def get_points_service() -> PointsService:
    """
    Process-wide PointsService bound to the configured table.

    Used as a FastAPI dependency and as the Lambda entry points' default.
    """
    return PointsService(
        store=PointsStore(get_points_table()),
        conditional_writes=settings.conditional_writes,
    )
