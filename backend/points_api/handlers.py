"""
Points API — AWS Lambda Entry Points
======================================

What:  API Gateway (REST, proxy integration) handlers for the two operations.
How:   Each handler pulls the body out of the proxy event, calls PointsService
       and returns a proxy result built by responses.py.
Who:   Invoked by the Lambda runtime:
           points_api.handlers.add_points   (POST /points)
           points_api.handlers.list_points  (GET  /points)

Error propagation:
    Recognised failures become 400/409 responses. Anything else (including
    StoreUnavailableError) is logged and re-raised; Lambda reports the
    invocation as failed and API Gateway answers 502.
"""

import logging
from typing import Any, Dict, Optional

from points_api.logging_setup import setup_logging
from points_api.responses import build_response, error_response_parts, handle_error
from points_api.services.points_service import PointsService, get_points_service

# Cold start: configure logging once per container
setup_logging()

logger = logging.getLogger(__name__)


def _request_id(context: Any) -> str:
    return getattr(context, "aws_request_id", None) or "-"


def add_points(
    event: Dict[str, Any],
    context: Any = None,
    service: Optional[PointsService] = None,
) -> Dict[str, Any]:
    """
    Insert a points record if the user has none.

    Returns:
        201 with the stored record, 400 on a bad body, 409 when the user
        already has a record.
    """
    service = service or get_points_service()
    rid = _request_id(context)
    logger.info("[%s] add_points invoked", rid)

    try:
        record = service.add_points(
            event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded")),
        )
    except Exception as e:
        if error_response_parts(e) is None:
            logger.error("[%s] add_points failed: %s", rid, e, exc_info=True)
        return handle_error(e)

    return build_response(201, record)


def list_points(
    event: Optional[Dict[str, Any]] = None,
    context: Any = None,
    service: Optional[PointsService] = None,
) -> Dict[str, Any]:
    """Return every points record as a JSON array (200)."""
    service = service or get_points_service()
    rid = _request_id(context)
    logger.info("[%s] list_points invoked", rid)

    try:
        items = service.list_points()
    except Exception as e:
        logger.error("[%s] list_points failed: %s", rid, e, exc_info=True)
        raise

    return build_response(200, items)
