"""
Points API — DynamoDB Resource Management
===========================================

What:  Builds the boto3 DynamoDB resource and the points Table handle.
How:   One resource per process, created lazily on first use and cached.
       boto3 keeps its HTTP connection pool on the resource's client, so
       reusing it across Lambda invocations keeps connections warm.
Who:   Used by PointsStore (services/points_store.py) through
       get_points_table(); tests inject their own Table object instead.
When:  First request after a cold start / server start.
"""

import logging
from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config

from points_api.config import settings

logger = logging.getLogger(__name__)


# ── Client Configuration ──────────────────────────────────────────────────
# Standard retry mode with boto3's default attempt count; no extra retries
# are layered on top by this service.
_BOTO_CONFIG = Config(retries={"mode": "standard"})


@lru_cache(maxsize=1)
def get_dynamodb_resource() -> Any:
    """
    Create the process-wide DynamoDB service resource.

    DYNAMODB_ENDPOINT_URL points it at DynamoDB Local when set.
    """
    logger.info(
        "Creating DynamoDB resource: region=%s endpoint=%s",
        settings.aws_region,
        settings.dynamodb_endpoint_url or "<aws>",
    )
    return boto3.resource(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
        config=_BOTO_CONFIG,
    )


@lru_cache(maxsize=1)
def get_points_table() -> Any:
    """
    Table handle for the configured points table.

    Creating the handle makes no AWS call; a missing table surfaces on the
    first get/put/scan as a ResourceNotFoundException.
    """
    return get_dynamodb_resource().Table(settings.points_table_name)


def reset_resources() -> None:
    """
    Drop the cached resource and table handle.

    Called on ASGI shutdown and by tests that change settings.
    """
    get_points_table.cache_clear()
    get_dynamodb_resource.cache_clear()
