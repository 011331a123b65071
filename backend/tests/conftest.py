"""
Points API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   An in-memory FakeTable stands in for the boto3 DynamoDB Table, so no
       test talks to AWS. It raises real botocore ClientErrors where DynamoDB
       would.

Fixture Hierarchy:
    ├── fake_table:      Empty FakeTable (one item per scan page is opt-in)
    ├── points_store:    PointsStore over fake_table
    ├── points_service:  PointsService over points_store (conditional writes)
    ├── failing_table:   MagicMock table whose every call is throttled
    ├── lambda_context:  Minimal Lambda context object
    └── test_client:     HTTPX AsyncClient with the service dependency overridden
"""

import os

# Settings are read on first import of points_api.config; set env first
os.environ["POINTS_TABLE_NAME"] = "PointsTable-test"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

from types import SimpleNamespace
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from botocore.exceptions import ClientError
from httpx import ASGITransport, AsyncClient

from points_api.services.points_service import PointsService, get_points_service
from points_api.services.points_store import PointsStore


def client_error(code: str, operation: str, message: str = "") -> ClientError:
    """Build a botocore ClientError the way boto3 raises it."""
    return ClientError(
        {"Error": {"Code": code, "Message": message or code}},
        operation,
    )


class FakeTable:
    """
    In-memory stand-in for a boto3 DynamoDB Table keyed on "userId".

    Supports the calls PointsStore makes: get_item, put_item (plain or with
    an attribute_not_exists condition) and paginated scan.
    """

    def __init__(self, name: str = "PointsTable-test", page_size: Optional[int] = None):
        self.name = name
        self.items: Dict[str, Dict[str, Any]] = {}
        self.page_size = page_size
        self.scan_calls = 0

    def get_item(self, Key: Dict[str, Any]) -> Dict[str, Any]:
        item = self.items.get(Key["userId"])
        if item is None:
            return {}
        return {"Item": dict(item)}

    def put_item(self, Item: Dict[str, Any], ConditionExpression: Optional[str] = None, **kwargs: Any):
        for value in Item.values():
            if isinstance(value, float):
                # boto3's TypeSerializer behaves the same way
                raise TypeError("Float types are not supported. Use Decimal types instead.")
        key = Item["userId"]
        if ConditionExpression is not None and key in self.items:
            raise client_error(
                "ConditionalCheckFailedException",
                "PutItem",
                "The conditional request failed",
            )
        self.items[key] = dict(Item)
        return {}

    def scan(self, ExclusiveStartKey: Optional[Dict[str, Any]] = None, **kwargs: Any):
        self.scan_calls += 1
        keys = sorted(self.items)
        start = 0
        if ExclusiveStartKey is not None:
            start = keys.index(ExclusiveStartKey["userId"]) + 1
        size = self.page_size or len(keys)
        page = keys[start:start + size]
        response: Dict[str, Any] = {
            "Items": [dict(self.items[k]) for k in page],
            "Count": len(page),
        }
        if page and start + size < len(keys):
            response["LastEvaluatedKey"] = {"userId": page[-1]}
        return response


@pytest.fixture
def fake_table():
    """Empty in-memory points table."""
    return FakeTable()


@pytest.fixture
def points_store(fake_table):
    return PointsStore(fake_table)


@pytest.fixture
def points_service(points_store):
    return PointsService(points_store, conditional_writes=True)


@pytest.fixture
def failing_table():
    """
    Table whose every operation fails with throttling.

    Usage:
        store = PointsStore(failing_table)
        with pytest.raises(StoreUnavailableError): store.scan_all()
    """
    table = MagicMock()
    table.name = "PointsTable-test"
    error = client_error("ProvisionedThroughputExceededException", "Scan")
    table.get_item.side_effect = error
    table.put_item.side_effect = error
    table.scan.side_effect = error
    return table


@pytest.fixture
def lambda_context():
    """The attributes of the Lambda context object the handlers read."""
    return SimpleNamespace(
        aws_request_id="c6af9ac6-7b61-11e6-9a41-93e8deadbeef",
        function_name="points-api-test",
    )


@pytest_asyncio.fixture
async def test_client(points_service):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The PointsService dependency is replaced with the fake-table service.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/points")
            assert response.status_code == 200
    """
    from points_api.main import app

    app.dependency_overrides[get_points_service] = lambda: points_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
