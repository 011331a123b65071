"""
Points API — Points Service Unit Tests
========================================

What:  Tests for PointsService.add_points / list_points business rules.

What we test:
    ✅ New user → record stored and returned
    ✅ Existing user → UserAlreadyExistsError (409), stored record untouched
    ✅ Losing a concurrent insert race → UserAlreadyExistsError
    ✅ Non-conditional mode uses a plain put after the existence check
    ✅ Validation failures never reach the store
    ✅ list_points returns every record
    ✅ Numbers at DynamoDB's limits pass boto3's serializer; beyond them they are 400s
    ✅ Integral floats come back the way GET /points lists them
"""

from unittest.mock import MagicMock

import boto3
import pytest
from botocore.stub import Stubber

from points_api.exceptions import (
    MalformedPayloadError,
    PayloadValidationError,
    StoreUnavailableError,
    UserAlreadyExistsError,
)
from points_api.services.points_service import PointsService
from points_api.services.points_store import PointsStore


class TestAddPoints:

    def test_new_user_is_created(self, points_service, fake_table):
        result = points_service.add_points('{"userId": "u1", "points": 10}')

        assert result == {"userId": "u1", "points": 10}
        assert "u1" in fake_table.items

    def test_existing_user_conflicts(self, points_service, points_store):
        points_service.add_points('{"userId": "u1", "points": 10}')

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            points_service.add_points('{"userId": "u1", "points": 50}')

        assert exc_info.value.status_code == 409
        assert points_store.get("u1") == {"userId": "u1", "points": 10}

    def test_lost_race_conflicts(self, points_store):
        """The existence check passes but another insert lands first."""
        points_store.get = MagicMock(return_value=None)
        points_store.table.items["u1"] = {"userId": "u1", "points": 1}
        service = PointsService(points_store, conditional_writes=True)

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            service.add_points('{"userId": "u1", "points": 2}')

        assert exc_info.value.context["reason"] == "concurrent insert"
        assert points_store.table.items["u1"]["points"] == 1

    def test_unconditional_mode_uses_plain_put(self):
        store = MagicMock(spec=PointsStore)
        store.get.return_value = None
        service = PointsService(store, conditional_writes=False)

        service.add_points('{"userId": "u1", "points": 3}')

        store.put.assert_called_once()
        store.put_if_absent.assert_not_called()
        assert store.put.call_args.args[0].user_id == "u1"

    def test_conditional_mode_uses_put_if_absent(self):
        store = MagicMock(spec=PointsStore)
        store.get.return_value = None
        store.put_if_absent.return_value = True
        service = PointsService(store, conditional_writes=True)

        service.add_points('{"userId": "u1", "points": 3}')

        store.put_if_absent.assert_called_once()
        store.put.assert_not_called()

    def test_invalid_payload_skips_store(self):
        store = MagicMock(spec=PointsStore)
        service = PointsService(store)

        with pytest.raises(PayloadValidationError):
            service.add_points("{}")
        with pytest.raises(MalformedPayloadError):
            service.add_points("{")

        store.get.assert_not_called()

    def test_store_failure_propagates(self, failing_table):
        service = PointsService(PointsStore(failing_table))
        with pytest.raises(StoreUnavailableError):
            service.add_points('{"userId": "u1", "points": 1}')

    def test_integral_float_returned_as_listed(self, points_service):
        created = points_service.add_points('{"userId": "u1", "points": 10.0}')

        assert created == {"userId": "u1", "points": 10}
        assert isinstance(created["points"], int)
        assert points_service.list_points() == [created]


class TestDynamoNumberLimits:
    """Runs add_points against a real boto3 Table with a stubbed client."""

    def setup_method(self):
        table = boto3.resource("dynamodb", region_name="us-east-1").Table("PointsTable-test")
        self.stubber = Stubber(table.meta.client)
        self.stubber.activate()
        self.service = PointsService(PointsStore(table), conditional_writes=True)

    def teardown_method(self):
        self.stubber.deactivate()

    @pytest.mark.parametrize("points", ["9.99e125", "9" * 38, "1e-130", "-0.5"])
    def test_storable_numbers_reach_dynamodb(self, points):
        self.stubber.add_response("get_item", {})
        self.stubber.add_response("put_item", {})

        created = self.service.add_points('{"userId": "u1", "points": ' + points + "}")

        assert created["userId"] == "u1"
        self.stubber.assert_no_pending_responses()

    @pytest.mark.parametrize("points", ["1e300", "1" * 41, "1e-200"])
    def test_unstorable_numbers_are_validation_errors(self, points):
        with pytest.raises(PayloadValidationError):
            self.service.add_points('{"userId": "u1", "points": ' + points + "}")


class TestListPoints:

    def test_empty(self, points_service):
        assert points_service.list_points() == []

    def test_lists_every_record(self, points_service):
        points_service.add_points('{"userId": "a", "points": 1}')
        points_service.add_points('{"userId": "b", "points": 2.5}')

        items = points_service.list_points()

        assert sorted(items, key=lambda i: i["userId"]) == [
            {"userId": "a", "points": 1},
            {"userId": "b", "points": 2.5},
        ]
