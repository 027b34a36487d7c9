"""
Test suite for the Lambda handlers.

Handlers are invoked with API Gateway proxy events and an explicit store.
"""

import json
from unittest.mock import MagicMock

import pytest

from app.core.exceptions import StoreError
from app.core.store import DynamoDBStore, ListingStore
from app.handlers import listings as handlers


def make_event(body=None, listing_id=None):
    event = {"headers": {}, "pathParameters": None, "body": None}
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    if listing_id is not None:
        event["pathParameters"] = {"id": listing_id}
    return event


def body_of(response):
    return json.loads(response["body"])


@pytest.fixture
def failing_store():
    """Store whose every call fails like an unreachable DynamoDB"""
    store = MagicMock(spec=ListingStore)
    for method in ("put", "get", "scan", "delete", "update"):
        getattr(store, method).side_effect = StoreError()
    return store


class TestResponses:
    def test_cors_and_content_type_headers(self, memory_store):
        response = handlers.list_all(make_event(), None, store=memory_store)

        assert response["headers"]["Access-Control-Allow-Origin"] == "*"
        assert response["headers"]["Access-Control-Allow-Headers"] == "*"
        assert response["headers"]["Access-Control-Allow-Credentials"] == "true"
        assert response["headers"]["Content-Type"] == "application/json"


class TestSubmit:
    """Tests for the submit handler"""

    def test_submit_success(self, memory_store, sample_listing_data):
        response = handlers.submit(make_event(sample_listing_data), None, store=memory_store)

        assert response["statusCode"] == 201
        body = body_of(response)
        assert body["jobId"].endswith("-senior-python-developer")
        assert "Senior Python Developer" in body["message"]

        stored = memory_store.get(body["jobId"])
        assert stored["jobEmployer"] == "Acme Corp"
        assert stored["submittedAt"] == stored["updatedAt"]

    def test_submit_validation_error(self, memory_store, sample_listing_data):
        data = {**sample_listing_data, "jobSalary": "120000"}

        response = handlers.submit(make_event(data), None, store=memory_store)

        assert response["statusCode"] == 400
        assert body_of(response)["errors"] == ["jobSalary"]
        assert memory_store.records == {}

    def test_submit_missing_body(self, memory_store):
        response = handlers.submit(make_event(), None, store=memory_store)

        assert response["statusCode"] == 400
        assert body_of(response)["errors"] == ["jobTitle", "jobEmployer", "jobSalary", "jobLocation"]

    def test_submit_invalid_json(self, memory_store):
        response = handlers.submit(make_event("{not json"), None, store=memory_store)

        assert response["statusCode"] == 400
        assert "JSON" in body_of(response)["message"]

    def test_submit_salary_out_of_store_range(self, sample_listing_data):
        store = DynamoDBStore(
            "joblistings",
            endpoint_url="http://127.0.0.1:1",
            aws_access_key_id="testing",
            aws_secret_access_key="testing",
        )
        data = {**sample_listing_data, "jobSalary": 1e300}

        response = handlers.submit(make_event(data), None, store=store)

        assert response["statusCode"] == 400
        assert body_of(response)["errors"] == ["jobSalary"]
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"

    def test_submit_store_error(self, failing_store, sample_listing_data):
        response = handlers.submit(make_event(sample_listing_data), None, store=failing_store)

        assert response["statusCode"] == 500
        assert body_of(response) == {"message": "Job listing store request failed."}


class TestReadHandlers:
    """Tests for list_all and get"""

    def test_list_all(self, memory_store, stored_listing):
        response = handlers.list_all(make_event(), None, store=memory_store)

        assert response["statusCode"] == 200
        jobs = body_of(response)["jobs"]
        assert len(jobs) == 1
        assert jobs[0]["id"] == stored_listing["id"]
        assert "submittedAt" not in jobs[0]

    def test_list_all_empty(self, memory_store):
        response = handlers.list_all(make_event(), None, store=memory_store)

        assert body_of(response) == {"jobs": []}

    def test_get(self, memory_store, stored_listing):
        response = handlers.get(make_event(listing_id=stored_listing["id"]), None, store=memory_store)

        assert response["statusCode"] == 200
        assert body_of(response) == stored_listing

    def test_get_missing(self, memory_store):
        response = handlers.get(make_event(listing_id="nope"), None, store=memory_store)

        assert response["statusCode"] == 404
        assert body_of(response)["message"] == "Job listing not found."

    @pytest.mark.parametrize("handler", [handlers.list_all, handlers.get])
    def test_store_errors(self, failing_store, handler):
        response = handler(make_event(listing_id="abc"), None, store=failing_store)

        assert response["statusCode"] == 500


class TestDelete:
    def test_delete(self, memory_store, stored_listing):
        response = handlers.delete(make_event(listing_id=stored_listing["id"]), None, store=memory_store)

        assert response["statusCode"] == 200
        assert body_of(response) == {"message": "Job listing deleted."}
        assert memory_store.get(stored_listing["id"]) is None

    def test_delete_store_error(self, failing_store):
        response = handlers.delete(make_event(listing_id="abc"), None, store=failing_store)

        assert response["statusCode"] == 500


class TestUpdate:
    """Tests for the update handler"""

    def test_update_fields(self, memory_store, stored_listing):
        event = make_event({"jobTitle": "New Title", "jobSalary": 95000}, listing_id=stored_listing["id"])

        response = handlers.update(event, None, store=memory_store)

        assert response["statusCode"] == 200
        body = body_of(response)
        assert body["jobTitle"] == "New Title"
        assert body["jobSalary"] == 95000
        assert body["updatedAt"] >= stored_listing["updatedAt"]

        stored = memory_store.get(stored_listing["id"])
        assert stored["jobTitle"] == "New Title"
        assert stored["submittedAt"] == stored_listing["submittedAt"]

    def test_update_empty_body_touches(self, memory_store, stored_listing):
        response = handlers.update(make_event(listing_id=stored_listing["id"]), None, store=memory_store)

        assert response["statusCode"] == 200
        assert list(body_of(response)) == ["updatedAt"]

    def test_unknown_field_issues_no_store_call(self):
        store = MagicMock(spec=ListingStore)

        response = handlers.update(make_event({"bogusField": "x"}, listing_id="abc"), None, store=store)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "bogusField is not a recognized job listing parameter."
        store.update.assert_not_called()

    def test_type_mismatch_issues_no_store_call(self):
        store = MagicMock(spec=ListingStore)

        response = handlers.update(make_event({"jobSalary": "95000"}, listing_id="abc"), None, store=store)

        assert response["statusCode"] == 400
        assert "jobSalary" in body_of(response)["message"]
        store.update.assert_not_called()

    def test_update_missing_listing(self, memory_store):
        response = handlers.update(make_event({"jobTitle": "x"}, listing_id="nope"), None, store=memory_store)

        assert response["statusCode"] == 404
        assert memory_store.get("nope") is None

    def test_update_store_error(self, failing_store):
        response = handlers.update(make_event({"jobTitle": "x"}, listing_id="abc"), None, store=failing_store)

        assert response["statusCode"] == 500
