"""
Tests for the record store implementations.
"""

from unittest.mock import Mock

import pytest
import requests

from business_dashboard_api.app.core import record_store as record_store_module
from business_dashboard_api.app.core.record_store import (
    DESC,
    FetchParams,
    HttpRecordStore,
    InMemoryRecordStore,
    OrderBy,
    get_record_store,
    set_record_store,
)


class TestFetchParams:
    def test_payload_shape(self):
        params = FetchParams(fields=("title", "status"), order_by=(OrderBy("due_date"),))
        assert params.to_payload() == {
            "fields": [{"field": {"Name": "title"}}, {"field": {"Name": "status"}}],
            "orderBy": [{"fieldName": "due_date", "sorttype": "ASC"}],
        }

    def test_payload_without_order(self):
        assert "orderBy" not in FetchParams(fields=("amount",)).to_payload()


class TestHttpRecordStore:
    @pytest.fixture
    def session(self):
        session = Mock(spec=requests.Session)
        response = Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = {"success": True, "data": [{"Id": 1, "title": "Copy"}]}
        session.request.return_value = response
        return session

    @pytest.fixture
    def store(self, session):
        return HttpRecordStore(
            base_url="https://records.example.test/api/",
            project_id="proj-1",
            public_key="pk-123",
            timeout=7,
            session=session,
        )

    def test_fetch_records_request(self, store, session):
        params = FetchParams(fields=("title",), order_by=(OrderBy("due_date", DESC),))
        reply = store.fetch_records("task", params)

        assert reply == {"success": True, "data": [{"Id": 1, "title": "Copy"}]}
        session.request.assert_called_once_with(
            method="POST",
            url="https://records.example.test/api/tables/task/fetch",
            json=params.to_payload(),
            headers={"X-Project-Id": "proj-1", "X-Public-Key": "pk-123"},
            timeout=7,
        )

    @pytest.mark.parametrize(
        "call, method, path, body",
        [
            (lambda s: s.get_record_by_id("client", 4, FetchParams(("Name",))), "POST",
             "/tables/client/records/4", {"fields": [{"field": {"Name": "Name"}}]}),
            (lambda s: s.create_record("client", [{"Name": "Acme"}]), "POST",
             "/tables/client/records", {"records": [{"Name": "Acme"}]}),
            (lambda s: s.update_record("client", [{"Id": 4, "Name": "Acme"}]), "PUT",
             "/tables/client/records", {"records": [{"Id": 4, "Name": "Acme"}]}),
            (lambda s: s.delete_record("client", [4]), "DELETE",
             "/tables/client/records", {"RecordIds": [4]}),
        ],
    )
    def test_operation_routes(self, store, session, call, method, path, body):
        call(store)
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == method
        assert kwargs["url"] == "https://records.example.test/api" + path
        assert kwargs["json"] == body

    def test_http_error_becomes_failure_reply(self, store, session):
        error_response = Mock(status_code=500, text="Internal Server Error")
        error_response.json.return_value = {"message": "Table 'task' is unavailable"}
        error_response.raise_for_status.side_effect = requests.HTTPError(response=error_response)
        session.request.return_value = error_response

        reply = store.fetch_records("task", FetchParams(("title",)))
        assert reply == {"success": False, "message": "Table 'task' is unavailable"}

    def test_http_error_with_text_body(self, store, session):
        error_response = Mock(status_code=503, text="Service Unavailable")
        error_response.json.side_effect = ValueError("not json")
        error_response.raise_for_status.side_effect = requests.HTTPError(response=error_response)
        session.request.return_value = error_response

        reply = store.delete_record("task", [1])
        assert reply == {"success": False, "message": "Service Unavailable"}

    def test_http_error_with_json_list_body(self, store, session):
        error_response = Mock(status_code=400)
        error_response.json.return_value = [{"message": "bad field"}]
        error_response.raise_for_status.side_effect = requests.HTTPError(response=error_response)
        session.request.return_value = error_response

        reply = store.fetch_records("task", FetchParams(("title",)))
        assert reply == {"success": False, "message": "[{'message': 'bad field'}]"}

    def test_http_error_with_json_string_body(self, store, session):
        error_response = Mock(status_code=500)
        error_response.json.return_value = "internal error"
        error_response.raise_for_status.side_effect = requests.HTTPError(response=error_response)
        session.request.return_value = error_response

        reply = store.delete_record("task", [1])
        assert reply == {"success": False, "message": "internal error"}

    def test_transport_error_becomes_failure_reply(self, store, session):
        session.request.side_effect = requests.ConnectionError("connection refused")
        reply = store.fetch_records("task", FetchParams(("title",)))
        assert reply["success"] is False
        assert "connection refused" in reply["message"]

    def test_non_json_body(self, store, session):
        session.request.return_value.json.side_effect = ValueError("no json")
        reply = store.fetch_records("task", FetchParams(("title",)))
        assert reply == {"success": False, "message": "Invalid response from record store"}

    def test_no_credentials_no_headers(self, session):
        store = HttpRecordStore(base_url="https://records.example.test", session=session)
        store.delete_record("task", [1])
        assert session.request.call_args.kwargs["headers"] == {}


class TestInMemoryRecordStore:
    def test_fetch_projects_requested_fields(self):
        store = InMemoryRecordStore()
        store.create_record("client", [{"Name": "Acme", "email": "a@acme.test", "secret": "x"}])
        reply = store.fetch_records("client", FetchParams(("Name", "status")))
        assert reply["success"] is True
        assert reply["data"] == [{"Id": 1, "Name": "Acme", "status": None}]

    def test_create_returns_one_result_per_record(self):
        store = InMemoryRecordStore()
        reply = store.create_record("task", [{"title": "a"}, {"title": "b"}])
        ids = [result["data"]["Id"] for result in reply["results"]]
        assert ids == [1, 2]
        assert all(result["success"] for result in reply["results"])

    def test_update_reports_unknown_ids_per_record(self):
        store = InMemoryRecordStore()
        store.create_record("task", [{"title": "a"}])
        reply = store.update_record("task", [{"Id": 1, "title": "b"}, {"Id": 50, "title": "c"}])
        assert reply["success"] is True
        assert reply["results"][0] == {
            "success": True,
            "data": {"Id": 1, "title": "b", "CreatedOn": reply["results"][0]["data"]["CreatedOn"]},
        }
        assert reply["results"][1] == {"success": False, "message": "Record with Id 50 does not exist"}

    def test_delete_unknown_id_fails_and_deletes_nothing(self):
        store = InMemoryRecordStore()
        store.create_record("task", [{"title": "a"}])
        reply = store.delete_record("task", [1, 2])
        assert reply == {"success": False, "message": "Record with Id 2 does not exist"}
        assert len(store.fetch_records("task", FetchParams(("title",)))["data"]) == 1

    def test_get_missing_record_returns_no_data(self):
        reply = InMemoryRecordStore().get_record_by_id("task", 1, FetchParams(("title",)))
        assert reply == {"success": True, "data": None}

    def test_returned_records_are_copies(self):
        store = InMemoryRecordStore()
        store.create_record("task", [{"title": "a", "tags": ["x"]}])
        reply = store.fetch_records("task", FetchParams(("tags",)))
        reply["data"][0]["tags"].append("y")
        again = store.fetch_records("task", FetchParams(("tags",)))
        assert again["data"][0]["tags"] == ["x"]


class TestStoreSelection:
    def test_defaults_to_in_memory_without_url(self, monkeypatch):
        monkeypatch.setattr(record_store_module.settings, "record_store_url", "")
        set_record_store(None)
        assert isinstance(get_record_store(), InMemoryRecordStore)

    def test_uses_http_store_when_url_is_set(self, monkeypatch):
        monkeypatch.setattr(record_store_module.settings, "record_store_url", "https://records.example.test")
        monkeypatch.setattr(record_store_module.settings, "record_store_timeout", 3.0)
        set_record_store(None)
        store = get_record_store()
        assert isinstance(store, HttpRecordStore)
        assert store.base_url == "https://records.example.test"
        assert store.timeout == 3.0
