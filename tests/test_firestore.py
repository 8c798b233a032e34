from datetime import datetime, timezone

import pytest
import requests

from range_app.documents import StoreError
from range_app.firestore import (
    FirestoreDocumentStore,
    decode_fields,
    encode_fields,
    encode_value,
)

BASE = "https://firestore.googleapis.com/v1/projects/demo/databases/(default)/documents"


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, *responses):
        self.headers = {}
        self.calls = []
        self.responses = list(responses)

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _store(*responses):
    session = FakeSession(*responses)
    return FirestoreDocumentStore("demo", token="tok", timeout=2, session=session), session


def test_value_encoding():
    assert encode_value(None) == {"nullValue": None}
    assert encode_value(True) == {"booleanValue": True}
    assert encode_value(48) == {"integerValue": "48"}
    assert encode_value(2.5) == {"doubleValue": 2.5}
    assert encode_value("low") == {"stringValue": "low"}
    assert encode_value([]) == {"arrayValue": {}}
    assert encode_value(datetime(2024, 1, 2, tzinfo=timezone.utc)) == {
        "timestampValue": "2024-01-02T00:00:00+00:00"
    }
    with pytest.raises(TypeError):
        encode_value(object())


def test_fields_survive_encoding():
    data = {
        "exercises": [{"name": "Wall slide", "range": "short"}, {"name": "Cable raise", "range": "short"}],
        "completed": False,
        "reappearInterval": 24,
        "completionTime": None,
        "weight": 12.5,
        "type": "shoulder",
    }
    assert decode_fields(encode_fields(data)) == data


def test_token_sent_as_bearer():
    _, session = _store()
    assert session.headers["Authorization"] == "Bearer tok"


def test_get_missing_document_returns_none():
    store, session = _store(FakeResponse(404))
    assert store.get("users/u1") is None
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", f"{BASE}/users/u1")
    assert kwargs["timeout"] == 2


def test_get_decodes_fields():
    store, _ = _store(FakeResponse(200, {"name": f"{BASE}/users/u1", "fields": {"email": {"stringValue": "a@b.c"}}}))
    assert store.get("users/u1") == {"email": "a@b.c"}


def test_merge_set_uses_update_mask():
    store, session = _store(FakeResponse(200))
    store.set("users/u1", {"email": "a@b.c", "createdAt": "2024"}, merge=True)

    method, url, kwargs = session.calls[0]
    assert method == "PATCH"
    assert url == f"{BASE}/users/u1"
    assert kwargs["params"] == {"updateMask.fieldPaths": ["email", "createdAt"]}
    assert kwargs["json"]["fields"]["email"] == {"stringValue": "a@b.c"}


def test_plain_set_replaces_document():
    store, session = _store(FakeResponse(200))
    store.set("users/u1/exercises/1", {"completed": True})
    assert session.calls[0][2]["params"] is None


def test_add_returns_generated_id():
    store, session = _store(FakeResponse(200, {"name": f"{BASE}/users/u1/exercises/1/progress/abc123"}))
    assert store.add("users/u1/exercises/1/progress", {"reps": 5}) == "abc123"
    assert session.calls[0][:2] == ("POST", f"{BASE}/users/u1/exercises/1/progress")


def test_delete_ignores_missing():
    store, session = _store(FakeResponse(404))
    store.delete("users/u1/exercises/1")
    assert session.calls[0][0] == "DELETE"


def test_list_follows_pages():
    store, session = _store(
        FakeResponse(200, {
            "documents": [{"name": f"{BASE}/users/u1/exercises/1/progress/a", "fields": {"reps": {"integerValue": "1"}}}],
            "nextPageToken": "next",
        }),
        FakeResponse(200, {
            "documents": [{"name": f"{BASE}/users/u1/exercises/1/progress/b", "fields": {"reps": {"integerValue": "2"}}}],
        }),
    )
    assert store.list("users/u1/exercises/1/progress") == [("a", {"reps": 1}), ("b", {"reps": 2})]
    assert session.calls[1][2]["params"]["pageToken"] == "next"


def test_list_empty_collection():
    store, _ = _store(FakeResponse(200, {}))
    assert store.list("users/u1/exercises") == []


def test_filtered_list_runs_structured_query():
    store, session = _store(FakeResponse(200, [
        {"readTime": "2024-01-01T00:00:00Z"},
        {"document": {"name": f"{BASE}/users/u1/exercises/3", "fields": {"type": {"stringValue": "knee"}}}},
    ]))
    assert store.list("users/u1/exercises", where=("type", "knee")) == [("3", {"type": "knee"})]

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", f"{BASE}/users/u1:runQuery")
    query = kwargs["json"]["structuredQuery"]
    assert query["from"] == [{"collectionId": "exercises"}]
    assert query["where"]["fieldFilter"]["value"] == {"stringValue": "knee"}


@pytest.mark.parametrize("response", [
    FakeResponse(500),
    FakeResponse(403),
    requests.ConnectionError("down"),
])
def test_failures_become_store_errors(response):
    store, _ = _store(response)
    with pytest.raises(StoreError):
        store.set("users/u1", {"email": "a@b.c"})


def test_rejects_collection_path_for_document():
    store, _ = _store()
    with pytest.raises(ValueError):
        store.get("users")
