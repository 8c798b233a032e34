"""
Firestore backend for the document store, spoken over the REST API.

Only the handful of calls the tracker needs are covered. Values are
translated between plain Python and Firestore's typed value format
(``{"stringValue": ...}``, ``{"integerValue": "12"}``, ...).
"""
import logging
from datetime import datetime

import requests

from .documents import StoreError, DocumentNotFound, document_path, collection_path

logger = logging.getLogger(__name__)

FIRESTORE_API = "https://firestore.googleapis.com/v1"
PAGE_SIZE = 300


def encode_value(value):
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": value.isoformat()}
    if isinstance(value, (list, tuple)):
        if not value:
            return {"arrayValue": {}}
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Cannot store {type(value).__name__} in Firestore")


def encode_fields(data: dict) -> dict:
    return {key: encode_value(val) for key, val in data.items()}


def decode_value(value: dict):
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return value["booleanValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return value["timestampValue"]
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    raise ValueError(f"Unsupported Firestore value: {sorted(value)}")


def decode_fields(fields: dict) -> dict:
    return {key: decode_value(val) for key, val in (fields or {}).items()}


def _doc_id(document: dict) -> str:
    return document["name"].rsplit("/", 1)[-1]


class FirestoreDocumentStore:
    def __init__(self, project: str, token=None, timeout: float = 10, session=None):
        self.base = f"{FIRESTORE_API}/projects/{project}/databases/(default)/documents"
        self.timeout = timeout
        self.session = session or requests.Session()
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def _request(self, method: str, url: str, **kwargs):
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise StoreError(f"{method} {url} failed: {e}") from e

        if r.status_code == 404:
            raise DocumentNotFound(url)
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            raise StoreError(f"{method} {url} returned {r.status_code}") from e
        return r

    def get(self, path: str):
        try:
            r = self._request("GET", f"{self.base}/{document_path(path)}")
        except DocumentNotFound:
            return None
        return decode_fields(r.json().get("fields"))

    def set(self, path: str, data: dict, merge: bool = False):
        params = {"updateMask.fieldPaths": list(data)} if merge else None
        self._request(
            "PATCH",
            f"{self.base}/{document_path(path)}",
            params=params,
            json={"fields": encode_fields(data)},
        )

    def delete(self, path: str):
        try:
            self._request("DELETE", f"{self.base}/{document_path(path)}")
        except DocumentNotFound:
            pass

    def add(self, collection: str, data: dict) -> str:
        r = self._request(
            "POST",
            f"{self.base}/{collection_path(collection)}",
            json={"fields": encode_fields(data)},
        )
        return _doc_id(r.json())

    def list(self, collection: str, where=None):
        collection = collection_path(collection)
        if where is not None:
            return self._run_query(collection, where)

        results = []
        params = {"pageSize": PAGE_SIZE}
        while True:
            try:
                r = self._request("GET", f"{self.base}/{collection}", params=params)
            except DocumentNotFound:
                return results
            payload = r.json()
            for document in payload.get("documents", []):
                results.append((_doc_id(document), decode_fields(document.get("fields"))))
            token = payload.get("nextPageToken")
            if not token:
                return results
            params = {"pageSize": PAGE_SIZE, "pageToken": token}

    def _run_query(self, collection: str, where):
        parent, _, collection_id = collection.rpartition("/")
        url = f"{self.base}/{parent}:runQuery" if parent else f"{self.base}:runQuery"
        field, value = where
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection_id}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": field},
                        "op": "EQUAL",
                        "value": encode_value(value),
                    }
                },
            }
        }
        r = self._request("POST", url, json=body)
        results = []
        for row in r.json():
            document = row.get("document")
            if document:
                results.append((_doc_id(document), decode_fields(document.get("fields"))))
        logger.debug("runQuery %s where %s == %r -> %d docs", collection, field, value, len(results))
        return results
