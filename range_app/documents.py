"""
Document store used for signed-in users.

Paths follow the collection/document convention of hosted document
databases: ``users/{uid}`` is a document, ``users/{uid}/exercises`` a
collection, ``users/{uid}/exercises/{id}/progress/{pid}`` a nested document.
"""
import os
import json
import threading
import uuid

from .storage import save_json

FILE_LOCK = threading.Lock()


class StoreError(Exception):
    pass


class DocumentNotFound(StoreError):
    pass


def _segments(path: str):
    parts = [p for p in path.strip("/").split("/") if p]
    if not parts:
        raise ValueError("empty document path")
    return parts


def document_path(*parts) -> str:
    path = "/".join(str(p) for p in parts)
    if len(_segments(path)) % 2:
        raise ValueError(f"not a document path: {path}")
    return path


def collection_path(*parts) -> str:
    path = "/".join(str(p) for p in parts)
    if not len(_segments(path)) % 2:
        raise ValueError(f"not a collection path: {path}")
    return path


class JsonDocumentStore:
    """All documents in a single JSON file keyed by their full path."""

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"cannot read {self.path}: {e}") from e

    def _write(self, docs: dict):
        try:
            os.makedirs(os.path.dirname(self.path), exist_ok=True)
            save_json(self.path, docs)
        except OSError as e:
            raise StoreError(f"cannot write {self.path}: {e}") from e

    def get(self, path: str):
        path = document_path(path)
        with FILE_LOCK:
            return self._read().get(path)

    def set(self, path: str, data: dict, merge: bool = False):
        path = document_path(path)
        with FILE_LOCK:
            docs = self._read()
            if merge and path in docs:
                docs[path] = {**docs[path], **data}
            else:
                docs[path] = dict(data)
            self._write(docs)

    def delete(self, path: str):
        path = document_path(path)
        with FILE_LOCK:
            docs = self._read()
            if docs.pop(path, None) is not None:
                self._write(docs)

    def add(self, collection: str, data: dict) -> str:
        collection = collection_path(collection)
        doc_id = uuid.uuid4().hex[:20]
        with FILE_LOCK:
            docs = self._read()
            docs[f"{collection}/{doc_id}"] = dict(data)
            self._write(docs)
        return doc_id

    def list(self, collection: str, where=None):
        collection = collection_path(collection)
        prefix = collection + "/"
        with FILE_LOCK:
            docs = self._read()

        results = []
        for path, data in docs.items():
            if not path.startswith(prefix):
                continue
            doc_id = path[len(prefix):]
            if "/" in doc_id:
                continue
            if where is not None:
                field, value = where
                if data.get(field) != value:
                    continue
            results.append((doc_id, data))
        return results


def open_document_store(config):
    backend = (config.get("DOCUMENT_STORE") or "file").lower()
    if backend == "firestore":
        from .firestore import FirestoreDocumentStore

        return FirestoreDocumentStore(
            project=config["FIRESTORE_PROJECT"],
            token=config.get("FIRESTORE_TOKEN"),
            timeout=float(config.get("FIRESTORE_TIMEOUT", 10)),
        )
    if backend != "file":
        raise ValueError(f"Unknown document store backend: {backend}")
    return JsonDocumentStore(os.path.join(config["DATA_DIR"], "documents.json"))
