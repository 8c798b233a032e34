"""
Where a region's exercise list lives.

Signed-in users get the remote document store, scoped under their uid.
Anonymous visitors get the per-browser local store. A session only ever
talks to one of the two; nothing is copied between them.
"""
import uuid

from flask import current_app

from range_core import current_uid
from .documents import StoreError, open_document_store, collection_path
from .local_store import LocalStorage, client_id
from .storage import ensure_data_dirs
from .pairs import (
    dumps_pairs,
    loads_pairs,
    pair_to_document,
    pair_from_document,
    progress_to_document,
    find_pair,
)
from .regions import get_region


def _status_fields(pair: dict) -> dict:
    return {"completed": pair["completed"], "completionTime": pair["completionTime"]}


class RemoteExerciseStore:
    def __init__(self, documents, uid: str, region: str):
        self.documents = documents
        self.uid = uid
        self.region = region
        self.exercises = collection_path("users", uid, "exercises")

    def _pair_path(self, pair_id) -> str:
        return f"{self.exercises}/{pair_id}"

    def _progress_path(self, pair_id) -> str:
        return f"{self.exercises}/{pair_id}/progress"

    def _load_progress(self, pair_id) -> list:
        entries = [
            {"id": progress_id, **data}
            for progress_id, data in self.documents.list(self._progress_path(pair_id))
        ]
        entries.sort(key=lambda e: e.get("date") or "")
        return entries

    def load(self) -> list:
        docs = self.documents.list(self.exercises, where=("type", self.region))
        try:
            pairs = [
                pair_from_document(doc_id, data, self._load_progress(doc_id))
                for doc_id, data in docs
            ]
        except ValueError as e:
            raise StoreError(f"unreadable {self.exercises} ({self.region}): {e}") from e
        pairs.sort(key=lambda p: p["id"])
        return pairs

    def seed(self, pairs: list) -> list:
        return [self.add_pair(pair) for pair in pairs]

    def add_pair(self, pair: dict) -> dict:
        self.documents.set(self._pair_path(pair["id"]), pair_to_document(pair, self.region))
        progress = [self.add_progress(pair["id"], entry) for entry in pair["progress"]]
        return {**pair, "progress": progress}

    def update_status(self, pair: dict):
        self.documents.set(self._pair_path(pair["id"]), _status_fields(pair), merge=True)

    def delete_pair(self, pair_id):
        for progress_id, _ in self.documents.list(self._progress_path(pair_id)):
            self.documents.delete(f"{self._progress_path(pair_id)}/{progress_id}")
        self.documents.delete(self._pair_path(pair_id))

    def add_progress(self, pair_id, entry: dict) -> dict:
        progress_id = self.documents.add(self._progress_path(pair_id), progress_to_document(entry))
        return {**entry, "id": progress_id}

    def delete_progress(self, pair_id, progress_id: str):
        self.documents.delete(f"{self._progress_path(pair_id)}/{progress_id}")


class LocalExerciseStore:
    """The whole region list as one JSON string under the region's key."""

    def __init__(self, storage: LocalStorage, region: str):
        self.storage = storage
        self.region = region
        self.key = get_region(region)["local_key"]

    def load(self) -> list:
        text = self.storage.get_item(self.key)
        if not text:
            return []
        try:
            return loads_pairs(text)
        except ValueError as e:
            raise StoreError(f"unreadable {self.key}: {e}") from e

    def _save(self, pairs: list):
        try:
            self.storage.set_item(self.key, dumps_pairs(pairs))
        except OSError as e:
            raise StoreError(f"cannot save {self.key}: {e}") from e

    @staticmethod
    def _with_progress_ids(pair: dict) -> dict:
        progress = [{**e, "id": e.get("id") or uuid.uuid4().hex} for e in pair["progress"]]
        return {**pair, "progress": progress}

    def seed(self, pairs: list) -> list:
        pairs = [self._with_progress_ids(p) for p in pairs]
        self._save(pairs)
        return pairs

    def add_pair(self, pair: dict) -> dict:
        pair = self._with_progress_ids(pair)
        self._save(self.load() + [pair])
        return pair

    def update_status(self, pair: dict):
        pairs = [
            {**p, **_status_fields(pair)} if p["id"] == pair["id"] else p
            for p in self.load()
        ]
        self._save(pairs)

    def delete_pair(self, pair_id):
        self._save([p for p in self.load() if p["id"] != pair_id])

    def add_progress(self, pair_id, entry: dict) -> dict:
        entry = {**entry, "id": entry.get("id") or uuid.uuid4().hex}
        pairs = self.load()
        pair = find_pair(pairs, pair_id)
        pair["progress"].append(entry)
        self._save(pairs)
        return entry

    def delete_progress(self, pair_id, progress_id: str):
        pairs = self.load()
        pair = find_pair(pairs, pair_id)
        pair["progress"] = [e for e in pair["progress"] if e["id"] != progress_id]
        self._save(pairs)


def store_for_session(region: str):
    get_region(region)
    ensure_data_dirs(current_app.config["DATA_DIR"])
    uid = current_uid()
    if uid:
        return RemoteExerciseStore(open_document_store(current_app.config), uid, region)
    storage = LocalStorage(current_app.config["DATA_DIR"], client_id())
    return LocalExerciseStore(storage, region)
