import os
import re
import uuid

from flask import session

from .storage import load_json, save_json

_CLIENT_ID = re.compile(r"^[0-9a-f]{32}$")


def client_id() -> str:
    """Anonymous id for this browser, minted on first use."""
    cid = session.get("client_id")
    if not cid or not _CLIENT_ID.match(cid):
        cid = uuid.uuid4().hex
        session["client_id"] = cid
    return cid


class LocalStorage:
    """
    Per-browser string key/value store, the server-side stand-in for
    window.localStorage. One JSON file per client id.
    """

    def __init__(self, data_dir: str, cid: str):
        if not _CLIENT_ID.match(cid):
            raise ValueError(f"bad client id: {cid!r}")
        self.path = os.path.join(data_dir, "local", f"{cid}.json")

    def _items(self) -> dict:
        return load_json(self.path, {})

    def get_item(self, key: str):
        return self._items().get(key)

    def set_item(self, key: str, value: str):
        items = self._items()
        items[key] = value
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        save_json(self.path, items)
