import uuid

import pytest

from app import app as flask_app
from range_app.documents import JsonDocumentStore
from range_app.local_store import LocalStorage
from range_app.persistence import LocalExerciseStore, RemoteExerciseStore
from range_app.users import create_user

T0 = 1_700_000_000_000  # 2023-11-14T22:13:20Z
HOUR = 3600 * 1000


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return str(path)


@pytest.fixture
def app(data_dir, tmp_path):
    flask_app.config.update(
        TESTING=True,
        SECRET_KEY="test-secret",
        DATA_DIR=data_dir,
        ACTION_LOG_FILE=str(tmp_path / "logs.jsonl"),
        DOCUMENT_STORE="file",
    )
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


class Clock:
    def __init__(self, now):
        self.now = now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock(monkeypatch):
    c = Clock(T0)
    monkeypatch.setattr("range_app.timer.now_ms", lambda: c.now)
    return c


@pytest.fixture
def documents(data_dir):
    return JsonDocumentStore(f"{data_dir}/documents.json")


@pytest.fixture
def remote_store(documents):
    return RemoteExerciseStore(documents, "user-1", "shoulder")


@pytest.fixture
def local_store(data_dir):
    return LocalExerciseStore(LocalStorage(data_dir, uuid.uuid4().hex), "shoulder")


@pytest.fixture(params=["local", "remote"])
def store(request, local_store, remote_store):
    return local_store if request.param == "local" else remote_store


@pytest.fixture
def user(app, data_dir, documents):
    return create_user(data_dir, "ada@example.com", "s3cret", documents)


@pytest.fixture
def signed_in(client, user):
    resp = client.post("/signin", data={"email": "ada@example.com", "password": "s3cret"})
    assert resp.status_code == 302
    return client
