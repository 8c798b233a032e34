import pytest

from range_app import tracker
from range_app.documents import JsonDocumentStore
from range_app.pairs import InvalidExercise, ExerciseNotFound
from range_app.persistence import LocalExerciseStore, RemoteExerciseStore
from range_app.local_store import LocalStorage
from tests.conftest import T0, HOUR


class CountingStore:
    def __init__(self, inner):
        self.inner = inner
        self.seeded = 0

    def __getattr__(self, name):
        return getattr(self.inner, name)

    def seed(self, pairs):
        self.seeded += 1
        return self.inner.seed(pairs)


def _variants(first_range="short"):
    return [
        {"name": "Wall slide", "function": "Shoulder Flexion", "range": first_range},
        {"name": "Cable raise", "function": "Shoulder Flexion", "range": first_range},
    ]


def _without_progress_ids(pairs):
    return [
        {**p, "progress": [{k: v for k, v in e.items() if k != "id"} for e in p["progress"]]}
        for p in pairs
    ]


def test_defaults_created_and_persisted_once(store):
    counting = CountingStore(store)

    first = tracker.load_exercises(counting, T0)
    second = tracker.load_exercises(counting, T0 + HOUR)

    assert counting.seeded == 1
    assert len(first) == 16
    assert first == second
    assert all(e["id"] for p in first for e in p["progress"])


def test_complete_and_expire_are_persisted(store):
    tracker.load_exercises(store, T0)
    tracker.complete_exercise(store, 1, T0)

    stored = {p["id"]: p for p in store.load()}
    assert stored[1]["completed"] is True
    assert stored[1]["completionTime"] == T0

    still_resting = tracker.load_exercises(store, T0 + 24 * HOUR - 1)
    assert still_resting[0]["completed"] is True

    back = tracker.load_exercises(store, T0 + 24 * HOUR)
    assert back[0]["completed"] is False
    assert store.load()[0]["completionTime"] is None


def test_toggle_twice_restores_stored_state(store):
    before = tracker.load_exercises(store, T0)
    tracker.toggle_exercise(store, 2, T0 + 10)
    after = tracker.toggle_exercise(store, 2, T0 + 20)

    assert after == before
    assert store.load() == before


def test_reset_cancels_rest(store):
    tracker.load_exercises(store, T0)
    tracker.complete_exercise(store, 3, T0)
    pairs = tracker.reset_exercise(store, 3, T0 + HOUR)
    assert pairs[2]["completed"] is False
    assert store.load()[2]["completionTime"] is None


def test_add_exercise_requires_both_names(store):
    with pytest.raises(InvalidExercise, match="Please fill in all exercise names."):
        tracker.add_exercise(store, [{"name": "Only one"}, {"name": "  "}], T0)


def test_add_exercise_interval_from_first_range(store):
    pairs = tracker.add_exercise(store, _variants("long"), T0 + HOUR)

    added = pairs[-1]
    assert added["id"] == T0 + HOUR
    assert added["reappearInterval"] == 48
    assert len(added["progress"]) == 2
    assert store.load()[-1] == added


def test_delete_exercise(store):
    tracker.load_exercises(store, T0)
    pairs = tracker.delete_exercise(store, 5, T0)

    assert 5 not in [p["id"] for p in pairs]
    assert store.load() == pairs
    with pytest.raises(ExerciseNotFound):
        tracker.delete_exercise(store, 5, T0)


def test_delete_progress_removes_exactly_one(store):
    tracker.load_exercises(store, T0)
    for reps in (5, 8, 10):
        tracker.add_progress(store, 1, {"exerciseIndex": 0, "tension": "medium", "reps": reps}, T0 + reps)

    before = store.load()[0]["progress"]
    other = store.load()[1]["progress"]
    assert [e["reps"] for e in before] == [0, 0, 5, 8, 10]
    target = before[3]

    pairs = tracker.delete_progress(store, 1, target["id"], T0 + HOUR)
    expected = [e for e in before if e["id"] != target["id"]]

    assert pairs[0]["progress"] == expected
    assert store.load()[0]["progress"] == expected
    assert store.load()[1]["progress"] == other


def test_delete_unknown_progress(store):
    tracker.load_exercises(store, T0)
    with pytest.raises(ExerciseNotFound):
        tracker.delete_progress(store, 1, "nope", T0)


def test_local_and_remote_hold_the_same_list(data_dir):
    import uuid

    local = LocalExerciseStore(LocalStorage(data_dir, uuid.uuid4().hex), "hip")
    remote = RemoteExerciseStore(JsonDocumentStore(f"{data_dir}/documents.json"), "u-9", "hip")

    for s in (local, remote):
        tracker.load_exercises(s, T0)
        tracker.complete_exercise(s, 102, T0 + HOUR)
        tracker.add_progress(s, 104, {"exerciseIndex": 1, "tension": "high", "reps": 6, "sets": 3, "weight": 12.5}, T0 + 2 * HOUR)
        tracker.add_exercise(s, _variants(), T0 + 3 * HOUR)
        tracker.delete_exercise(s, 107, T0 + 4 * HOUR)

    assert _without_progress_ids(local.load()) == _without_progress_ids(remote.load())


def test_remote_layout(documents, remote_store):
    tracker.load_exercises(remote_store, T0)

    doc = documents.get("users/user-1/exercises/1")
    assert doc["type"] == "shoulder"
    assert doc["reappearInterval"] == 24
    assert set(doc) == {"exercises", "completed", "reappearInterval", "completionTime", "type"}

    progress = documents.list("users/user-1/exercises/1/progress")
    assert len(progress) == 2
    assert set(progress[0][1]) == {"exerciseIndex", "date", "tension", "reps", "sets", "weight"}


def test_remote_regions_are_separate(documents):
    shoulder = RemoteExerciseStore(documents, "u", "shoulder")
    knee = RemoteExerciseStore(documents, "u", "knee")

    tracker.load_exercises(shoulder, T0)
    assert knee.load() == []
