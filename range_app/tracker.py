"""
Exercise list operations.

Each operation works on the region's whole list: it loads it from the
store, applies the change, writes the change through and hands back the new
list. Store failures propagate as StoreError; the web layer turns them into
the user-facing message.
"""
import logging

from .defaults import generate_initial_exercises, baseline_progress, iso_from_ms
from .pairs import (
    InvalidExercise,
    ExerciseNotFound,
    normalize_pair,
    normalize_progress,
    find_pair,
    replace_pair,
    next_pair_id,
)
from .timer import toggle_completion, mark_complete, clear_completion, expire_rests

logger = logging.getLogger(__name__)

MISSING_NAMES = "Please fill in all exercise names."


def sweep_rests(store, pairs: list, now: int) -> list:
    pairs, expired = expire_rests(pairs, now)
    for pair in expired:
        store.update_status(pair)
    if expired:
        logger.info("%s: rest over for %s", store.region, [p["id"] for p in expired])
    return pairs


def load_exercises(store, now: int) -> list:
    pairs = store.load()
    if not pairs:
        logger.info("%s: no exercises found, creating the default catalog", store.region)
        pairs = store.seed(generate_initial_exercises(store.region, now))
    return sweep_rests(store, pairs, now)


def add_exercise(store, variants: list, now: int) -> list:
    if not isinstance(variants, list) or len(variants) != 2:
        raise InvalidExercise(MISSING_NAMES)
    if any(not isinstance(v, dict) or not str(v.get("name") or "").strip() for v in variants):
        raise InvalidExercise(MISSING_NAMES)

    pairs = load_exercises(store, now)
    pair = normalize_pair({
        "id": next_pair_id(pairs, now),
        "exercises": variants,
        "completed": False,
        "progress": baseline_progress(now),
    })
    pair = store.add_pair(pair)
    return pairs + [pair]


def _set_status(store, pair_id: int, now: int, change) -> list:
    pairs = load_exercises(store, now)
    pair = change(find_pair(pairs, pair_id))
    store.update_status(pair)
    return replace_pair(pairs, pair)


def toggle_exercise(store, pair_id: int, now: int) -> list:
    return _set_status(store, pair_id, now, lambda p: toggle_completion(p, now))


def complete_exercise(store, pair_id: int, now: int) -> list:
    return _set_status(store, pair_id, now, lambda p: mark_complete(p, now))


def reset_exercise(store, pair_id: int, now: int) -> list:
    return _set_status(store, pair_id, now, clear_completion)


def delete_exercise(store, pair_id: int, now: int) -> list:
    pairs = load_exercises(store, now)
    find_pair(pairs, pair_id)
    store.delete_pair(pair_id)
    return [p for p in pairs if p["id"] != pair_id]


def add_progress(store, pair_id: int, entry: dict, now: int) -> list:
    pairs = load_exercises(store, now)
    pair = find_pair(pairs, pair_id)
    entry = normalize_progress({**entry, "id": ""})
    if not entry["date"]:
        entry["date"] = iso_from_ms(now)
    entry = store.add_progress(pair_id, entry)
    return replace_pair(pairs, {**pair, "progress": pair["progress"] + [entry]})


def delete_progress(store, pair_id: int, progress_id: str, now: int) -> list:
    pairs = load_exercises(store, now)
    pair = find_pair(pairs, pair_id)
    if not any(e["id"] == progress_id for e in pair["progress"]):
        raise ExerciseNotFound(progress_id)
    store.delete_progress(pair_id, progress_id)
    remaining = [e for e in pair["progress"] if e["id"] != progress_id]
    return replace_pair(pairs, {**pair, "progress": remaining})
