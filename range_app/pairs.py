"""
Exercise pair records.

A pair is a plain dict shaped exactly like what gets stored:

    {
        "id": 1,
        "exercises": [variant, variant],
        "completed": False,
        "progress": [entry, ...],
        "reappearInterval": 24,
        "completionTime": None,
    }

The remote document drops ``id`` and ``progress`` (document id and
subcollection carry them) and adds ``type``.
"""
import json
import math

RANGES = ("short", "long")
TENSIONS = ("low", "medium", "high")
MOVEMENT_TYPES = ("Isolation Exercise", "Compound Exercise")
REST_HOURS = {"short": 24, "long": 48}

DOCUMENT_FIELDS = ("exercises", "completed", "reappearInterval", "completionTime")


class InvalidExercise(ValueError):
    pass


class ExerciseNotFound(LookupError):
    pass


def reappear_interval_for(range_: str) -> int:
    try:
        return REST_HOURS[range_]
    except KeyError:
        raise InvalidExercise(f"Unknown range class: {range_!r}") from None


def _as_int(value, field):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidExercise(f"{field} must be a whole number") from None


def _as_float(value, field):
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidExercise(f"{field} must be a number") from None
    if not math.isfinite(number):
        raise InvalidExercise(f"{field} must be a number")
    return number


def _text(value) -> str:
    return "" if value is None else str(value).strip()


def normalize_variant(variant: dict) -> dict:
    range_ = _text(variant.get("range") or "short").lower()
    if range_ not in RANGES:
        raise InvalidExercise(f"Unknown range class: {range_!r}")
    name = _text(variant.get("name"))
    return {
        "name": name,
        "description": _text(variant.get("description")),
        "function": _text(variant.get("function")),
        "range": range_,
        "youtubeLink": _text(variant.get("youtubeLink")),
        "youtubeTitle": _text(variant.get("youtubeTitle") or name),
        "typeOfMovement": _text(variant.get("typeOfMovement") or "Compound Exercise"),
    }


def normalize_progress(entry: dict) -> dict:
    tension = _text(entry.get("tension") or "low").lower()
    if tension not in TENSIONS:
        raise InvalidExercise(f"Unknown tension level: {tension!r}")
    index = _as_int(entry.get("exerciseIndex", 0), "exerciseIndex")
    if index not in (0, 1):
        raise InvalidExercise("exerciseIndex must be 0 or 1")
    normalized = {
        "id": str(entry.get("id") or ""),
        "exerciseIndex": index,
        "date": entry.get("date") or "",
        "tension": tension,
        "reps": _as_int(entry.get("reps") or 0, "reps"),
        "sets": _as_int(entry.get("sets") or 0, "sets"),
        "weight": _as_float(entry.get("weight") or 0, "weight"),
    }
    if min(normalized["reps"], normalized["sets"], normalized["weight"]) < 0:
        raise InvalidExercise("reps, sets and weight cannot be negative")
    return normalized


def normalize_pair(pair: dict) -> dict:
    raw = pair.get("exercises") or []
    if not isinstance(raw, list) or not all(isinstance(v, dict) for v in raw):
        raise InvalidExercise("Exercise movements must be objects")
    variants = [normalize_variant(v) for v in raw]
    if len(variants) != 2:
        raise InvalidExercise("An exercise pair needs exactly two movements")

    completion_time = pair.get("completionTime")
    if completion_time is not None:
        completion_time = _as_int(completion_time, "completionTime")

    normalized = {
        "id": _as_int(pair.get("id"), "id"),
        "exercises": variants,
        "completed": bool(pair.get("completed")),
        "progress": [normalize_progress(p) for p in pair.get("progress") or []],
        "reappearInterval": None,
        "completionTime": completion_time,
    }
    # Always derived from the range class, whatever was stored.
    normalized["reappearInterval"] = reappear_interval_for(range_class(normalized))
    return normalized


def range_class(pair: dict) -> str:
    return pair["exercises"][0]["range"]


def dumps_pairs(pairs: list) -> str:
    return json.dumps(pairs)


def loads_pairs(text: str) -> list:
    data = json.loads(text)
    if not isinstance(data, list) or not all(isinstance(p, dict) for p in data):
        raise InvalidExercise("Stored exercises must be a list of objects")
    return [normalize_pair(p) for p in data]


def pair_to_document(pair: dict, region: str) -> dict:
    doc = {field: pair[field] for field in DOCUMENT_FIELDS}
    doc["type"] = region
    return doc


def progress_to_document(entry: dict) -> dict:
    return {k: v for k, v in entry.items() if k != "id"}


def pair_from_document(doc_id, data: dict, progress: list) -> dict:
    return normalize_pair({
        "id": doc_id,
        "exercises": data.get("exercises"),
        "completed": data.get("completed"),
        "progress": progress,
        "reappearInterval": data.get("reappearInterval"),
        "completionTime": data.get("completionTime"),
    })


def find_pair(pairs: list, pair_id: int) -> dict:
    for pair in pairs:
        if pair["id"] == pair_id:
            return pair
    raise ExerciseNotFound(pair_id)


def replace_pair(pairs: list, updated: dict) -> list:
    return [updated if p["id"] == updated["id"] else p for p in pairs]


def next_pair_id(pairs: list, now_ms: int) -> int:
    highest = max((p["id"] for p in pairs), default=0)
    return max(now_ms, highest + 1)


def filter_pairs(pairs: list, function: str = "all", range_: str = "all") -> list:
    def matches(pair):
        function_match = function == "all" or any(v["function"] == function for v in pair["exercises"])
        range_match = range_ == "all" or any(v["range"] == range_ for v in pair["exercises"])
        return function_match and range_match

    return [p for p in pairs if matches(p)]


def split_by_completion(pairs: list):
    """Return (to_do, resting) keeping list order."""
    to_do = [p for p in pairs if not p["completed"]]
    resting = [p for p in pairs if p["completed"]]
    return to_do, resting
