from datetime import datetime, timezone

from .pairs import reappear_interval_for
from .regions import get_region

PLACEHOLDER_VIDEO = "https://www.youtube.com/watch?v=example"

RANGE_WORDING = {
    "short": ("Short Range", "limited range of motion"),
    "long": ("Long Range", "full range of motion"),
}


def iso_from_ms(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).isoformat(timespec="milliseconds")


def baseline_progress(now: int) -> list:
    """One zeroed low-tension entry per movement of a new pair."""
    return [
        {
            "id": "",
            "exerciseIndex": index,
            "date": iso_from_ms(now),
            "tension": "low",
            "reps": 0,
            "sets": 0,
            "weight": 0.0,
        }
        for index in range(2)
    ]


def _variant(func: str, range_: str, movement: str) -> dict:
    prefix, extent = RANGE_WORDING[range_]
    name = f"{prefix} {func} {movement} Exercise"
    if movement == "Isolation":
        description = f"Perform an isolated {func.lower()} movement with {extent}."
    else:
        description = f"Perform a compound movement focusing on {func.lower()} with {extent}."
    return {
        "name": name,
        "description": description,
        "function": func,
        "range": range_,
        "youtubeLink": PLACEHOLDER_VIDEO,
        "youtubeTitle": name,
        "typeOfMovement": f"{movement} Exercise",
    }


def generate_initial_exercises(region: str, now: int) -> list:
    info = get_region(region)
    pairs = []
    next_id = info["id_base"] + 1
    for func in info["functions"]:
        for range_ in ("short", "long"):
            pairs.append({
                "id": next_id,
                "exercises": [
                    _variant(func, range_, "Isolation"),
                    _variant(func, range_, "Compound"),
                ],
                "completed": False,
                "progress": baseline_progress(now),
                "reappearInterval": reappear_interval_for(range_),
                "completionTime": None,
            })
            next_id += 1
    return pairs
