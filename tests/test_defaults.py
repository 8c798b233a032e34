import pytest

from range_app.defaults import PLACEHOLDER_VIDEO, generate_initial_exercises
from range_app.regions import REGIONS, UnknownRegion, get_region, region_for_slug
from tests.conftest import T0


@pytest.mark.parametrize("region", sorted(REGIONS))
def test_two_pairs_per_function(region):
    pairs = generate_initial_exercises(region, T0)
    functions = REGIONS[region]["functions"]

    assert len(pairs) == 2 * len(functions)
    base = REGIONS[region]["id_base"]
    assert [p["id"] for p in pairs] == list(range(base + 1, base + len(pairs) + 1))
    assert [p["reappearInterval"] for p in pairs[:2]] == [24, 48]


def test_shoulder_catalog_contents():
    first, second = generate_initial_exercises("shoulder", T0)[:2]

    assert [v["name"] for v in first["exercises"]] == [
        "Short Range Shoulder Flexion Isolation Exercise",
        "Short Range Shoulder Flexion Compound Exercise",
    ]
    assert second["exercises"][0]["range"] == "long"
    assert second["exercises"][0]["description"] == (
        "Perform an isolated shoulder flexion movement with full range of motion."
    )
    assert first["exercises"][1]["typeOfMovement"] == "Compound Exercise"
    assert first["exercises"][0]["youtubeLink"] == PLACEHOLDER_VIDEO
    assert first["completed"] is False
    assert first["completionTime"] is None


def test_baseline_progress_per_movement():
    pair = generate_initial_exercises("knee", T0)[0]
    assert [e["exerciseIndex"] for e in pair["progress"]] == [0, 1]
    assert all(e["tension"] == "low" and e["reps"] == 0 and e["weight"] == 0 for e in pair["progress"])
    assert pair["progress"][0]["date"].startswith("2023-11-14T22:13:20")


def test_region_lookup():
    assert region_for_slug("wrist-elbow-balance")["key"] == "wristElbow"
    assert get_region("ankleToes")["local_key"] == "ankleToesExercises"
    with pytest.raises(UnknownRegion):
        get_region("neck")
    with pytest.raises(UnknownRegion):
        region_for_slug("neck-balance")
