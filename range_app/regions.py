class UnknownRegion(LookupError):
    pass


# Default pairs of all regions share one collection per user, so their ids
# start from a per-region base.
REGIONS = {
    "shoulder": {
        "label": "Shoulder Balance",
        "body_part": "Shoulder",
        "slug": "shoulder-balance",
        "id_base": 0,
        "local_key": "shoulderExercises",
        "functions": [
            "Shoulder Flexion",
            "Shoulder Extension",
            "Shoulder Abduction",
            "Shoulder Adduction",
            "Internal Rotation",
            "External Rotation",
            "Horizontal Abduction",
            "Horizontal Adduction",
        ],
    },
    "hip": {
        "label": "Hip Balance",
        "body_part": "Hip",
        "slug": "hip-balance",
        "id_base": 100,
        "local_key": "hipExercises",
        "functions": [
            "Hip Flexion",
            "Hip Extension",
            "Hip Abduction",
            "Hip Adduction",
            "Hip Internal Rotation",
            "Hip External Rotation",
        ],
    },
    "knee": {
        "label": "Knee Balance",
        "body_part": "Knee",
        "slug": "knee-balance",
        "id_base": 200,
        "local_key": "kneeExercises",
        "functions": [
            "Knee Flexion",
            "Knee Extension",
            "Tibial Internal Rotation",
            "Tibial External Rotation",
        ],
    },
    "wristElbow": {
        "label": "Wrist & Elbow Balance",
        "body_part": "Wrist & Elbow",
        "slug": "wrist-elbow-balance",
        "id_base": 300,
        "local_key": "wristElbowExercises",
        "functions": [
            "Wrist Flexion",
            "Wrist Extension",
            "Radial Deviation",
            "Ulnar Deviation",
            "Elbow Flexion",
            "Elbow Extension",
            "Forearm Pronation",
            "Forearm Supination",
        ],
    },
    "ankleToes": {
        "label": "Ankle & Toes Balance",
        "body_part": "Ankle & Toes",
        "slug": "ankle-toes-balance",
        "id_base": 400,
        "local_key": "ankleToesExercises",
        "functions": [
            "Ankle Dorsiflexion",
            "Ankle Plantarflexion",
            "Ankle Inversion",
            "Ankle Eversion",
            "Toe Flexion",
            "Toe Extension",
        ],
    },
}

_BY_SLUG = {data["slug"]: key for key, data in REGIONS.items()}


def get_region(key: str) -> dict:
    try:
        return {"key": key, **REGIONS[key]}
    except KeyError:
        raise UnknownRegion(key) from None


def region_for_slug(slug: str) -> dict:
    if slug not in _BY_SLUG:
        raise UnknownRegion(slug)
    return get_region(_BY_SLUG[slug])


def all_regions():
    return [get_region(key) for key in REGIONS]
