import os
import json


def ensure_data_dirs(data_dir: str) -> str:
    os.makedirs(data_dir, exist_ok=True)
    os.makedirs(os.path.join(data_dir, "local"), exist_ok=True)

    documents_path = os.path.join(data_dir, "documents.json")
    users_path = os.path.join(data_dir, "users.json")

    if not os.path.exists(documents_path):
        with open(documents_path, "w") as f:
            json.dump({}, f, indent=2)

    if not os.path.exists(users_path):
        with open(users_path, "w") as f:
            json.dump({}, f, indent=2)

    return data_dir


def load_json(path: str, fallback):
    try:
        with open(path, "r") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return fallback


def save_json(path: str, data):
    tmp_path = path + ".tmp"
    with open(tmp_path, "w") as f:
        json.dump(data, f, indent=2)
    os.replace(tmp_path, path)
