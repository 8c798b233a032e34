import os
import uuid
import logging
from datetime import datetime, timezone

from werkzeug.security import generate_password_hash, check_password_hash

from .documents import StoreError, document_path
from .storage import ensure_data_dirs, load_json, save_json

logger = logging.getLogger(__name__)


class InvalidUser(ValueError):
    pass


class UserExists(InvalidUser):
    pass


def users_path(data_dir: str) -> str:
    return os.path.join(data_dir, "users.json")


def load_users(data_dir: str) -> dict:
    """Users keyed by uid: {uid: {email, password_hash, createdAt}}"""
    return load_json(users_path(data_dir), {})


def save_users(data_dir: str, users: dict):
    save_json(users_path(data_dir), users)


def find_by_email(users: dict, email: str):
    email = (email or "").strip().lower()
    for uid, user in users.items():
        if user.get("email") == email:
            return {"uid": uid, **user}
    return None


def create_user_document(documents, uid: str, email: str, created_at: str):
    """Mirror a new account into users/{uid}. Never fails the signup."""
    try:
        documents.set(document_path("users", uid), {"email": email, "createdAt": created_at}, merge=True)
        logger.info("User document created for %s", email)
    except StoreError:
        logger.exception("Error creating user document for %s", email)


def create_user(data_dir: str, email: str, password: str, documents=None) -> dict:
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise InvalidUser("Please enter a valid email address.")
    if not password:
        raise InvalidUser("Password cannot be empty.")

    ensure_data_dirs(data_dir)
    users = load_users(data_dir)
    if find_by_email(users, email):
        raise UserExists(f"An account for {email} already exists.")

    uid = uuid.uuid4().hex
    created_at = datetime.now(timezone.utc).isoformat()
    users[uid] = {
        "email": email,
        "password_hash": generate_password_hash(password),
        "createdAt": created_at,
    }
    save_users(data_dir, users)

    if documents is not None:
        create_user_document(documents, uid, email, created_at)
    return {"uid": uid, "email": email, "createdAt": created_at}


def authenticate(data_dir: str, email: str, password: str):
    user = find_by_email(load_users(data_dir), email)
    if user and check_password_hash(user["password_hash"], password or ""):
        return user
    return None
