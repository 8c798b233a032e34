#!/usr/bin/env python3
import os
from getpass import getpass

from range_app.documents import open_document_store
from range_app.users import InvalidUser, create_user
from range_core import DATA_DIR


def main():
    data_dir = os.environ.get("RANGE_DATA_DIR", DATA_DIR)
    config = {
        "DATA_DIR": data_dir,
        "DOCUMENT_STORE": os.environ.get("RANGE_DOCUMENT_STORE", "file"),
        "FIRESTORE_PROJECT": os.environ.get("FIRESTORE_PROJECT", ""),
        "FIRESTORE_TOKEN": os.environ.get("FIRESTORE_TOKEN", ""),
        "FIRESTORE_TIMEOUT": os.environ.get("FIRESTORE_TIMEOUT", "10"),
    }

    email = input("Email: ").strip()
    if not email:
        print("Email cannot be empty.")
        return

    password = getpass("Password: ")
    confirm = getpass("Confirm password: ")

    if password != confirm:
        print("Passwords do not match.")
        return

    try:
        user = create_user(data_dir, email, password, open_document_store(config))
    except InvalidUser as e:
        print(e)
        return

    print(f"User '{user['email']}' added with uid {user['uid']}.")


if __name__ == "__main__":
    main()
