import os
import json
from datetime import datetime
from functools import wraps

from flask import current_app, request, redirect, session, url_for

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
LOG_FILE = os.path.join(BASE_DIR, "logs.jsonl")
DATA_DIR = os.path.join(BASE_DIR, "data")


def log_action(user, action, details=None):
    """Append a single log entry to the action log."""
    entry = {
        "timestamp": datetime.now().strftime("%d/%m/%Y %H:%M"),
        "user": user or "anonymous",
        "action": action,
        "ip": request.remote_addr,
        "path": request.path,
        "details": details or {},
        "user_agent": request.headers.get("User-Agent", ""),
    }

    try:
        with open(current_app.config.get("ACTION_LOG_FILE", LOG_FILE), "a") as f:
            f.write(json.dumps(entry) + "\n")
    except OSError:
        # Don't break the app if logging fails
        pass


def current_uid():
    if not session.get("logged_in"):
        return None
    return session.get("uid")


def current_user_label():
    return session.get("email") or session.get("client_id")


def login_required(view_func):
    @wraps(view_func)
    def wrapped_view(*args, **kwargs):
        if not session.get("logged_in"):
            return redirect(url_for("signin", next=request.path))
        return view_func(*args, **kwargs)
    return wrapped_view
