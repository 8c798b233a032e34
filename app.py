#!/usr/bin/env python3
import os

from flask import Flask, render_template, request, redirect, url_for, session, abort

from range_app import range_bp
from range_app.content import WELCOME, NAV_GROUPS, SECTIONS, get_page
from range_app.documents import open_document_store
from range_app.regions import all_regions
from range_app.timer import format_countdown
from range_app.users import InvalidUser, create_user, authenticate
from range_core import DATA_DIR, LOG_FILE, login_required, log_action

app = Flask(__name__)
app.register_blueprint(range_bp)


# ───────────── Config ─────────────
app.config["SECRET_KEY"] = os.environ.get("FLASK_SECRET_KEY", "change-me-to-something-random")
app.config["DATA_DIR"] = os.environ.get("RANGE_DATA_DIR", DATA_DIR)
app.config["ACTION_LOG_FILE"] = os.environ.get("RANGE_ACTION_LOG", LOG_FILE)

# "file" keeps documents in DATA_DIR/documents.json, "firestore" talks to a real project
app.config["DOCUMENT_STORE"] = os.environ.get("RANGE_DOCUMENT_STORE", "file")
app.config["FIRESTORE_PROJECT"] = os.environ.get("FIRESTORE_PROJECT", "")
app.config["FIRESTORE_TOKEN"] = os.environ.get("FIRESTORE_TOKEN", "")
app.config["FIRESTORE_TIMEOUT"] = float(os.environ.get("FIRESTORE_TIMEOUT", "10"))

app.jinja_env.filters["countdown"] = format_countdown


@app.context_processor
def inject_sidebar():
    """Navigation groups for the sidebar (only rendered when signed in)."""
    groups = [
        {
            "title": title,
            "links": [
                {"label": SECTIONS[section][page]["title"], "url": url_for("content_page", section=section, page=page)}
                for page in pages
            ],
        }
        for title, section, pages in NAV_GROUPS
    ]
    regions = [
        {"label": region["label"], "url": url_for("range.region_page", slug=region["slug"])}
        for region in all_regions()
    ]
    return {
        "nav_regions": regions,
        "nav_groups": groups,
        "signed_in": bool(session.get("logged_in")),
        "user_email": session.get("email"),
    }


def _start_session(user):
    client_id = session.get("client_id")
    session.clear()
    if client_id:
        session["client_id"] = client_id
    session["logged_in"] = True
    session["uid"] = user["uid"]
    session["email"] = user["email"]


def _safe_next(default):
    target = request.args.get("next") or ""
    # only same-site paths
    if target.startswith("/") and target[1:2] not in ("/", "\\"):
        return target
    return default


# ───────────── Auth ─────────────
@app.route("/signin", methods=["GET", "POST"])
def signin():
    if session.get("logged_in"):
        return redirect(url_for("welcome"))

    error = None

    if request.method == "POST":
        email = request.form.get("email", "").strip()
        password = request.form.get("password", "")

        user = authenticate(app.config["DATA_DIR"], email, password)

        if user:
            _start_session(user)
            log_action(user["email"], "signin")
            return redirect(_safe_next(url_for("welcome")))
        else:
            error = "Invalid email or password"
            log_action(email or "unknown", "signin_failed")

    return render_template("signin.html", error=error)


@app.route("/signup", methods=["GET", "POST"])
def signup():
    if session.get("logged_in"):
        return redirect(url_for("welcome"))

    error = None

    if request.method == "POST":
        email = request.form.get("email", "")
        password = request.form.get("password", "")
        confirm = request.form.get("confirm", "")

        if password != confirm:
            error = "Passwords do not match."
        else:
            try:
                user = create_user(app.config["DATA_DIR"], email, password, open_document_store(app.config))
            except InvalidUser as e:
                error = str(e)
            else:
                _start_session(user)
                log_action(user["email"], "signup")
                return redirect(url_for("welcome"))

        log_action(email or "unknown", "signup_failed", {"error": error})

    return render_template("signup.html", error=error)


@app.route("/signout")
def signout():
    log_action(session.get("email"), "signout")
    session.clear()
    return redirect(url_for("signin"))


# ───────────── Pages ─────────────
@app.route("/")
@login_required
def home():
    return redirect(url_for("welcome"))


@app.route("/welcome")
@login_required
def welcome():
    log_action(session.get("email"), "view_welcome")
    return render_template("content.html", page=WELCOME, regions=all_regions())


@app.route("/<any(definitions, theory):section>/<page>")
@login_required
def content_page(section, page):
    content = get_page(section, page)
    if content is None:
        abort(404)
    log_action(session.get("email"), "view_content", {"section": section, "page": page})
    return render_template("content.html", page=content, regions=None)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000, debug=True)
