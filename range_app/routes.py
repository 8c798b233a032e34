from functools import wraps

from flask import current_app, flash, jsonify, redirect, render_template, request, url_for, abort

from range_core import login_required, log_action, current_user_label
from . import range_bp, timer, tracker
from .balance import range_balance_data
from .documents import StoreError
from .pairs import (
    InvalidExercise,
    ExerciseNotFound,
    RANGES,
    TENSIONS,
    MOVEMENT_TYPES,
    filter_pairs,
    split_by_completion,
)
from .persistence import store_for_session
from .regions import REGIONS, UnknownRegion, get_region, region_for_slug

LOAD_ERROR = "Failed to load exercises. Please try again."
SAVE_ERROR = "Failed to save exercises. Please try again."

VARIANT_FIELDS = ("name", "description", "function", "range", "youtubeLink", "youtubeTitle", "typeOfMovement")
STATUS_ACTIONS = {
    "toggle": tracker.toggle_exercise,
    "complete": tracker.complete_exercise,
    "reset": tracker.reset_exercise,
}

_SLUGS = ", ".join(f'"{data["slug"]}"' for data in REGIONS.values())


def _pair_id(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ExerciseNotFound(value) from None


def _variants_from_form(form) -> list:
    return [
        {field: form.get(f"v{i}_{field}", "") for field in VARIANT_FIELDS}
        for i in range(2)
    ]


def _apply_action(store, action: str, data, now: int) -> list:
    """Run one list operation named by a form/API action."""
    if action == "add":
        return tracker.add_exercise(store, data.get("exercises") or [], now)
    if action in STATUS_ACTIONS:
        return STATUS_ACTIONS[action](store, _pair_id(data.get("pair_id")), now)
    if action == "delete":
        return tracker.delete_exercise(store, _pair_id(data.get("pair_id")), now)
    if action == "progress_add":
        entry = {k: data.get(k) for k in ("exerciseIndex", "tension", "reps", "sets", "weight", "date")}
        return tracker.add_progress(store, _pair_id(data.get("pair_id")), entry, now)
    if action == "progress_delete":
        return tracker.delete_progress(store, _pair_id(data.get("pair_id")), data.get("progress_id") or "", now)
    raise InvalidExercise(f"Unknown action: {action!r}")


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _resting_countdowns(pairs: list, now: int) -> dict:
    return {p["id"]: timer.remaining_ms(p, now) for p in pairs if timer.is_resting(p)}


# ───────── Region pages ─────────

@range_bp.route(f"/<any({_SLUGS}):slug>", methods=["GET", "POST"])
@login_required
def region_page(slug):
    region = region_for_slug(slug)
    user = current_user_label()
    store = store_for_session(region["key"])
    now = timer.now_ms()

    function_filter = request.values.get("function", "all")
    range_filter = request.values.get("range", "all")

    if request.method == "POST":
        action = request.form.get("action", "")
        data = request.form.to_dict()
        if action == "add":
            data["exercises"] = _variants_from_form(request.form)
        try:
            _apply_action(store, action, data, now)
            log_action(user, f"exercise_{action}", {"region": region["key"], "pair_id": data.get("pair_id")})
        except InvalidExercise as e:
            flash(str(e), "error")
        except ExerciseNotFound:
            flash("That exercise no longer exists.", "error")
        except StoreError:
            current_app.logger.exception("Failed to save %s exercises", region["key"])
            log_action(user, "exercise_save_failed", {"region": region["key"], "action": action})
            flash(SAVE_ERROR, "error")
        return redirect(url_for("range.region_page", slug=slug, function=function_filter, range=range_filter))

    error = None
    pairs = []
    try:
        pairs = tracker.load_exercises(store, now)
    except StoreError:
        current_app.logger.exception("Failed to load %s exercises", region["key"])
        log_action(user, "exercise_load_failed", {"region": region["key"]})
        error = LOAD_ERROR

    to_do, resting = split_by_completion(filter_pairs(pairs, function_filter, range_filter))
    log_action(user, "region_view", {"region": region["key"]})
    return render_template(
        "region.html",
        region=region,
        error=error,
        to_do=to_do,
        resting=resting,
        countdowns=_resting_countdowns(pairs, now),
        short_range_data=range_balance_data(pairs, "short"),
        long_range_data=range_balance_data(pairs, "long"),
        function_filter=function_filter,
        range_filter=range_filter,
        ranges=RANGES,
        tensions=TENSIONS,
        movement_types=MOVEMENT_TYPES,
    )


# ───────── JSON API (anonymous callers use the local store) ─────────

def api_errors(view_func):
    @wraps(view_func)
    def wrapped_view(*args, **kwargs):
        user = current_user_label()
        try:
            return view_func(*args, **kwargs)
        except UnknownRegion:
            abort(404)
        except ExerciseNotFound:
            return jsonify({"ok": False, "error": "not_found"}), 404
        except InvalidExercise as e:
            return jsonify({"ok": False, "error": str(e)}), 400
        except StoreError:
            current_app.logger.exception("Exercise store failure on %s %s", request.method, request.path)
            log_action(user, "exercise_store_failed", {"method": request.method})
            message = LOAD_ERROR if request.method == "GET" else SAVE_ERROR
            return jsonify({"ok": False, "error": message}), 502
    return wrapped_view


def _payload(region: str, pairs: list, now: int) -> dict:
    return {
        "ok": True,
        "region": region,
        "exercises": pairs,
        "countdowns": _resting_countdowns(pairs, now),
        "balance": {
            "short": range_balance_data(pairs, "short"),
            "long": range_balance_data(pairs, "long"),
        },
    }


def _api_action(region: str, action: str, data: dict, status: int = 200):
    get_region(region)
    now = timer.now_ms()
    pairs = _apply_action(store_for_session(region), action, data, now)
    log_action(current_user_label(), f"api_exercise_{action}", {"region": region, "pair_id": data.get("pair_id")})
    return jsonify(_payload(region, pairs, now)), status


@range_bp.route("/api/regions/<region>/exercises", methods=["GET"])
@api_errors
def api_list(region):
    get_region(region)
    now = timer.now_ms()
    pairs = tracker.load_exercises(store_for_session(region), now)
    payload = _payload(region, pairs, now)
    payload["exercises"] = filter_pairs(pairs, request.args.get("function", "all"), request.args.get("range", "all"))
    return jsonify(payload)


@range_bp.route("/api/regions/<region>/exercises", methods=["POST"])
@api_errors
def api_add(region):
    data = _json_body()
    return _api_action(region, "add", {"exercises": data.get("exercises") or []}, 201)


@range_bp.route("/api/regions/<region>/exercises/<int:pair_id>", methods=["DELETE"])
@api_errors
def api_delete(region, pair_id):
    return _api_action(region, "delete", {"pair_id": pair_id})


@range_bp.route("/api/regions/<region>/exercises/<int:pair_id>/<any(toggle, complete, reset):action>", methods=["POST"])
@api_errors
def api_status(region, pair_id, action):
    return _api_action(region, action, {"pair_id": pair_id})


@range_bp.route("/api/regions/<region>/exercises/<int:pair_id>/progress", methods=["POST"])
@api_errors
def api_add_progress(region, pair_id):
    data = _json_body()
    return _api_action(region, "progress_add", {**data, "pair_id": pair_id}, 201)


@range_bp.route("/api/regions/<region>/exercises/<int:pair_id>/progress/<progress_id>", methods=["DELETE"])
@api_errors
def api_delete_progress(region, pair_id, progress_id):
    return _api_action(region, "progress_delete", {"pair_id": pair_id, "progress_id": progress_id})


@range_bp.route("/api/regions/<region>/tick", methods=["POST"])
@api_errors
def api_tick(region):
    get_region(region)
    now = timer.now_ms()
    pairs = tracker.load_exercises(store_for_session(region), now)
    return jsonify(_payload(region, pairs, now))
