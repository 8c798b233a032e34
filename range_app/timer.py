"""
Rest window bookkeeping.

Nothing here keeps live timers: whether a pair is still resting is always
worked out from its stored ``completionTime``, so a sweep after a restart
(or after the browser was closed for a day) gives the same answer as one
that ran every second.
"""
import time

HOUR_MS = 3600 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def rest_duration_ms(pair: dict) -> int:
    return pair["reappearInterval"] * HOUR_MS


def is_resting(pair: dict) -> bool:
    return bool(pair["completed"]) and pair.get("completionTime") is not None


def reappear_at(pair: dict):
    if not is_resting(pair):
        return None
    return pair["completionTime"] + rest_duration_ms(pair)


def remaining_ms(pair: dict, now: int):
    due = reappear_at(pair)
    if due is None:
        return None
    return max(0, due - now)


def rest_is_over(pair: dict, now: int) -> bool:
    return is_resting(pair) and now - pair["completionTime"] >= rest_duration_ms(pair)


def mark_complete(pair: dict, now: int) -> dict:
    return {**pair, "completed": True, "completionTime": now}


def clear_completion(pair: dict) -> dict:
    return {**pair, "completed": False, "completionTime": None}


def toggle_completion(pair: dict, now: int) -> dict:
    if pair["completed"]:
        return clear_completion(pair)
    return mark_complete(pair, now)


def expire_rests(pairs: list, now: int):
    """
    Reset every pair whose rest window has run out.
    Returns (pairs, expired) where expired holds the reset pairs.
    """
    updated = []
    expired = []
    for pair in pairs:
        if rest_is_over(pair, now):
            pair = clear_completion(pair)
            expired.append(pair)
        updated.append(pair)
    return updated, expired


def format_countdown(ms):
    if ms is None:
        return "-"
    total = int(ms // 1000)
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    if hours > 0:
        return f"{hours}h {minutes:02d}m {seconds:02d}s"
    if minutes > 0:
        return f"{minutes}m {seconds:02d}s"
    return f"{seconds}s"
