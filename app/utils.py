"""
Small shared helpers
"""
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """UTC timestamp in ISO-8601 with millisecond precision and a trailing Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def preview(text: str, length: int = 120) -> str:
    text = (text or "").replace("\n", " ")
    return text if len(text) <= length else f"{text[:length]}…"


def truncate_with_ellipsis(text: str, limit: int) -> str:
    """Cut text to limit characters, appending '...' only when something was cut"""
    text = text or ""
    return text[:limit] + ("..." if len(text) > limit else "")
