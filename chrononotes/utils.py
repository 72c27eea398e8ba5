"""Utility functions for ChronoNotes."""

import re
import time
import uuid
from collections.abc import Iterable
from datetime import date

#: Path separators accepted in project folders and attachment paths.
PATH_SEPARATORS = re.compile(r"[\\/]")


def today_iso(today: date | None = None) -> str:
    """
    Return today's calendar date as an ISO-8601 ``YYYY-MM-DD`` string.

    Keyword Args:
        today: Date to format instead of the current local date

    Returns:
        ISO date string

    """
    return (today or date.today()).isoformat()


def generate_note_id(existing: Iterable[str] = (), now_ms: int | None = None) -> str:
    """
    Generate a time-based note ID of the form ``note-<epoch milliseconds>``.

    If the generated ID is already taken, the timestamp is bumped one
    millisecond at a time until it is free.

    Keyword Args:
        existing: IDs already in use
        now_ms: Timestamp in milliseconds to use instead of the current time

    Returns:
        A note ID not present in ``existing``

    """
    taken = set(existing)
    stamp = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    while f"note-{stamp}" in taken:
        stamp += 1
    return f"note-{stamp}"


def generate_attachment_id() -> str:
    """Generate a random attachment ID."""
    return str(uuid.uuid4())


def last_path_segment(path: str) -> str:
    """
    Get the last segment of a ``/`` or ``\\`` separated path.

    Args:
        path: Path string

    Returns:
        The last segment, or ``path`` itself if it has no separators

    """
    return PATH_SEPARATORS.split(path)[-1]


def parse_tags(raw: str) -> list[str]:
    """
    Parse comma-separated tag text.

    Args:
        raw: Text such as ``"travel, Work,,  "``

    Returns:
        The trimmed, non-empty tags in the order given

    """
    return [tag.strip() for tag in raw.split(",") if tag.strip()]
