"""Loose ISO 8601 timestamp parsing for session start times."""

import re
from datetime import datetime, timezone

from claude_statusline.errors import UnparseableTimestamp

_BASE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_OFFSET_RE = re.compile(r"[+-]\d{2}:?\d{2}$")


def parse_timestamp(value: str) -> datetime:
    """Parse a session timestamp into an aware UTC datetime.

    Accepts a trailing Z, a numeric UTC offset and fractional seconds.
    Naive timestamps are taken as UTC. Raises UnparseableTimestamp when no
    form matches.
    """
    text = (value or "").strip()
    if not text:
        raise UnparseableTimestamp("empty timestamp")

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = _parse_stripped(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_stripped(text: str) -> datetime:
    """Strip zone suffix and fractional seconds, then parse the bare pattern."""
    base = text.rstrip("Z")
    match = _OFFSET_RE.search(base)
    if match and match.start() > 10:
        base = base[:match.start()]
    base = base.split(".", 1)[0].rstrip("Z")
    try:
        return datetime.strptime(base, _BASE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise UnparseableTimestamp(f"unrecognized timestamp: {text!r}") from e
