"""Snapshot parser: decodes the host's stdin JSON into a MetricsSnapshot."""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

import orjson

from claude_statusline.errors import MalformedInput
from claude_statusline.types.snapshot import CurrentUsage, MetricsSnapshot, VimMode

logger = logging.getLogger(__name__)

Probe = Callable[[dict], Any]

# Top-level keys the host is known to send. A document carrying none of them
# is not a session snapshot.
RECOGNIZED_KEYS = frozenset({
    "workspace",
    "cwd",
    "model",
    "output_style",
    "vim",
    "cost",
    "context_window",
    "turn_count",
    "session_start_time",
    "session",
    "session.start_time",
    "start_time",
    "session_id",
    "transcript_path",
})
MIN_RECOGNIZED_KEYS = 1

DEFAULT_MODEL_NAME = "Claude"
DEFAULT_OUTPUT_STYLE = "default"


def path(*keys: str) -> Probe:
    """Probe that walks nested objects, yielding None on any missing step."""
    def probe(data: dict) -> Any:
        node: Any = data
        for key in keys:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node
    return probe


def string_at(key: str) -> Probe:
    """Probe for older snapshots that carry a bare string instead of an object."""
    def probe(data: dict) -> Any:
        value = data.get(key)
        return value if isinstance(value, str) else None
    return probe


# Ordered accessor probes; the first non-empty value wins.
WORKING_DIRECTORY_PROBES: tuple[Probe, ...] = (
    path("workspace", "current_dir"),
    path("cwd"),
)
MODEL_NAME_PROBES: tuple[Probe, ...] = (
    path("model", "display_name"),
    string_at("model"),
)
MODEL_ID_PROBES: tuple[Probe, ...] = (
    path("model", "id"),
)
SESSION_START_PROBES: tuple[Probe, ...] = (
    path("session_start_time"),
    path("session", "start_time"),
    path("session.start_time"),
    path("start_time"),
)


def first_non_empty(data: dict, probes: tuple[Probe, ...]) -> Any:
    """Evaluate probes in order and return the first non-empty result."""
    for probe in probes:
        value = probe(data)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def parse_snapshot(raw: str | bytes) -> MetricsSnapshot:
    """Decode a raw JSON document into a MetricsSnapshot.

    Raises MalformedInput if the document is empty, not valid JSON, not an
    object, or has none of the recognized top-level keys.
    """
    if not raw or not raw.strip():
        raise MalformedInput("empty input")

    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise MalformedInput(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedInput(f"expected a JSON object, got {type(data).__name__}")

    found = RECOGNIZED_KEYS.intersection(data)
    if len(found) < MIN_RECOGNIZED_KEYS:
        raise MalformedInput("no recognized snapshot fields")

    return snapshot_from_dict(data)


def snapshot_from_dict(data: dict) -> MetricsSnapshot:
    """Build a snapshot from an already-decoded object, applying defaults."""
    cost = data.get("cost") if isinstance(data.get("cost"), dict) else {}
    context = data.get("context_window") if isinstance(data.get("context_window"), dict) else {}

    return MetricsSnapshot(
        working_directory=_as_str(first_non_empty(data, WORKING_DIRECTORY_PROBES)),
        model_display_name=_as_str(first_non_empty(data, MODEL_NAME_PROBES)) or DEFAULT_MODEL_NAME,
        model_id=_as_str(first_non_empty(data, MODEL_ID_PROBES)),
        output_style_name=_as_str(path("output_style", "name")(data)) or DEFAULT_OUTPUT_STYLE,
        vim_mode=_parse_vim_mode(path("vim", "mode")(data)),
        total_cost_usd=_as_float(cost.get("total_cost_usd")),
        total_input_tokens=_as_int(context.get("total_input_tokens")),
        total_output_tokens=_as_int(context.get("total_output_tokens")),
        lines_added=_as_int(cost.get("total_lines_added")) or 0,
        lines_removed=_as_int(cost.get("total_lines_removed")) or 0,
        current_usage=_parse_current_usage(context.get("current_usage")),
        context_window_size=_as_int(context.get("context_window_size")) or 0,
        turn_count=_as_int(data.get("turn_count")) or 0,
        session_start_time=_as_str(first_non_empty(data, SESSION_START_PROBES)),
        session_id=_as_str(data.get("session_id")),
        transcript_path=_as_str(data.get("transcript_path")),
    )


def _parse_current_usage(raw: Any) -> Optional[CurrentUsage]:
    if not isinstance(raw, dict):
        return None
    return CurrentUsage(
        input_tokens=_as_int(raw.get("input_tokens")) or 0,
        cache_creation_tokens=_as_int(raw.get("cache_creation_input_tokens")) or 0,
        cache_read_tokens=_as_int(raw.get("cache_read_input_tokens")) or 0,
        output_tokens=_as_int(raw.get("output_tokens")) or 0,
    )


def _parse_vim_mode(raw: Any) -> VimMode:
    if isinstance(raw, str) and raw in ("INSERT", "NORMAL", "VISUAL"):
        return VimMode(raw)
    return VimMode.NONE


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_decimal(value: Any) -> Optional[Decimal]:
    """Read a JSON number or numeric string as a Decimal; None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            logger.debug("Ignoring non-numeric value %r", value)
            return None
        return number if number.is_finite() else None
    return None


def _as_int(value: Any) -> Optional[int]:
    """Truncate toward zero (never round) and clamp to non-negative."""
    number = _as_decimal(value)
    if number is None:
        return None
    return max(0, int(number))


def _as_float(value: Any) -> Optional[float]:
    number = _as_decimal(value)
    if number is None:
        return None
    return max(0.0, float(number))
