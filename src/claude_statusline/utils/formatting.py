"""Number, duration and path formatting for status segments."""

import re

_PATH_SEP_RE = re.compile(r"[/\\]+")

BAR_CELL = "━"


def format_k(tokens: int) -> str:
    """Format a token count in thousands.

    Below 10K one decimal place is kept, above it the integer part only.
    Digits are truncated, never rounded: 9999 → 9.9K, 15600 → 15K.
    """
    tokens = max(0, int(tokens))
    if tokens < 10_000:
        return f"{tokens // 1000}.{tokens % 1000 // 100}K"
    return f"{tokens // 1000}K"


def format_percent(percent: float) -> str:
    return f"{percent:.1f}%"


def format_bar(percent: float, cells: int = 10) -> tuple[str, str]:
    """Split a progress bar into its filled and empty parts.

    Each cell stands for 100/cells percent; partial cells are not drawn
    and the fill is capped at the bar length.
    """
    filled = min(cells, max(0, int(percent * cells // 100)))
    return BAR_CELL * filled, BAR_CELL * (cells - filled)


def format_tokens_per_turn(tokens_k: float) -> str:
    return f"{tokens_k:.1f}"


def format_duration(seconds: int) -> str:
    """Format an elapsed duration: 1h1m, 5m, 59s."""
    if seconds >= 3600:
        return f"{seconds // 3600}h{seconds % 3600 // 60}m"
    if seconds >= 60:
        return f"{seconds // 60}m"
    return f"{seconds}s"


def format_countdown(seconds: int) -> str:
    """Format a countdown as hours and minutes, always both: 0h5m."""
    return f"{seconds // 3600}h{seconds % 3600 // 60}m"


def format_cents(cents: int) -> str:
    dollars, remainder = divmod(cents, 100)
    return f"${dollars}.{remainder:02d}"


def format_usd(usd: float) -> str:
    return f"${usd:.2f}"


def directory_label(path: str) -> str:
    """Last component of a working directory.

    /home/u/proj → proj
    /            → /
    (empty)      → ~
    """
    if not path:
        return "~"
    parts = [p for p in _PATH_SEP_RE.split(path) if p]
    if not parts:
        return "/"
    return parts[-1]
