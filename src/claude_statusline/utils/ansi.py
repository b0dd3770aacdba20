"""ANSI control sequence helpers."""

import re

# CSI sequences (colors, resets) and OSC sequences (hyperlinks, titles)
_ANSI_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
)

RESET = "\033[0m"


def strip_ansi(text: str) -> str:
    """Remove all color and control sequences from text."""
    if not text:
        return ""
    return _ANSI_RE.sub("", text)


def visible_length(text: str) -> int:
    """Character count of text as it appears on a terminal.

    Wide glyphs (emoji) still count as one column here; callers add a
    fixed buffer for them.
    """
    return len(strip_ansi(text))


def paint(text: str, color: str) -> str:
    """Wrap text in a color sequence and a trailing reset."""
    if not text:
        return ""
    if not color:
        return text
    return f"{color}{text}{RESET}"
