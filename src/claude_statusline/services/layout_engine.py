"""Width-aware layout: one line when it fits, two lines otherwise."""

import logging
from typing import Optional

from claude_statusline.services.segment_renderer import SegmentGroups
from claude_statusline.utils.ansi import visible_length

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80
# Emoji and symbols take two columns but count as one character.
GLYPH_BUFFER = 4
SECOND_LINE_INDENT = 2


def resolve_width(width: Optional[int], default_width: int = DEFAULT_WIDTH) -> int:
    """Detected width, or the default when the terminal could not be probed."""
    if width is None or width <= 0:
        return default_width
    return width


def measure(primary: str, separator: str, secondary: str, glyph_buffer: int = GLYPH_BUFFER) -> int:
    """Columns needed to print both groups on one line, buffer included."""
    return (visible_length(primary) + visible_length(separator)
            + visible_length(secondary) + glyph_buffer)


def fits_on_one_line(
    primary: str,
    separator: str,
    secondary: str,
    width: int,
    glyph_buffer: int = GLYPH_BUFFER,
) -> bool:
    return measure(primary, separator, secondary, glyph_buffer) <= width


def compose(
    groups: SegmentGroups,
    separator: str,
    width: Optional[int],
    default_width: int = DEFAULT_WIDTH,
    glyph_buffer: int = GLYPH_BUFFER,
    indent: int = SECOND_LINE_INDENT,
) -> str:
    """Join the segment groups into the final one- or two-line status text."""
    primary = separator.join(groups.primary)
    secondary = separator.join(groups.secondary)
    if not secondary:
        return primary
    if not primary:
        return secondary

    columns = resolve_width(width, default_width)
    if fits_on_one_line(primary, separator, secondary, columns, glyph_buffer):
        return f"{primary}{separator}{secondary}"

    logger.debug(
        "Wrapping status line: needs %d columns, have %d",
        measure(primary, separator, secondary, glyph_buffer), columns,
    )
    return f"{primary}\n{' ' * indent}{secondary}"
