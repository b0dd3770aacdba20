"""Application entry point: stdin snapshot in, status line out."""

import logging
import os
import select
import sys
import time
from typing import IO, Optional

from claude_statusline.errors import DEGRADED_LINE, CollaboratorUnavailable, MalformedInput
from claude_statusline.services.capabilities import Capabilities, system_capabilities
from claude_statusline.services.config_manager import ConfigManager
from claude_statusline.services.layout_engine import compose
from claude_statusline.services.metrics_calculator import compute_metrics, cost_strategy_for
from claude_statusline.services.segment_renderer import DEFAULT_THEME, Theme, render_segments
from claude_statusline.services.snapshot_parser import parse_snapshot
from claude_statusline.types.git import GitStatus
from claude_statusline.types.settings import RenderSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "claude-statusline %(levelname)s %(name)s: %(message)s"
READ_CHUNK_SIZE = 65536


def configure_logging(debug: bool = False):
    """Send logs to stderr; stdout is reserved for the status line."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        stream=sys.stderr,
        format=LOG_FORMAT,
    )


def read_input(stream: IO, timeout: float) -> str | bytes:
    """Read the snapshot to end of stream, giving up once the timeout has elapsed.

    The timeout bounds the whole read, not just the first byte. Whatever
    arrived before the deadline is returned and left to the parser.
    """
    try:
        if stream.isatty():
            logger.info("stdin is a terminal, no snapshot to read")
            return ""
        fd = stream.fileno()
    except (OSError, ValueError):
        # Streams without a file descriptor are read directly
        logger.debug("stdin has no file descriptor, reading without timeout")
        source = getattr(stream, "buffer", stream)
        return source.read()

    deadline = time.monotonic() + timeout
    chunks: list[bytes] = []
    while True:
        remaining = deadline - time.monotonic()
        ready = select.select([fd], [], [], remaining)[0] if remaining > 0 else []
        if not ready:
            if chunks:
                logger.warning("Snapshot on stdin incomplete after %.1fs", timeout)
            else:
                logger.warning("No snapshot on stdin after %.1fs", timeout)
            break
        chunk = os.read(fd, READ_CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def _probe_git(capabilities: Capabilities, directory: str) -> GitStatus:
    if not directory:
        return GitStatus()
    try:
        return capabilities.git_status(directory)
    except CollaboratorUnavailable:
        logger.debug("Git capability unavailable for %s", directory, exc_info=True)
        return GitStatus()


def _probe_width(capabilities: Capabilities) -> Optional[int]:
    try:
        return capabilities.terminal_width()
    except CollaboratorUnavailable:
        logger.debug("Terminal width capability unavailable", exc_info=True)
        return None


def _probe_mtime(capabilities: Capabilities, path: str) -> Optional[float]:
    if not path:
        return None
    try:
        return capabilities.file_mtime(path)
    except CollaboratorUnavailable:
        logger.debug("Cannot read transcript metadata for %s", path, exc_info=True)
        return None


def render_status(
    raw: str | bytes,
    capabilities: Capabilities,
    settings: RenderSettings = RenderSettings(),
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Run the whole pipeline for one snapshot and return the status text.

    Malformed input yields the degraded placeholder line.
    """
    try:
        snapshot = parse_snapshot(raw)
    except MalformedInput as e:
        logger.info("Malformed snapshot: %s", e)
        return DEGRADED_LINE

    git = _probe_git(capabilities, snapshot.working_directory)
    transcript_mtime = _probe_mtime(capabilities, snapshot.transcript_path)
    metrics = compute_metrics(
        snapshot,
        capabilities.clock(),
        cost_strategy=cost_strategy_for(settings.cost_strategy),
        transcript_mtime=transcript_mtime,
    )
    groups = render_segments(snapshot, metrics, git, theme)
    return compose(
        groups,
        theme.separator,
        _probe_width(capabilities),
        default_width=settings.default_width,
        glyph_buffer=settings.glyph_buffer,
        indent=settings.indent,
    )


def run(
    stdin: IO | None = None,
    stdout: IO | None = None,
    capabilities: Capabilities | None = None,
    config: ConfigManager | None = None,
) -> int:
    """Render one status line. Always returns 0."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    settings = (config or ConfigManager()).load_render_settings()
    configure_logging(settings.debug_logging)

    try:
        raw = read_input(stdin, settings.input_timeout)
        line = render_status(raw, capabilities or system_capabilities(settings), settings)
    except Exception:
        # stdout must always carry exactly one line
        logger.exception("Status line rendering failed")
        line = DEGRADED_LINE

    stdout.write(line + "\n")
    stdout.flush()
    return 0
