"""External collaborators the pipeline consumes, bundled for injection.

Production implementations probe the real system; tests pass plain
callables with fixed results.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Optional

from claude_statusline.services.git_resolver import resolve_git_status
from claude_statusline.types.git import GitStatus
from claude_statusline.types.settings import RenderSettings

logger = logging.getLogger(__name__)

WIDTH_ENV_VARS = ("STATUSLINE_COLS", "COLUMNS")


@dataclass(frozen=True)
class Capabilities:
    git_status: Callable[[str], GitStatus]
    terminal_width: Callable[[], Optional[int]]
    clock: Callable[[], datetime]
    file_mtime: Callable[[str], Optional[float]]


def no_git(directory: str) -> GitStatus:
    return GitStatus()


def tty_columns(tty_path: str = "/dev/tty") -> Optional[int]:
    """Columns of the controlling terminal; stdin and stdout are pipes under the host."""
    try:
        fd = os.open(tty_path, os.O_RDONLY | os.O_NONBLOCK)
    except OSError:
        logger.debug("No controlling terminal at %s", tty_path)
        return None
    try:
        columns = os.get_terminal_size(fd).columns
    except OSError:
        logger.debug("Terminal size probe failed", exc_info=True)
        return None
    finally:
        os.close(fd)
    return columns if columns > 0 else None


def detect_terminal_width() -> Optional[int]:
    """Terminal columns, or None when no probe succeeds."""
    # Env var override (highest priority)
    for env in WIDTH_ENV_VARS:
        value = os.environ.get(env, "").strip()
        if value.isdigit() and int(value) > 0:
            return int(value)
    return tty_columns()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def read_mtime(path: str) -> Optional[float]:
    """Last-modified time of a file as a Unix timestamp, None if unavailable."""
    if not path:
        return None
    try:
        return os.stat(path).st_mtime
    except (OSError, ValueError):
        logger.debug("Cannot stat %s", path, exc_info=True)
        return None


def system_capabilities(settings: RenderSettings) -> Capabilities:
    """Capabilities backed by the real filesystem, git and terminal."""
    if settings.git_enabled:
        git_status = partial(resolve_git_status, timeout=settings.git_timeout)
    else:
        git_status = no_git
    return Capabilities(
        git_status=git_status,
        terminal_width=detect_terminal_width,
        clock=utc_now,
        file_mtime=read_mtime,
    )
