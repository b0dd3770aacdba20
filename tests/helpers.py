"""Shared test helpers."""

from datetime import datetime, timezone
from typing import Optional

from claude_statusline.services.capabilities import Capabilities
from claude_statusline.types.git import GitStatus
from claude_statusline.utils.ansi import strip_ansi

FIXED_NOW = datetime(2025, 3, 14, 9, 31, 1, tzinfo=timezone.utc)


def fake_capabilities(
    git: GitStatus = GitStatus(),
    width: Optional[int] = 200,
    now: datetime = FIXED_NOW,
    mtime: Optional[float] = None,
) -> Capabilities:
    """Capabilities returning fixed values, no system access."""
    return Capabilities(
        git_status=lambda directory: git,
        terminal_width=lambda: width,
        clock=lambda: now,
        file_mtime=lambda path: mtime,
    )


def plain(text: str) -> str:
    """Status text with colors removed, for readable assertions."""
    return strip_ansi(text)
