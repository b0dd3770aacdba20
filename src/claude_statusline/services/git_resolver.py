"""Git metadata resolver: reads .git for the branch and asks git whether the tree is dirty."""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from claude_statusline.errors import CollaboratorUnavailable
from claude_statusline.types.git import GitStatus

logger = logging.getLogger(__name__)

SHORT_HASH_LENGTH = 7
DEFAULT_TIMEOUT = 1.0


def find_git_dir(directory: str) -> Optional[Path]:
    """Locate the git directory for a path, searching upward through parents.

    Handles both regular repos and worktrees (.git as file with gitdir pointer).
    """
    if not directory:
        return None
    start = Path(directory)
    for candidate in (start, *start.parents):
        git_path = candidate / ".git"
        try:
            if git_path.is_dir():
                return git_path
            if git_path.is_file():
                # Worktree: .git is a file containing "gitdir: <path>"
                content = git_path.read_text().strip()
                if not content.startswith("gitdir:"):
                    return None
                gitdir = Path(content[len("gitdir:"):].strip())
                if not gitdir.is_absolute():
                    gitdir = candidate / gitdir
                return gitdir
        except OSError:
            logger.debug("Failed to inspect %s", git_path, exc_info=True)
            return None
    return None


def read_head(git_dir: Path) -> tuple[str, bool]:
    """Return (branch or short hash, is_detached) from a git directory's HEAD."""
    head_path = git_dir / "HEAD"
    try:
        head = head_path.read_text().strip()
    except OSError:
        logger.debug("Failed to read %s", head_path, exc_info=True)
        return "", False

    if head.startswith("ref: refs/heads/"):
        return head[len("ref: refs/heads/"):], False
    if head.startswith("ref: "):
        return head[len("ref: "):].rsplit("/", 1)[-1], False
    # Detached HEAD: short hash
    return head[:SHORT_HASH_LENGTH], True


def is_dirty(directory: str, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """True when tracked files in the working tree or index have changes.

    Raises CollaboratorUnavailable if git is missing, fails, or times out.
    """
    try:
        result = subprocess.run(
            ["git", "-C", directory, "--no-optional-locks",
             "status", "--porcelain", "--untracked-files=no"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        raise CollaboratorUnavailable(f"git status failed in {directory}") from e
    if result.returncode != 0:
        raise CollaboratorUnavailable(
            f"git status exited {result.returncode} in {directory}"
        )
    return bool(result.stdout.strip())


def resolve_git_status(directory: str, timeout: float = DEFAULT_TIMEOUT) -> GitStatus:
    """Branch, detached flag and dirty flag for a directory.

    Not a repository → empty GitStatus. A failing dirty check keeps the
    branch and reports the tree as clean.
    """
    git_dir = find_git_dir(directory)
    if git_dir is None:
        return GitStatus()

    branch, detached = read_head(git_dir)
    if not branch:
        return GitStatus()

    try:
        dirty = is_dirty(directory, timeout=timeout)
    except CollaboratorUnavailable:
        logger.debug("Dirty check unavailable for %s", directory, exc_info=True)
        dirty = False

    return GitStatus(
        is_repository=True,
        branch=branch,
        is_detached=detached,
        is_dirty=dirty,
    )
