"""Version-control state as reported by the git capability."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GitStatus:
    is_repository: bool = False
    branch: str = ""          # Branch name, or short hash when detached
    is_detached: bool = False
    is_dirty: bool = False
