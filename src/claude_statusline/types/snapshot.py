"""Parsed snapshot types."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VimMode(str, Enum):
    NONE = ""
    INSERT = "INSERT"
    NORMAL = "NORMAL"
    VISUAL = "VISUAL"


@dataclass(frozen=True)
class CurrentUsage:
    input_tokens: int = 0
    cache_creation_tokens: int = 0
    cache_read_tokens: int = 0
    output_tokens: int = 0

    @property
    def total(self) -> int:
        return (self.input_tokens + self.cache_creation_tokens +
                self.cache_read_tokens + self.output_tokens)

    @property
    def prompt_tokens(self) -> int:
        """Tokens sent to the model this turn (fresh + cache write + cache read)."""
        return self.input_tokens + self.cache_creation_tokens + self.cache_read_tokens


@dataclass(frozen=True)
class MetricsSnapshot:
    working_directory: str = ""
    model_display_name: str = "Claude"
    model_id: str = ""
    output_style_name: str = "default"
    vim_mode: VimMode = VimMode.NONE
    # Direct cost and raw totals are alternative cost sources; either may be absent.
    total_cost_usd: Optional[float] = None
    total_input_tokens: Optional[int] = None
    total_output_tokens: Optional[int] = None
    lines_added: int = 0
    lines_removed: int = 0
    current_usage: Optional[CurrentUsage] = None
    context_window_size: int = 0
    turn_count: int = 0
    session_start_time: str = ""
    session_id: str = ""
    transcript_path: str = ""

    @property
    def has_direct_cost(self) -> bool:
        return self.total_cost_usd is not None

    @property
    def has_token_totals(self) -> bool:
        return self.total_input_tokens is not None or self.total_output_tokens is not None
