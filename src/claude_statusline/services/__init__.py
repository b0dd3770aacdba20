"""Services for the Claude status line pipeline."""

from claude_statusline.services.snapshot_parser import parse_snapshot
from claude_statusline.services.metrics_calculator import compute_metrics, cost_strategy_for
from claude_statusline.services.segment_renderer import DEFAULT_THEME, Role, Theme, render_segments
from claude_statusline.services.layout_engine import compose
from claude_statusline.services.git_resolver import resolve_git_status
from claude_statusline.services.capabilities import Capabilities, system_capabilities
from claude_statusline.services.config_manager import ConfigManager

__all__ = [
    "parse_snapshot",
    "compute_metrics",
    "cost_strategy_for",
    "DEFAULT_THEME",
    "Role",
    "Theme",
    "render_segments",
    "compose",
    "resolve_git_status",
    "Capabilities",
    "system_capabilities",
    "ConfigManager",
]
