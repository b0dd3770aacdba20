"""Segment renderer: turns snapshot and metrics into colored text segments.

Each segment is either a finished string (with its own reset sequences) or
empty. Empty segments are dropped before grouping, so no placeholder text or
stray separators reach the layout.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from claude_statusline.services.tier_classifier import (
    classify_context,
    classify_cost,
    classify_model,
)
from claude_statusline.types.git import GitStatus
from claude_statusline.types.metrics import ContextTier, CostTier, DerivedMetrics, ModelFamily
from claude_statusline.types.snapshot import MetricsSnapshot, VimMode
from claude_statusline.utils.ansi import paint
from claude_statusline.utils.formatting import (
    directory_label,
    format_bar,
    format_cents,
    format_countdown,
    format_duration,
    format_k,
    format_percent,
    format_tokens_per_turn,
    format_usd,
)


class Role(str, Enum):
    """Semantic color roles a theme must provide."""
    DIRECTORY = "directory"
    BRANCH = "branch"
    DIRTY = "dirty"
    DIM = "dim"
    NEUTRAL = "neutral"
    OK = "ok"
    CAUTION = "caution"
    CRITICAL = "critical"
    ACCENT = "accent"
    HIGHLIGHT = "highlight"
    OPUS = "opus"
    SONNET = "sonnet"
    HAIKU = "haiku"
    ADDED = "added"
    REMOVED = "removed"
    COST_LOW = "cost-low"
    COST_MID = "cost-mid"
    COST_HIGH = "cost-high"
    COST_EXTREME = "cost-extreme"
    VIM_INSERT = "vim-insert"
    VIM_NORMAL = "vim-normal"
    VIM_VISUAL = "vim-visual"


@dataclass(frozen=True)
class Theme:
    colors: Mapping[Role, str]
    separator_text: str = "|"

    def color(self, role: Role) -> str:
        return self.colors.get(role, "")

    def paint(self, text: str, role: Role) -> str:
        return paint(text, self.color(role))

    @property
    def separator(self) -> str:
        return f" {self.paint(self.separator_text, Role.DIM)} "


DEFAULT_THEME = Theme(colors=MappingProxyType({
    Role.DIRECTORY: "\033[34m",
    Role.BRANCH: "\033[32m",
    Role.DIRTY: "\033[33m",
    Role.DIM: "\033[90m",
    Role.NEUTRAL: "",
    Role.OK: "\033[32m",
    Role.CAUTION: "\033[33m",
    Role.CRITICAL: "\033[31m",
    Role.ACCENT: "\033[36m",
    Role.HIGHLIGHT: "\033[33m",
    Role.OPUS: "\033[35m",
    Role.SONNET: "\033[36m",
    Role.HAIKU: "\033[32m",
    Role.ADDED: "\033[32m",
    Role.REMOVED: "\033[31m",
    Role.COST_LOW: "\033[33m",
    Role.COST_MID: "\033[93m",
    Role.COST_HIGH: "\033[91m",
    Role.COST_EXTREME: "\033[1;31m",
    Role.VIM_INSERT: "\033[32m",
    Role.VIM_NORMAL: "\033[34m",
    Role.VIM_VISUAL: "\033[35m",
}))


# Exhaustive enum → (glyph, role) tables.
CONTEXT_STYLES: dict[ContextTier, tuple[str, Role]] = {
    ContextTier.NORMAL: ("", Role.OK),
    ContextTier.CAUTION: ("⚠ ", Role.CAUTION),
    ContextTier.CRITICAL: ("🔥 ", Role.CRITICAL),
}

COST_STYLES: dict[CostTier, tuple[str, Role]] = {
    CostTier.TRIVIAL: ("😊", Role.COST_LOW),
    CostTier.LOW: ("🙂", Role.COST_LOW),
    CostTier.MODERATE: ("😐", Role.COST_MID),
    CostTier.HIGH: ("😬", Role.COST_HIGH),
    CostTier.EXTREME: ("🤯", Role.COST_EXTREME),
}

MODEL_ROLES: dict[ModelFamily, Role] = {
    ModelFamily.OPUS: Role.OPUS,
    ModelFamily.SONNET: Role.SONNET,
    ModelFamily.HAIKU: Role.HAIKU,
    ModelFamily.OTHER: Role.NEUTRAL,
}

VIM_STYLES: dict[VimMode, Optional[tuple[str, Role]]] = {
    VimMode.NONE: None,
    VimMode.INSERT: ("✎", Role.VIM_INSERT),
    VimMode.NORMAL: ("◆", Role.VIM_NORMAL),
    VimMode.VISUAL: ("▣", Role.VIM_VISUAL),
}

OUTPUT_STYLE_ROLES: dict[str, Role] = {
    "explanatory": Role.HIGHLIGHT,
    "learning": Role.OK,
    "concise": Role.ACCENT,
    "default": Role.DIM,
}


@dataclass
class SegmentGroups:
    """Non-empty segments split into identity (primary) and analytics (secondary)."""
    primary: list[str] = field(default_factory=list)
    secondary: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Primary segments
# ---------------------------------------------------------------------------

def render_git(git: GitStatus, theme: Theme = DEFAULT_THEME) -> str:
    if not git.is_repository or not git.branch:
        return ""
    name = f":{git.branch}" if git.is_detached else git.branch
    if git.is_dirty:
        return theme.paint(f"({name}*)", Role.DIRTY)
    return theme.paint(f"({name})", Role.BRANCH)


def render_directory(snapshot: MetricsSnapshot, git: GitStatus, theme: Theme = DEFAULT_THEME) -> str:
    """Directory name with the git segment attached."""
    text = theme.paint(directory_label(snapshot.working_directory), Role.DIRECTORY)
    branch = render_git(git, theme)
    return f"{text} {branch}" if branch else text


def render_vim_mode(mode: VimMode, theme: Theme = DEFAULT_THEME) -> str:
    style = VIM_STYLES[mode]
    if style is None:
        return ""
    glyph, role = style
    return theme.paint(f"[{glyph} {mode.value}]", role)


def render_model(snapshot: MetricsSnapshot, theme: Theme = DEFAULT_THEME) -> str:
    family = classify_model(snapshot.model_display_name, snapshot.model_id)
    return theme.paint(snapshot.model_display_name, MODEL_ROLES[family])


def render_context(snapshot: MetricsSnapshot, metrics: DerivedMetrics, theme: Theme = DEFAULT_THEME) -> str:
    """Context usage as a progress bar and used/size(pct%), colored by tier.

    The filled cells take the tier color, the empty ones are dimmed.
    """
    if metrics.usage_percent is None:
        return ""
    glyph, role = CONTEXT_STYLES[classify_context(metrics.usage_percent)]
    filled, empty = format_bar(metrics.usage_percent)
    text = (f"{format_k(metrics.used_tokens)}/{format_k(snapshot.context_window_size)}"
            f"({format_percent(metrics.usage_percent)})")
    return theme.paint(f"{glyph}{filled}", role) + theme.paint(empty, Role.DIM) + theme.paint(f" {text}", role)


# ---------------------------------------------------------------------------
# Secondary segments
# ---------------------------------------------------------------------------

def render_cache(metrics: DerivedMetrics, theme: Theme = DEFAULT_THEME) -> str:
    if metrics.cache_percent <= 0:
        return ""
    return theme.paint(f"♻ {metrics.cache_percent}%", Role.ACCENT)


def render_tokens_per_turn(metrics: DerivedMetrics, theme: Theme = DEFAULT_THEME) -> str:
    if metrics.tokens_per_turn_k is None:
        return ""
    text = format_tokens_per_turn(metrics.tokens_per_turn_k)
    if text in ("0", "0.0"):
        return ""
    return theme.paint(f"{text}K/turn", Role.DIM)


def render_session_duration(metrics: DerivedMetrics, theme: Theme = DEFAULT_THEME) -> str:
    if metrics.session_duration_seconds is None:
        return ""
    return theme.paint(f"⏱ {format_duration(metrics.session_duration_seconds)}", Role.DIM)


def render_output_style(snapshot: MetricsSnapshot, theme: Theme = DEFAULT_THEME) -> str:
    name = snapshot.output_style_name
    key = name.lower()
    if key in OUTPUT_STYLE_ROLES:
        return theme.paint(key, OUTPUT_STYLE_ROLES[key])
    return theme.paint(name, Role.DIM)


def render_lines_changed(snapshot: MetricsSnapshot, theme: Theme = DEFAULT_THEME) -> str:
    if not snapshot.lines_added and not snapshot.lines_removed:
        return ""
    added = theme.paint(f"+{snapshot.lines_added}", Role.ADDED)
    removed = theme.paint(f"-{snapshot.lines_removed}", Role.REMOVED)
    return f"{added}/{removed}"


def render_cost(metrics: DerivedMetrics, theme: Theme = DEFAULT_THEME) -> str:
    tier = classify_cost(metrics.cost_usd)
    if tier is None:
        return ""
    glyph, role = COST_STYLES[tier]
    if metrics.cost_cents is not None:
        amount = format_cents(metrics.cost_cents)
    else:
        amount = format_usd(metrics.cost_usd)
    return f"{glyph} {theme.paint(amount, role)}"


def render_reset_timer(metrics: DerivedMetrics, theme: Theme = DEFAULT_THEME) -> str:
    if metrics.reset_countdown_seconds is None:
        return ""
    return theme.paint(f"↻ {format_countdown(metrics.reset_countdown_seconds)}", Role.DIM)


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def render_segments(
    snapshot: MetricsSnapshot,
    metrics: DerivedMetrics,
    git: GitStatus,
    theme: Theme = DEFAULT_THEME,
) -> SegmentGroups:
    """Render every segment and drop the empty ones."""
    primary = [
        render_directory(snapshot, git, theme),
        render_vim_mode(snapshot.vim_mode, theme),
        render_model(snapshot, theme),
        render_context(snapshot, metrics, theme),
    ]
    secondary = [
        render_cache(metrics, theme),
        render_tokens_per_turn(metrics, theme),
        render_session_duration(metrics, theme),
        render_output_style(snapshot, theme),
        render_lines_changed(snapshot, theme),
        render_cost(metrics, theme),
        render_reset_timer(metrics, theme),
    ]
    return SegmentGroups(
        primary=[s for s in primary if s],
        secondary=[s for s in secondary if s],
    )
