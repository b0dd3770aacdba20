"""Tests for claude_statusline.services.segment_renderer."""

import pytest

from claude_statusline.services.segment_renderer import (
    COST_STYLES,
    DEFAULT_THEME,
    Role,
    Theme,
    render_cache,
    render_context,
    render_cost,
    render_directory,
    render_git,
    render_lines_changed,
    render_model,
    render_output_style,
    render_reset_timer,
    render_segments,
    render_session_duration,
    render_tokens_per_turn,
    render_vim_mode,
)
from claude_statusline.types.git import GitStatus
from claude_statusline.types.metrics import CostTier, DerivedMetrics
from claude_statusline.types.snapshot import MetricsSnapshot, VimMode

from helpers import plain

PLAIN_THEME = Theme(colors={})


# ---------------------------------------------------------------------------
# 1. Directory and git
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("directory, expected", [
    ("/home/u/proj", "proj"),
    ("/", "/"),
    ("", "~"),
])
def test_directory_label(directory, expected):
    text = render_directory(MetricsSnapshot(working_directory=directory), GitStatus())
    assert plain(text) == expected
    assert DEFAULT_THEME.color(Role.DIRECTORY) in text


def test_git_clean_branch():
    text = render_git(GitStatus(is_repository=True, branch="main"))
    assert plain(text) == "(main)"
    assert text.startswith(DEFAULT_THEME.color(Role.BRANCH))


def test_git_dirty_branch():
    text = render_git(GitStatus(is_repository=True, branch="feature/x", is_dirty=True))
    assert plain(text) == "(feature/x*)"
    assert text.startswith(DEFAULT_THEME.color(Role.DIRTY))


def test_git_detached_head_shows_hash():
    text = render_git(GitStatus(is_repository=True, branch="abc1234", is_detached=True))
    assert plain(text) == "(:abc1234)"


def test_git_absent():
    assert render_git(GitStatus()) == ""
    assert render_git(GitStatus(is_repository=True, branch="")) == ""


def test_directory_with_git_attached():
    git = GitStatus(is_repository=True, branch="main", is_dirty=True)
    text = render_directory(MetricsSnapshot(working_directory="/srv/api"), git)
    assert plain(text) == "api (main*)"


# ---------------------------------------------------------------------------
# 2. Vim, model, context
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("mode, expected, role", [
    (VimMode.INSERT, "[✎ INSERT]", Role.VIM_INSERT),
    (VimMode.NORMAL, "[◆ NORMAL]", Role.VIM_NORMAL),
    (VimMode.VISUAL, "[▣ VISUAL]", Role.VIM_VISUAL),
])
def test_vim_modes(mode, expected, role):
    text = render_vim_mode(mode)
    assert plain(text) == expected
    assert DEFAULT_THEME.color(role) in text


def test_vim_none_renders_nothing():
    assert render_vim_mode(VimMode.NONE) == ""


@pytest.mark.parametrize("name, role", [
    ("Claude Opus", Role.OPUS),
    ("Sonnet 4.5", Role.SONNET),
    ("Haiku", Role.HAIKU),
])
def test_model_colors(name, role):
    text = render_model(MetricsSnapshot(model_display_name=name))
    assert plain(text) == name
    assert text.startswith(DEFAULT_THEME.color(role))


def test_unknown_model_is_uncolored():
    assert render_model(MetricsSnapshot(model_display_name="Claude")) == "Claude"


def test_context_caution_at_fifty_percent():
    snap = MetricsSnapshot(context_window_size=1000)
    metrics = DerivedMetrics(used_tokens=500, usage_percent=50.0)
    text = render_context(snap, metrics)
    assert plain(text) == "⚠ ━━━━━━━━━━ 0.5K/1.0K(50.0%)"
    assert text.startswith(DEFAULT_THEME.color(Role.CAUTION))


def test_context_normal_and_critical():
    snap = MetricsSnapshot(context_window_size=200000)
    normal = render_context(snap, DerivedMetrics(used_tokens=20000, usage_percent=10.0))
    assert plain(normal) == "━━━━━━━━━━ 20K/200K(10.0%)"
    assert normal.startswith(DEFAULT_THEME.color(Role.OK))

    critical = render_context(snap, DerivedMetrics(used_tokens=190000, usage_percent=95.0))
    assert plain(critical) == "🔥 ━━━━━━━━━━ 190K/200K(95.0%)"
    assert critical.startswith(DEFAULT_THEME.color(Role.CRITICAL))


def test_context_bar_fill_and_colors():
    snap = MetricsSnapshot(context_window_size=1000)
    empty = render_context(snap, DerivedMetrics(used_tokens=0, usage_percent=0.0))
    assert empty.startswith(DEFAULT_THEME.color(Role.DIM) + "━" * 10)

    half = render_context(snap, DerivedMetrics(used_tokens=500, usage_percent=50.0), PLAIN_THEME)
    assert half == "⚠ ━━━━━━━━━━ 0.5K/1.0K(50.0%)"


def test_context_bar_capped_over_full():
    snap = MetricsSnapshot(context_window_size=1000)
    text = render_context(snap, DerivedMetrics(used_tokens=1500, usage_percent=150.0))
    assert plain(text) == "🔥 ━━━━━━━━━━ 1.5K/1.0K(150.0%)"
    assert DEFAULT_THEME.color(Role.DIM) not in text


def test_context_suppressed_without_percentage():
    snap = MetricsSnapshot(context_window_size=0)
    assert render_context(snap, DerivedMetrics(used_tokens=500, usage_percent=None)) == ""


# ---------------------------------------------------------------------------
# 3. Secondary segments
# ---------------------------------------------------------------------------

def test_cache_segment():
    assert plain(render_cache(DerivedMetrics(cache_percent=85))) == "♻ 85%"
    assert render_cache(DerivedMetrics(cache_percent=0)) == ""


def test_tokens_per_turn_segment():
    assert plain(render_tokens_per_turn(DerivedMetrics(tokens_per_turn_k=0.25))) == "0.2K/turn"
    assert render_tokens_per_turn(DerivedMetrics(tokens_per_turn_k=None)) == ""
    # Rounds to 0.0 → nothing worth showing
    assert render_tokens_per_turn(DerivedMetrics(tokens_per_turn_k=0.04)) == ""


def test_session_duration_segment():
    assert plain(render_session_duration(DerivedMetrics(session_duration_seconds=3661))) == "⏱ 1h1m"
    assert plain(render_session_duration(DerivedMetrics(session_duration_seconds=59))) == "⏱ 59s"
    assert render_session_duration(DerivedMetrics(session_duration_seconds=None)) == ""


@pytest.mark.parametrize("name, expected, role", [
    ("Explanatory", "explanatory", Role.HIGHLIGHT),
    ("learning", "learning", Role.OK),
    ("Concise", "concise", Role.ACCENT),
    ("default", "default", Role.DIM),
    ("My Custom Style", "My Custom Style", Role.DIM),
])
def test_output_style(name, expected, role):
    text = render_output_style(MetricsSnapshot(output_style_name=name))
    assert plain(text) == expected
    assert text.startswith(DEFAULT_THEME.color(role))


def test_lines_changed():
    text = render_lines_changed(MetricsSnapshot(lines_added=12, lines_removed=3))
    assert plain(text) == "+12/-3"
    assert plain(render_lines_changed(MetricsSnapshot(lines_added=0, lines_removed=4))) == "+0/-4"
    assert render_lines_changed(MetricsSnapshot()) == ""


def test_cost_direct_value():
    text = render_cost(DerivedMetrics(cost_usd=0.05))
    glyph, role = COST_STYLES[CostTier.TRIVIAL]
    assert plain(text) == f"{glyph} $0.05"
    assert DEFAULT_THEME.color(role) in text


def test_cost_from_cents():
    text = render_cost(DerivedMetrics(cost_usd=15.0, cost_cents=1500))
    glyph, _ = COST_STYLES[CostTier.EXTREME]
    assert plain(text) == f"{glyph} $15.00"


def test_cost_suppressed_at_threshold():
    assert render_cost(DerivedMetrics(cost_usd=0.001)) == ""
    assert render_cost(DerivedMetrics(cost_usd=None)) == ""


def test_cost_glyphs_are_distinct():
    glyphs = [COST_STYLES[tier][0] for tier in CostTier]
    assert len(set(glyphs)) == len(glyphs)


def test_reset_timer():
    assert plain(render_reset_timer(DerivedMetrics(reset_countdown_seconds=82800))) == "↻ 23h0m"
    assert render_reset_timer(DerivedMetrics()) == ""


# ---------------------------------------------------------------------------
# 4. Grouping and theme injection
# ---------------------------------------------------------------------------

def test_render_segments_groups_and_drops_empty():
    snap = MetricsSnapshot(
        working_directory="/home/u/proj",
        model_display_name="Claude Opus",
        context_window_size=1000,
        lines_added=5,
    )
    metrics = DerivedMetrics(used_tokens=500, usage_percent=50.0, cost_usd=0.05)
    groups = render_segments(snap, metrics, GitStatus(), PLAIN_THEME)

    assert groups.primary == ["proj", "Claude Opus", "⚠ ━━━━━━━━━━ 0.5K/1.0K(50.0%)"]
    assert groups.secondary == ["default", "+5/-0", "😊 $0.05"]


def test_every_segment_order():
    snap = MetricsSnapshot(
        working_directory="/w",
        model_display_name="Sonnet",
        vim_mode=VimMode.NORMAL,
        context_window_size=100,
        lines_added=1,
        lines_removed=1,
    )
    metrics = DerivedMetrics(
        used_tokens=10,
        usage_percent=10.0,
        cache_percent=40,
        tokens_per_turn_k=1.5,
        cost_usd=0.2,
        session_duration_seconds=90,
        reset_countdown_seconds=3600,
    )
    git = GitStatus(is_repository=True, branch="dev")
    groups = render_segments(snap, metrics, git, PLAIN_THEME)

    assert groups.primary == ["w (dev)", "[◆ NORMAL]", "Sonnet", "━━━━━━━━━━ 0.0K/0.1K(10.0%)"]
    assert groups.secondary == ["♻ 40%", "1.5K/turn", "⏱ 1m", "default", "+1/-1", "🙂 $0.20", "↻ 1h0m"]


def test_plain_theme_emits_no_escapes():
    snap = MetricsSnapshot(working_directory="/w", lines_added=3)
    groups = render_segments(snap, DerivedMetrics(cost_usd=2.0), GitStatus(), PLAIN_THEME)
    for segment in groups.primary + groups.secondary:
        assert "\033" not in segment
    assert PLAIN_THEME.separator == " | "


def test_default_theme_covers_every_role():
    for role in Role:
        assert role in DEFAULT_THEME.colors
