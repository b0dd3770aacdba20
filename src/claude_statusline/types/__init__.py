"""Type definitions for the Claude status line."""

from claude_statusline.types.snapshot import CurrentUsage, MetricsSnapshot, VimMode
from claude_statusline.types.metrics import (
    ContextTier,
    CostTier,
    DerivedMetrics,
    ModelFamily,
)
from claude_statusline.types.git import GitStatus
from claude_statusline.types.settings import CostStrategyName, RenderSettings

__all__ = [
    "CurrentUsage",
    "MetricsSnapshot",
    "VimMode",
    "ContextTier",
    "CostTier",
    "DerivedMetrics",
    "ModelFamily",
    "GitStatus",
    "CostStrategyName",
    "RenderSettings",
]
