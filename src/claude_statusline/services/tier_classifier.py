"""Map continuous metrics to ordinal presentation tiers."""

from typing import Optional

from claude_statusline.types.metrics import ContextTier, CostTier, ModelFamily

CONTEXT_CAUTION_PERCENT = 50
CONTEXT_CRITICAL_PERCENT = 80

# Costs at or below this are not worth showing.
COST_VISIBLE_ABOVE = 0.001

# Upper bounds (exclusive) of each cost tier below EXTREME.
COST_TIER_BOUNDS: tuple[tuple[float, CostTier], ...] = (
    (0.10, CostTier.TRIVIAL),
    (0.50, CostTier.LOW),
    (1.00, CostTier.MODERATE),
    (5.00, CostTier.HIGH),
)

_MODEL_FAMILIES = (ModelFamily.OPUS, ModelFamily.SONNET, ModelFamily.HAIKU)


def classify_context(percent: float) -> ContextTier:
    if percent < CONTEXT_CAUTION_PERCENT:
        return ContextTier.NORMAL
    if percent < CONTEXT_CRITICAL_PERCENT:
        return ContextTier.CAUTION
    return ContextTier.CRITICAL


def classify_cost(usd: Optional[float]) -> Optional[CostTier]:
    """Cost tier, or None when the cost should not be displayed."""
    if usd is None or usd <= COST_VISIBLE_ABOVE:
        return None
    for bound, tier in COST_TIER_BOUNDS:
        if usd < bound:
            return tier
    return CostTier.EXTREME


def classify_model(*names: str) -> ModelFamily:
    """First family whose name appears in any of the given model names."""
    for name in names:
        lowered = (name or "").lower()
        for family in _MODEL_FAMILIES:
            if family.value in lowered:
                return family
    return ModelFamily.OTHER
