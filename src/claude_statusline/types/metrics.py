"""Derived metrics and presentation tiers."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class ContextTier(IntEnum):
    NORMAL = 0
    CAUTION = 1
    CRITICAL = 2


class CostTier(IntEnum):
    TRIVIAL = 0
    LOW = 1
    MODERATE = 2
    HIGH = 3
    EXTREME = 4


class ModelFamily(str, Enum):
    OPUS = "opus"
    SONNET = "sonnet"
    HAIKU = "haiku"
    OTHER = "other"


@dataclass(frozen=True)
class DerivedMetrics:
    used_tokens: int = 0
    usage_percent: Optional[float] = None
    cache_percent: int = 0
    tokens_per_turn_k: Optional[float] = None
    cost_usd: Optional[float] = None
    # Set only by the price-table strategy, which works in whole cents.
    cost_cents: Optional[int] = None
    session_duration_seconds: Optional[int] = None
    reset_countdown_seconds: Optional[int] = None
