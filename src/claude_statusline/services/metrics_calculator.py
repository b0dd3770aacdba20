"""Derived-metrics calculator.

Every function here is total: zero denominators, missing fields and bad
timestamps produce None (suppress the segment) or 0, never an exception.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol

from claude_statusline.errors import UnparseableTimestamp
from claude_statusline.types.metrics import DerivedMetrics
from claude_statusline.types.settings import CostStrategyName
from claude_statusline.types.snapshot import CurrentUsage, MetricsSnapshot
from claude_statusline.utils.pricing import calculate_cost_cents
from claude_statusline.utils.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

RESET_WINDOW_SECONDS = 86_400


# ---------------------------------------------------------------------------
# Cost strategies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CostResult:
    usd: float
    cents: Optional[int] = None


class CostStrategy(Protocol):
    def compute(self, snapshot: MetricsSnapshot) -> Optional[CostResult]:
        ...


class SnapshotCost:
    """Use the cost the host already computed."""

    def compute(self, snapshot: MetricsSnapshot) -> Optional[CostResult]:
        if not snapshot.has_direct_cost:
            return None
        return CostResult(usd=snapshot.total_cost_usd)


class PriceTableCost:
    """Derive cost from raw session token totals and the model price table."""

    def compute(self, snapshot: MetricsSnapshot) -> Optional[CostResult]:
        if not snapshot.has_token_totals:
            return None
        cents = calculate_cost_cents(
            snapshot.total_input_tokens or 0,
            snapshot.total_output_tokens or 0,
            snapshot.model_id,
        )
        return CostResult(usd=cents / 100, cents=cents)


class AutoCost:
    """Prefer the host's cost, fall back to the price table."""

    def __init__(self, strategies: tuple[CostStrategy, ...] | None = None):
        self._strategies = strategies or (SnapshotCost(), PriceTableCost())

    def compute(self, snapshot: MetricsSnapshot) -> Optional[CostResult]:
        for strategy in self._strategies:
            result = strategy.compute(snapshot)
            if result is not None:
                return result
        return None


def cost_strategy_for(name: CostStrategyName) -> CostStrategy:
    if name == CostStrategyName.SNAPSHOT:
        return SnapshotCost()
    if name == CostStrategyName.PRICE_TABLE:
        return PriceTableCost()
    return AutoCost()


# ---------------------------------------------------------------------------
# Token metrics
# ---------------------------------------------------------------------------

def used_tokens(usage: Optional[CurrentUsage]) -> int:
    return usage.total if usage is not None else 0


def usage_percent(usage: Optional[CurrentUsage], window_size: int) -> Optional[float]:
    """Share of the context window in use; None when the window size is unknown."""
    if usage is None or window_size <= 0:
        return None
    return usage.total * 100 / window_size


def cache_percent(usage: Optional[CurrentUsage]) -> int:
    """Cache-read share of prompt tokens, truncated to an integer in [0, 100]."""
    if usage is None:
        return 0
    denominator = usage.prompt_tokens
    if denominator <= 0:
        return 0
    return usage.cache_read_tokens * 100 // denominator


def tokens_per_turn_k(usage: Optional[CurrentUsage], turn_count: int) -> Optional[float]:
    if turn_count <= 0:
        return None
    return used_tokens(usage) / turn_count / 1000


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def session_duration_seconds(
    start_time: str,
    now: datetime,
    fallback_epoch: Optional[float] = None,
) -> Optional[int]:
    """Seconds since the session started.

    An explicit start time wins; the transcript mtime is used only when no
    start time was given. Unparseable or non-positive results yield None.
    """
    if start_time:
        try:
            started = parse_timestamp(start_time)
        except UnparseableTimestamp:
            logger.debug("Unparseable session start %r", start_time, exc_info=True)
            return None
    elif fallback_epoch is not None:
        started = datetime.fromtimestamp(fallback_epoch, tz=timezone.utc)
    else:
        return None

    seconds = int((_as_utc(now) - started).total_seconds())
    return seconds if seconds > 0 else None


def reset_countdown_seconds(reference_epoch: Optional[float], now: datetime) -> Optional[int]:
    """Seconds left in the rolling 24h usage window anchored at reference_epoch."""
    if reference_epoch is None:
        return None
    elapsed = int(_as_utc(now).timestamp() - reference_epoch)
    return RESET_WINDOW_SECONDS - (elapsed % RESET_WINDOW_SECONDS)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def compute_metrics(
    snapshot: MetricsSnapshot,
    now: datetime,
    cost_strategy: CostStrategy | None = None,
    transcript_mtime: Optional[float] = None,
) -> DerivedMetrics:
    """Compute every derived quantity for one render."""
    usage = snapshot.current_usage
    cost = (cost_strategy or AutoCost()).compute(snapshot)

    return DerivedMetrics(
        used_tokens=used_tokens(usage),
        usage_percent=usage_percent(usage, snapshot.context_window_size),
        cache_percent=cache_percent(usage),
        tokens_per_turn_k=tokens_per_turn_k(usage, snapshot.turn_count),
        cost_usd=cost.usd if cost is not None else None,
        cost_cents=cost.cents if cost is not None else None,
        session_duration_seconds=session_duration_seconds(
            snapshot.session_start_time, now, fallback_epoch=transcript_mtime,
        ),
        reset_countdown_seconds=reset_countdown_seconds(transcript_mtime, now),
    )
