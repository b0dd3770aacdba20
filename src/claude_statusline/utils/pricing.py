"""Per-model token prices and integer-cent cost calculation."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ModelPrice:
    input: Decimal   # USD per 1M tokens
    output: Decimal


OPUS = ModelPrice(input=Decimal("15"), output=Decimal("75"))
SONNET = ModelPrice(input=Decimal("3"), output=Decimal("15"))
HAIKU = ModelPrice(input=Decimal("0.25"), output=Decimal("1.25"))

# Substring → price, in match priority order. Versioned names come first so
# "opus-4" wins over the bare "opus" entry.
MODEL_PRICES: tuple[tuple[str, ModelPrice], ...] = (
    ("opus-4", OPUS),
    ("sonnet-4", SONNET),
    ("opus", OPUS),
    ("sonnet", SONNET),
    ("haiku", HAIKU),
)
DEFAULT_PRICE = SONNET

_TOKENS_PER_PRICE_UNIT = 1_000_000


def match_model(model_id: str) -> ModelPrice:
    """Match a model id to its price pair, falling back to sonnet pricing."""
    lowered = (model_id or "").lower()
    for needle, price in MODEL_PRICES:
        if needle in lowered:
            return price
    return DEFAULT_PRICE


def token_cost_cents(tokens: int, price_per_million: Decimal) -> int:
    """Whole cents for a token count, truncated: tokens × price × 100 // 1M."""
    return int(Decimal(tokens) * price_per_million * 100 // _TOKENS_PER_PRICE_UNIT)


def calculate_cost_cents(input_tokens: int, output_tokens: int, model_id: str) -> int:
    """Session cost in cents; input and output are truncated separately, then summed."""
    price = match_model(model_id)
    return (token_cost_cents(input_tokens, price.input)
            + token_cost_cents(output_tokens, price.output))
