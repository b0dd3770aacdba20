"""Resolved render settings."""

from dataclasses import dataclass
from enum import Enum


class CostStrategyName(str, Enum):
    AUTO = "auto"
    SNAPSHOT = "snapshot"
    PRICE_TABLE = "price-table"


@dataclass(frozen=True)
class RenderSettings:
    default_width: int = 80
    glyph_buffer: int = 4
    indent: int = 2
    cost_strategy: CostStrategyName = CostStrategyName.AUTO
    git_enabled: bool = True
    git_timeout: float = 1.0
    input_timeout: float = 2.0
    debug_logging: bool = False
