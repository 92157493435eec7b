"""Market, ArbitrageLeg, ArbitrageOpportunity - canonical prediction-market entities."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def clamp(value: Any, lo: float, hi: float) -> float:
    """Clamp a numeric value into [lo, hi]. NaN and non-numeric values map to lo."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return lo
    if math.isnan(v):
        return lo
    return min(max(v, lo), hi)


class Platform(str, Enum):
    """Known prediction-market venues."""

    POLYMARKET = "polymarket"
    MANIFOLD = "manifold"


class Market(BaseModel):
    """One venue's quote for a binary proposition. YES/NO are independent quotes in [0, 1]."""

    model_config = ConfigDict(frozen=True)

    id: str
    platform: Platform
    question: str = ""
    yes_price: float = 0.5
    no_price: float = 0.5
    volume: float | None = None
    volume_24h: float | None = None
    liquidity: float | None = None
    category: str | None = None
    end_date: datetime | None = None
    is_resolved: bool = False
    url: str | None = None

    @field_validator("yes_price", "no_price", mode="before")
    @classmethod
    def _clamp_price(cls, v: Any) -> float:
        return clamp(v, 0.0, 1.0)

    @field_validator("end_date")
    @classmethod
    def _end_date_utc(cls, v: datetime | None) -> datetime | None:
        """Naive end dates are taken as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def is_live(self) -> bool:
        """Unresolved markets without an end date are treated as indefinitely live."""
        return not self.is_resolved


class ArbitrageLeg(BaseModel):
    """One side of a position on one venue."""

    model_config = ConfigDict(frozen=True)

    market: Market
    side: Literal["YES", "NO"]
    price: float


class ArbitrageOpportunity(BaseModel):
    """Two matched markets across venues with derived spreads and scores."""

    model_config = ConfigDict(frozen=True)

    question: str
    markets: tuple[Market, Market]
    yes_spread: float
    no_spread: float
    best_yes_buy: ArbitrageLeg
    best_no_buy: ArbitrageLeg
    implied_profit: float | None = None
    similarity: float = Field(1.0, ge=0, le=1)
    ai_edge_score: float = Field(0.0, ge=0, le=1)
    urgency: float = Field(0.0, ge=0, le=1)
    composite_score: float = 0.0

    @property
    def max_abs_spread(self) -> float:
        return max(abs(self.yes_spread), abs(self.no_spread))
