"""Canonical schema (Pydantic) - Market, ArbitrageOpportunity, DexPair, TokenTickerMatch."""

from alphascan.models.market import (
    ArbitrageLeg,
    ArbitrageOpportunity,
    Market,
    Platform,
    clamp,
)
from alphascan.models.token import (
    DexPair,
    DexToken,
    TokenTickerDiscovery,
    TokenTickerMatch,
)

__all__ = [
    "Market",
    "Platform",
    "ArbitrageLeg",
    "ArbitrageOpportunity",
    "DexToken",
    "DexPair",
    "TokenTickerMatch",
    "TokenTickerDiscovery",
    "clamp",
]
