"""Arbitrage heuristics - AI-edge keyword score, resolution urgency, composite rank score."""

from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable

from alphascan.matching.questions import normalize_question
from alphascan.models import ArbitrageOpportunity, Market

# Quantifiable, data-rich topics. Matched as whole words/phrases on the normalized question.
AI_EDGE_KEYWORDS = MappingProxyType(
    {
        "crypto": (
            "bitcoin", "btc", "ethereum", "eth", "solana", "sol", "crypto",
            "xrp", "dogecoin", "stablecoin", "etf",
        ),
        "macro": (
            "fed", "interest rate", "rate cut", "inflation", "cpi", "recession",
            "gdp", "unemployment", "tariff", "s p 500",
        ),
        "sports": (
            "nba", "nfl", "mlb", "nhl", "super bowl", "world cup",
            "champions league", "playoffs", "finals", "premier league",
        ),
        "tech": (
            "ai", "openai", "chatgpt", "nvidia", "apple", "tesla", "spacex",
            "google", "microsoft",
        ),
        "elections": (
            "election", "president", "presidential", "senate", "congress",
            "governor", "primary", "nominee", "mayor",
        ),
    }
)

_ALL_KEYWORDS = tuple(dict.fromkeys(kw for kws in AI_EDGE_KEYWORDS.values() for kw in kws))

# (max days to resolution, urgency), checked in order
URGENCY_BANDS = ((1, 1.0), (7, 0.8), (30, 0.5), (90, 0.3))
URGENCY_FLOOR = 0.1

PROFIT_WEIGHT = 50.0
AI_EDGE_WEIGHT = 30.0
URGENCY_WEIGHT = 20.0


def keyword_hits(question: str) -> int:
    padded = f" {normalize_question(question)} "
    return sum(1 for kw in _ALL_KEYWORDS if f" {kw} " in padded)


def ai_edge_score(question: str) -> float:
    """0 hits -> 0; 1 hit -> 0.3; +0.2 per extra hit, capped at 1."""
    hits = keyword_hits(question)
    if hits == 0:
        return 0.0
    return min(1.0, round(0.3 + 0.2 * (hits - 1), 10))


def urgency_score(markets: Iterable[Market], now: datetime | None = None) -> float:
    """Urgency from the soonest end date that is not already past."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    upcoming = [m.end_date for m in markets if m.end_date is not None and m.end_date >= now]
    if not upcoming:
        return URGENCY_FLOOR
    days = (min(upcoming) - now).total_seconds() / 86400
    for max_days, score in URGENCY_BANDS:
        if days <= max_days:
            return score
    return URGENCY_FLOOR


def composite_score(opp: ArbitrageOpportunity) -> float:
    return (
        (opp.implied_profit or 0.0) * PROFIT_WEIGHT
        + opp.ai_edge_score * AI_EDGE_WEIGHT
        + opp.urgency * URGENCY_WEIGHT
    )


def score_opportunity(opp: ArbitrageOpportunity, now: datetime | None = None) -> ArbitrageOpportunity:
    """Copy of ``opp`` with ai_edge_score, urgency and composite_score attached."""
    scored = opp.model_copy(
        update={
            "ai_edge_score": ai_edge_score(opp.question),
            "urgency": urgency_score(opp.markets, now),
        }
    )
    return scored.model_copy(update={"composite_score": composite_score(scored)})
