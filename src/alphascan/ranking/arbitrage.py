"""Dedup, threshold filtering and ordering for markets and arbitrage opportunities."""

from __future__ import annotations

from alphascan.models import ArbitrageOpportunity, Market
from alphascan.scoring.arbitrage import composite_score


def dedupe_markets(markets: list[Market]) -> list[Market]:
    """Drop repeated (platform, id) records; first occurrence wins."""
    seen: set[tuple[str, str]] = set()
    out: list[Market] = []
    for m in markets:
        key = (m.platform.value, m.id)
        if key in seen:
            continue
        seen.add(key)
        out.append(m)
    return out


def passes_min_spread(opp: ArbitrageOpportunity, min_spread: float) -> bool:
    return opp.max_abs_spread >= min_spread or (opp.implied_profit or 0.0) >= min_spread


def rank_opportunities(
    opportunities: list[ArbitrageOpportunity],
    limit: int | None = None,
) -> list[ArbitrageOpportunity]:
    """Composite score desc. Stable, so equal scores keep their input order."""
    ranked = sorted(opportunities, key=composite_score, reverse=True)
    return ranked[:limit] if limit is not None else ranked
