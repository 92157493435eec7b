"""Cross-venue arbitrage engine - match, derive, score, filter, rank."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial

import httpx
import structlog

from alphascan.config import Settings
from alphascan.ingestion.base import MarketFetcher
from alphascan.ingestion.manifold import client as manifold
from alphascan.ingestion.polymarket import gamma
from alphascan.matching.questions import match_markets
from alphascan.metrics.arbitrage import compute_arb_for_pair
from alphascan.models import ArbitrageOpportunity, Market
from alphascan.ranking.arbitrage import dedupe_markets, passes_min_spread, rank_opportunities
from alphascan.scoring.arbitrage import score_opportunity

log = structlog.get_logger(__name__)

DEFAULT_MIN_SIMILARITY = 0.75
DEFAULT_MIN_SPREAD = 0.01


def find_arbitrage_opportunities(
    markets_a: list[Market],
    markets_b: list[Market],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    min_spread: float = DEFAULT_MIN_SPREAD,
    limit: int | None = None,
    now: datetime | None = None,
) -> list[ArbitrageOpportunity]:
    """Ranked arbitrage opportunities between venue A and venue B markets.

    Resolved markets are ignored and repeated (platform, id) records collapse
    to their first occurrence. Empty input on either side yields [].
    """
    live_a = dedupe_markets([m for m in markets_a if m.is_live])
    live_b = dedupe_markets([m for m in markets_b if m.is_live])
    if not live_a or not live_b:
        return []

    opportunities: list[ArbitrageOpportunity] = []
    for a, b, sim in match_markets(live_a, live_b, min_similarity):
        opp = compute_arb_for_pair(a, b, sim)
        if opp is None or not passes_min_spread(opp, min_spread):
            continue
        opportunities.append(score_opportunity(opp, now))

    ranked = rank_opportunities(opportunities, limit)
    log.debug(
        "arbitrage_matched",
        markets_a=len(live_a),
        markets_b=len(live_b),
        candidates=len(opportunities),
        returned=len(ranked),
    )
    return ranked


@dataclass
class ArbitrageScan:
    """Result of a live two-venue scan."""

    opportunities: list[ArbitrageOpportunity] = field(default_factory=list)
    markets_a: int = 0
    markets_b: int = 0


def _safe_fetch(venue: str, fetch: MarketFetcher) -> list[Market]:
    try:
        return fetch()
    except (httpx.HTTPError, ValueError) as e:
        log.warning("venue_fetch_failed", venue=venue, error=str(e))
        return []


def scan_venues(
    settings: Settings,
    min_similarity: float | None = None,
    min_spread: float | None = None,
    limit: int | None = None,
    fetch_a: MarketFetcher | None = None,
    fetch_b: MarketFetcher | None = None,
) -> ArbitrageScan:
    """Fetch Polymarket (A) and Manifold (B) trending markets in parallel, then run the engine.

    A venue that fails to fetch contributes no markets.
    """
    fetch_a = fetch_a or partial(
        gamma.get_trending_markets,
        settings.arb_fetch_limit,
        base_url=settings.polymarket_api_base,
        timeout=settings.http_timeout_sec,
    )
    fetch_b = fetch_b or partial(
        manifold.get_trending_markets,
        settings.arb_fetch_limit,
        base_url=settings.manifold_api_base,
        timeout=settings.http_timeout_sec,
    )
    with ThreadPoolExecutor(max_workers=2) as pool:
        fut_a = pool.submit(_safe_fetch, "polymarket", fetch_a)
        fut_b = pool.submit(_safe_fetch, "manifold", fetch_b)
        markets_a, markets_b = fut_a.result(), fut_b.result()

    opportunities = find_arbitrage_opportunities(
        markets_a,
        markets_b,
        min_similarity=settings.arb_min_similarity if min_similarity is None else min_similarity,
        min_spread=settings.arb_min_spread if min_spread is None else min_spread,
        limit=settings.arb_limit if limit is None else limit,
    )
    log.info(
        "arbitrage_scan",
        polymarket=len(markets_a),
        manifold=len(markets_b),
        opportunities=len(opportunities),
    )
    return ArbitrageScan(opportunities=opportunities, markets_a=len(markets_a), markets_b=len(markets_b))
