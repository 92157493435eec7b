"""Manifold REST client - binary market discovery and normalization."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from alphascan.ingestion.normalize import as_float, as_str, ms_to_datetime
from alphascan.models import Market, Platform, clamp

log = structlog.get_logger(__name__)

MANIFOLD_API_BASE = "https://api.manifold.markets"


def parse_market(raw: dict[str, Any]) -> Market:
    """Convert Manifold LiteMarket object to canonical Market."""
    prob = as_float(raw.get("probability"))
    yes_price = clamp(prob if prob is not None else 0.5, 0.0, 1.0)
    return Market(
        id=str(raw.get("id", "")),
        platform=Platform.MANIFOLD,
        question=raw.get("question") or "",
        yes_price=yes_price,
        no_price=1.0 - yes_price,
        volume=as_float(raw.get("volume")),
        volume_24h=as_float(raw.get("volume24Hours")),
        liquidity=as_float(raw.get("totalLiquidity")),
        end_date=ms_to_datetime(raw.get("closeTime")),
        url=as_str(raw.get("url")),
        is_resolved=bool(raw.get("isResolved") or False),
    )


def _binary_markets(data: Any) -> list[Market]:
    if not isinstance(data, list):
        return []
    markets = []
    for row in data:
        if not isinstance(row, dict) or row.get("outcomeType") != "BINARY":
            continue
        try:
            markets.append(parse_market(row))
        except ValueError as e:
            log.warning("skip_market", venue="manifold", market_id=row.get("id"), error=str(e))
    return markets


def fetch_markets(
    base_url: str | None = None,
    limit: int = 100,
    sort: str | None = None,
    term: str | None = None,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> list[Market]:
    """Fetch markets and keep BINARY ones as canonical Market list. Raises httpx.HTTPError."""
    url = (base_url or MANIFOLD_API_BASE).rstrip("/") + "/v0/markets"
    params: dict[str, Any] = {"limit": limit}
    if sort:
        params["sort"] = sort
    if term:
        params["term"] = term
    with httpx.Client(timeout=timeout, transport=transport) as client:
        resp = client.get(url, params=params)
        resp.raise_for_status()
        data = resp.json()
    return _binary_markets(data)


def search_markets(
    query: str | None = None,
    limit: int = 50,
    sort: str = "created-time",
    **kwargs: Any,
) -> list[Market]:
    return fetch_markets(limit=int(clamp(limit, 1, 1000)), sort=sort, term=query, **kwargs)


def get_market_by_id(
    market_id: str,
    base_url: str | None = None,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> Market | None:
    trimmed = market_id.strip()
    if not trimmed:
        return None
    url = (base_url or MANIFOLD_API_BASE).rstrip("/") + f"/v0/market/{quote(trimmed, safe='')}"
    with httpx.Client(timeout=timeout, transport=transport) as client:
        resp = client.get(url)
    if resp.status_code != 200:
        return None
    markets = _binary_markets([resp.json()])
    return markets[0] if markets else None


def get_trending_markets(limit: int = 20, **kwargs: Any) -> list[Market]:
    """Binary markets ordered by most recent bet."""
    return fetch_markets(limit=int(clamp(limit, 1, 200)), sort="last-bet-time", **kwargs)
