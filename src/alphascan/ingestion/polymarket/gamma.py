"""Polymarket Gamma API client - market discovery and normalization."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httpx
import structlog

from alphascan.ingestion.normalize import as_float, as_str, parse_iso_datetime
from alphascan.models import Market, Platform, clamp
from alphascan.ranking.arbitrage import dedupe_markets

log = structlog.get_logger(__name__)

GAMMA_API_BASE = "https://gamma-api.polymarket.com"
MARKET_URL_PREFIX = "https://polymarket.com/market/"


def decode_outcome_prices(raw: str | list[Any] | None) -> float | None:
    """YES price from Gamma ``outcomePrices``.

    The field arrives as a JSON-encoded string, a list, or null. Only the first
    entry (YES) is read; anything non-numeric decodes to None.
    """
    if raw is None:
        return None
    if isinstance(raw, list):
        return as_float(raw[0]) if raw else None
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return None
        if isinstance(parsed, list) and parsed:
            return as_float(parsed[0])
    return None


def parse_market(raw: dict[str, Any]) -> Market:
    """Convert Gamma API market object to canonical Market."""
    yes = decode_outcome_prices(raw.get("outcomePrices"))
    yes_price = clamp(yes if yes is not None else 0.5, 0.0, 1.0)
    slug = as_str(raw.get("slug"))
    return Market(
        id=str(raw.get("id", "")),
        platform=Platform.POLYMARKET,
        question=raw.get("question") or "",
        yes_price=yes_price,
        no_price=1.0 - yes_price,
        volume=as_float(raw.get("volume")),
        volume_24h=as_float(raw.get("volume24hr")),
        liquidity=as_float(raw.get("liquidityNum") or raw.get("liquidity")),
        category=as_str(raw.get("category")),
        end_date=parse_iso_datetime(raw.get("endDate")),
        url=f"{MARKET_URL_PREFIX}{slug}" if slug else None,
        is_resolved=bool(raw.get("closed") or False),
    )


def _parse_rows(data: Any) -> list[Market]:
    if not isinstance(data, list):
        return []
    markets = []
    for row in data:
        if not isinstance(row, dict):
            continue
        try:
            markets.append(parse_market(row))
        except ValueError as e:
            log.warning("skip_market", venue="polymarket", market_id=row.get("id"), error=str(e))
    return markets


def fetch_markets(
    base_url: str | None = None,
    limit: int = 100,
    offset: int | None = None,
    closed: bool | None = False,
    volume_min: float | None = None,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> list[Market]:
    """Fetch markets from Gamma API and return canonical Market list. Raises httpx.HTTPError."""
    url = (base_url or GAMMA_API_BASE).rstrip("/") + "/markets"
    params: dict[str, Any] = {"limit": limit}
    if offset is not None:
        params["offset"] = offset
    if closed is not None:
        params["closed"] = str(closed).lower()
    if volume_min is not None:
        params["volume_num_min"] = volume_min
    with httpx.Client(timeout=timeout, transport=transport) as client:
        resp = client.get(url, params=params)
        resp.raise_for_status()
        data = resp.json()
    return _parse_rows(data)


def search_markets(
    query: str | None = None,
    limit: int = 50,
    volume_min: float | None = None,
    **kwargs: Any,
) -> list[Market]:
    """Open markets whose question or category contains ``query`` (case-insensitive)."""
    markets = fetch_markets(limit=int(clamp(limit, 1, 200)), closed=False, volume_min=volume_min, **kwargs)
    if not query:
        return markets
    q = query.lower()
    return [m for m in markets if q in m.question.lower() or q in (m.category or "").lower()]


def get_market_by_slug(
    slug: str,
    base_url: str | None = None,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> Market | None:
    trimmed = slug.strip()
    if not trimmed:
        return None
    url = (base_url or GAMMA_API_BASE).rstrip("/") + "/markets"
    with httpx.Client(timeout=timeout, transport=transport) as client:
        resp = client.get(url, params={"slug": trimmed})
    if resp.status_code != 200:
        return None
    markets = _parse_rows(resp.json())
    return markets[0] if markets else None


def get_trending_markets(limit: int = 20, **kwargs: Any) -> list[Market]:
    """Open markets sorted by 24h volume desc."""
    markets = fetch_markets(limit=int(clamp(limit, 1, 100)), closed=False, **kwargs)
    markets.sort(key=lambda m: m.volume_24h or 0.0, reverse=True)
    return markets


def fetch_market_pages(limit: int = 100, **kwargs: Any) -> list[Market]:
    """Fetch two listing pages in parallel and merge them, first occurrence of an id wins.

    A failed page contributes nothing.
    """
    half = (limit + 1) // 2

    def _page(offset: int) -> list[Market]:
        try:
            return fetch_markets(limit=half, offset=offset, closed=False, **kwargs)
        except (httpx.HTTPError, ValueError) as e:
            log.warning("page_fetch_failed", venue="polymarket", offset=offset, error=str(e))
            return []

    with ThreadPoolExecutor(max_workers=2) as pool:
        pages = list(pool.map(_page, [0, half]))
    return dedupe_markets(pages[0] + pages[1])
