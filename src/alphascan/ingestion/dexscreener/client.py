"""DexScreener REST client - pair lookup by mint and ticker search.

Every fetch degrades to an empty list: timeouts, non-200 responses and
malformed bodies are logged and swallowed here so the ticker engine only ever
sees (possibly empty) pair lists.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from alphascan.ingestion.normalize import as_float, as_int, as_str
from alphascan.models import DexPair, DexToken
from alphascan.ranking.tickers import dedupe_pairs

log = structlog.get_logger(__name__)

DEXSCREENER_API_BASE = "https://api.dexscreener.com"
REQUEST_TIMEOUT_SEC = 8.0


def _parse_token(raw: Any) -> DexToken | None:
    if not isinstance(raw, dict):
        return None
    return DexToken(
        address=as_str(raw.get("address")),
        symbol=as_str(raw.get("symbol")),
        name=as_str(raw.get("name")),
    )


def _nested(raw: dict[str, Any], key: str, field: str) -> Any:
    inner = raw.get(key)
    return inner.get(field) if isinstance(inner, dict) else None


def parse_pair(raw: Any) -> DexPair | None:
    """Convert DexScreener pair object to DexPair. Malformed numerics become None."""
    if not isinstance(raw, dict):
        return None
    return DexPair(
        chain_id=as_str(raw.get("chainId")),
        dex_id=as_str(raw.get("dexId")),
        url=as_str(raw.get("url")),
        pair_address=as_str(raw.get("pairAddress")),
        base_token=_parse_token(raw.get("baseToken")),
        quote_token=_parse_token(raw.get("quoteToken")),
        liquidity_usd=as_float(_nested(raw, "liquidity", "usd")),
        volume_24h_usd=as_float(_nested(raw, "volume", "h24")),
        price_usd=as_float(raw.get("priceUsd")),
        fdv=as_float(raw.get("fdv")),
        market_cap=as_float(raw.get("marketCap")),
        pair_created_at=as_int(raw.get("pairCreatedAt")),
        image_url=as_str(_nested(raw, "info", "imageUrl")),
        header=as_str(_nested(raw, "info", "header")),
        open_graph=as_str(_nested(raw, "info", "openGraph")),
    )


def parse_pairs_response(data: Any) -> list[DexPair]:
    """``{"pairs": [...]}`` -> DexPair list; any other shape -> []."""
    if not isinstance(data, dict):
        return []
    rows = data.get("pairs")
    if not isinstance(rows, list):
        return []
    pairs = []
    for row in rows:
        pair = parse_pair(row)
        if pair is not None:
            pairs.append(pair)
    return pairs


class DexScreenerClient:
    """PairSource backed by the public DexScreener API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = REQUEST_TIMEOUT_SEC,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or DEXSCREENER_API_BASE).strip().rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _fetch_pairs(self, path: str, params: dict[str, str] | None = None) -> list[DexPair]:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.get(
                    f"{self.base_url}{path}",
                    params=params,
                    headers={"Accept": "application/json"},
                )
            if resp.status_code != 200:
                log.warning("dexscreener_bad_status", path=path, status=resp.status_code)
                return []
            return parse_pairs_response(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            log.warning("dexscreener_fetch_failed", path=path, error=str(e))
            return []

    def get_pairs_by_mint(self, mint: str) -> list[DexPair]:
        return self._fetch_pairs(f"/latest/dex/tokens/{quote(mint.strip(), safe='')}")

    def search_pairs_by_ticker(self, ticker: str) -> list[DexPair]:
        return self._fetch_pairs("/latest/dex/search", params={"q": ticker.strip()})

    def search_pairs(self, ticker: str) -> list[DexPair]:
        """Search ``TICKER`` and ``$TICKER`` in parallel; merged and deduplicated."""
        if not ticker:
            return []
        with ThreadPoolExecutor(max_workers=2) as pool:
            plain, prefixed = pool.map(self.search_pairs_by_ticker, [ticker, f"${ticker}"])
        return dedupe_pairs(plain + prefixed)
