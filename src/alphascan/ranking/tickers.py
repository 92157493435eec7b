"""Dedup and ordering for DEX pairs, image URIs and ticker matches."""

from __future__ import annotations

import re
from typing import Iterable

from alphascan.models import DexPair, TokenTickerMatch

_RE_IMAGE_SCHEME = re.compile(r"^(https?|ipfs)://", re.IGNORECASE)

# canonical first, then riskier clones ahead of quiet ones
RISK_ORDER = {"canonical": 0, "high": 1, "medium": 2, "low": 3}


def pair_dedup_key(pair: DexPair) -> tuple[str, ...]:
    base = pair.base_token.address if pair.base_token else None
    quote = pair.quote_token.address if pair.quote_token else None
    return tuple((v or "").lower() for v in (pair.pair_address, pair.url, pair.dex_id, base, quote))


def dedupe_pairs(pairs: list[DexPair]) -> list[DexPair]:
    seen: set[tuple[str, ...]] = set()
    out: list[DexPair] = []
    for pair in pairs:
        key = pair_dedup_key(pair)
        if key in seen:
            continue
        seen.add(key)
        out.append(pair)
    return out


def _normalize_image_uri(value: str | None) -> str | None:
    uri = value.strip() if value else ""
    return uri if uri and _RE_IMAGE_SCHEME.match(uri) else None


def merge_image_uris(*groups: Iterable[str | None] | None) -> list[str]:
    """Order-preserving union of http(s)/ipfs URIs, deduplicated case-insensitively."""
    seen: set[str] = set()
    out: list[str] = []
    for group in groups:
        if not group:
            continue
        for raw in group:
            uri = _normalize_image_uri(raw)
            if uri is None or uri.lower() in seen:
                continue
            seen.add(uri.lower())
            out.append(uri)
    return out


def collect_pair_image_uris(pair: DexPair) -> list[str]:
    return merge_image_uris([pair.image_url, pair.header, pair.open_graph])


def match_sort_key(match: TokenTickerMatch) -> tuple[int, int, float, float]:
    return (
        0 if match.is_exact_mint_match else 1,
        RISK_ORDER[match.risk],
        -(match.liquidity_usd or 0.0),
        -(match.volume_24h_usd or 0.0),
    )


def rank_matches(matches: list[TokenTickerMatch]) -> list[TokenTickerMatch]:
    return sorted(matches, key=match_sort_key)
