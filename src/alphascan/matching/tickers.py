"""Ticker matching - symbol normalization and per-mint bucketing of DEX pairs."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from alphascan.models import DexPair, DexToken
from alphascan.validation import is_valid_solana_address

_RE_TICKER = re.compile(r"^[A-Za-z0-9._-]{1,20}$")


def normalize_symbol(value: str | None) -> str:
    return value.strip().upper() if value else ""


def is_likely_ticker_query(value: str) -> bool:
    """Non-empty, not a chain address, short symbol-like token."""
    s = value.strip()
    if not s or is_valid_solana_address(s):
        return False
    return bool(_RE_TICKER.match(s))


def on_chain(pair: DexPair, chain_id: str) -> bool:
    return (pair.chain_id or "").lower() == chain_id.lower()


def token_from_pair(pair: DexPair, mint: str) -> DexToken | None:
    """The side of ``pair`` whose address equals ``mint`` (case-insensitive)."""
    lower = mint.lower()
    for token in (pair.base_token, pair.quote_token):
        if token is not None and (token.address or "").lower() == lower:
            return token
    return None


def pair_sort_key(pair: DexPair) -> tuple[float, float, float]:
    """Best-first ordering: liquidity desc, 24h volume desc, newest first."""
    return (
        -(pair.liquidity_usd or 0.0),
        -(pair.volume_24h_usd or 0.0),
        -(pair.pair_created_at or 0),
    )


def sort_pairs(pairs: list[DexPair]) -> list[DexPair]:
    return sorted(pairs, key=pair_sort_key)


@dataclass
class MintBucket:
    """Pairs collapsed onto one mint for a ticker."""

    mint: str
    pairs: list[DexPair] = field(default_factory=list)
    name: str | None = None


def group_pairs_by_mint(pairs: list[DexPair], ticker: str, chain_id: str = "solana") -> list[MintBucket]:
    """Bucket chain pairs by the mint of every leg whose symbol equals ``ticker``.

    A pair whose base and quote both carry the ticker lands in two buckets.
    Buckets are keyed by the exact mint (base58 is case-sensitive) and keep
    first-seen order and the first non-empty name.
    """
    buckets: dict[str, MintBucket] = {}
    if not ticker:
        return []
    for pair in pairs:
        if not on_chain(pair, chain_id):
            continue
        for token in (pair.base_token, pair.quote_token):
            if token is None or not token.address:
                continue
            if normalize_symbol(token.symbol) != ticker:
                continue
            bucket = buckets.setdefault(token.address, MintBucket(mint=token.address))
            bucket.pairs.append(pair)
            if not bucket.name and token.name:
                bucket.name = token.name
    return list(buckets.values())
