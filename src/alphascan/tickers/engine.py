"""Same-ticker token discovery - group pairs by mint, pick best pair, score clone risk, rank."""

from __future__ import annotations

import time

import structlog

from alphascan.ingestion.base import PairSource
from alphascan.matching.tickers import (
    MintBucket,
    group_pairs_by_mint,
    normalize_symbol,
    on_chain,
    sort_pairs,
    token_from_pair,
)
from alphascan.models import DexPair, TokenTickerDiscovery, TokenTickerMatch
from alphascan.models.token import DiscoveryMode
from alphascan.ranking.tickers import collect_pair_image_uris, merge_image_uris, rank_matches
from alphascan.scoring.risk import CANONICAL_REASON, score_risk
from alphascan.validation import is_valid_solana_address

log = structlog.get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def resolve_mode(query: str, canonical_mint: str | None) -> DiscoveryMode:
    return "mint" if canonical_mint or is_valid_solana_address(query) else "ticker"


def resolve_ticker(
    direct_pairs: list[DexPair],
    mint: str,
    fallback_symbol: str | None = None,
    chain_id: str = "solana",
) -> str:
    """Ticker for ``mint``: the matching side of its best chain pair, else the hint, else the best base symbol."""
    chain_pairs = sort_pairs([p for p in direct_pairs if on_chain(p, chain_id)])
    for pair in chain_pairs:
        token = token_from_pair(pair, mint)
        if token is not None:
            symbol = normalize_symbol(token.symbol)
            if symbol:
                return symbol
            break
    hint = normalize_symbol(fallback_symbol)
    if hint:
        return hint
    if chain_pairs and chain_pairs[0].base_token:
        return normalize_symbol(chain_pairs[0].base_token.symbol)
    return ""


def _match_from_pairs(
    pairs: list[DexPair],
    mint: str,
    symbol: str,
    name: str | None,
    is_exact_mint_match: bool,
    now_ms: int,
) -> TokenTickerMatch:
    ordered = sort_pairs(pairs)
    best = ordered[0]
    image_uris = merge_image_uris(*(collect_pair_image_uris(p) for p in ordered))
    assessment = score_risk(best, len(ordered), is_exact_mint_match, now_ms)
    return TokenTickerMatch(
        symbol=symbol,
        mint=mint,
        name=name,
        image_uri=image_uris[0] if image_uris else None,
        image_uris=image_uris,
        dex_id=best.dex_id,
        pair_address=best.pair_address,
        url=best.url,
        price_usd=best.price_usd,
        liquidity_usd=best.liquidity_usd or 0.0,
        volume_24h_usd=best.volume_24h_usd or 0.0,
        fdv_usd=best.fdv,
        market_cap_usd=best.market_cap,
        pair_created_at=best.pair_created_at,
        pair_count=len(ordered),
        is_exact_mint_match=is_exact_mint_match,
        risk=assessment.risk,
        risk_reasons=assessment.reasons,
    )


def _bucket_name(bucket: MintBucket) -> str | None:
    if bucket.name:
        return bucket.name
    best = sort_pairs(bucket.pairs)[0]
    for token in (best.base_token, best.quote_token):
        if token is not None and token.name:
            return token.name
    return None


def build_matches(
    pairs: list[DexPair],
    ticker: str,
    canonical_mint: str | None = None,
    chain_id: str = "solana",
    now_ms: int | None = None,
) -> list[TokenTickerMatch]:
    """One ranked match per distinct mint carrying ``ticker`` on ``chain_id``."""
    now_ms = now_ms or _now_ms()
    canonical = canonical_mint.lower() if canonical_mint else None
    matches = [
        _match_from_pairs(
            bucket.pairs,
            bucket.mint,
            ticker,
            _bucket_name(bucket),
            canonical is not None and bucket.mint.lower() == canonical,
            now_ms,
        )
        for bucket in group_pairs_by_mint(pairs, ticker, chain_id)
    ]
    return rank_matches(matches)


def canonical_match_from_direct_pairs(
    pairs: list[DexPair],
    mint: str,
    ticker: str,
    chain_id: str = "solana",
    now_ms: int | None = None,
) -> TokenTickerMatch:
    """Canonical record built from direct-mint pairs; a bare zero-pair record when none are on chain."""
    chain_pairs = [p for p in pairs if on_chain(p, chain_id) and token_from_pair(p, mint)]
    if not chain_pairs:
        return TokenTickerMatch(
            symbol=ticker,
            mint=mint,
            pair_count=0,
            is_exact_mint_match=True,
            risk="canonical",
            risk_reasons=[CANONICAL_REASON],
        )
    best = sort_pairs(chain_pairs)[0]
    token = token_from_pair(best, mint)
    return _match_from_pairs(
        chain_pairs,
        mint,
        normalize_symbol(token.symbol if token else None) or ticker,
        token.name if token else None,
        True,
        now_ms or _now_ms(),
    )


def find_tokens_by_ticker(
    query: str,
    canonical_mint: str | None = None,
    fallback_symbol: str | None = None,
    *,
    source: PairSource,
    chain_id: str = "solana",
    now_ms: int | None = None,
) -> TokenTickerDiscovery:
    """Discover every mint sharing the query's ticker and rank them canonical-first by clone risk.

    ``query`` may be a mint address or a free-text ticker. In mint mode the
    canonical mint (caller-supplied, else the query) is always present in the
    result, synthesized from its direct pairs when the ticker search misses it.
    """
    query = query.strip()
    canonical_mint = (canonical_mint or "").strip() or None
    mode = resolve_mode(query, canonical_mint)
    now_ms = now_ms or _now_ms()

    direct_pairs: list[DexPair] = []
    effective_mint: str | None = None
    if mode == "mint":
        effective_mint = canonical_mint or query
        direct_pairs = source.get_pairs_by_mint(effective_mint)
        pairs = direct_pairs
        ticker = resolve_ticker(direct_pairs, effective_mint, fallback_symbol, chain_id)
        if ticker:
            search_pairs = source.search_pairs(ticker)
            if search_pairs:
                pairs = search_pairs
    else:
        ticker = normalize_symbol(query) or normalize_symbol(fallback_symbol)
        pairs = source.search_pairs(ticker) if ticker else []

    matches = build_matches(pairs, ticker, effective_mint, chain_id, now_ms) if ticker else []
    if effective_mint and not any(m.mint.lower() == effective_mint.lower() for m in matches):
        matches.insert(
            0,
            canonical_match_from_direct_pairs(direct_pairs, effective_mint, ticker, chain_id, now_ms),
        )

    log.debug(
        "ticker_discovery",
        mode=mode,
        ticker=ticker,
        raw_pairs=len(pairs),
        matches=len(matches),
    )
    return TokenTickerDiscovery(
        mode=mode,
        query=query,
        ticker=ticker,
        canonical_mint=effective_mint,
        raw_pair_count=len(pairs),
        matches=matches,
    )
