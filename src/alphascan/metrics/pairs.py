"""Derived DEX pair signals - age, FDV/liquidity ratio."""

from __future__ import annotations

from alphascan.models import DexPair

_MS_PER_HOUR = 1000 * 60 * 60


def pair_age_hours(pair: DexPair, now_ms: int) -> float | None:
    """Hours since pair creation; None when the creation time is unknown."""
    if not pair.pair_created_at:
        return None
    return (now_ms - pair.pair_created_at) / _MS_PER_HOUR


def fdv_liquidity_ratio(pair: DexPair) -> float | None:
    liq = pair.liquidity_usd or 0.0
    if not pair.fdv or liq <= 0:
        return None
    return pair.fdv / liq
