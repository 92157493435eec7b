"""Source protocols for pluggable collaborators (prediction venues, DEX pair search)."""

from __future__ import annotations

from typing import Callable, Protocol

from alphascan.models import DexPair, Market

# Zero-arg venue fetch, e.g. functools.partial(gamma.get_trending_markets, 100)
MarketFetcher = Callable[[], list[Market]]


class PairSource(Protocol):
    """Protocol for DEX pair lookup. Implementations return [] on any fetch failure."""

    def get_pairs_by_mint(self, mint: str) -> list[DexPair]: ...
    def search_pairs(self, ticker: str) -> list[DexPair]: ...
