"""Shared factories for canonical records."""

from datetime import datetime, timezone

import pytest
import structlog

from alphascan.models import DexPair, DexToken, Market, Platform

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)
NOW_MS = int(NOW.timestamp() * 1000)
HOUR_MS = 60 * 60 * 1000

MINT_CANONICAL = "So11111111111111111111111111111111111111112"
MINT_FAKE_A = "FakeMint1111111111111111111111111111111111111"
MINT_FAKE_B = "FakeMint2222222222222222222222222222222222222"


@pytest.fixture
def make_market():
    def _make(
        market_id: str,
        platform: Platform | str = Platform.POLYMARKET,
        question: str = "Will BTC hit 100k?",
        yes: float = 0.5,
        no: float = 0.5,
        **kwargs,
    ) -> Market:
        return Market(id=market_id, platform=platform, question=question, yes_price=yes, no_price=no, **kwargs)

    return _make


@pytest.fixture
def make_pair():
    def _make(
        mint: str,
        symbol: str = "BONK",
        *,
        liquidity: float | None = 100_000,
        volume: float | None = 50_000,
        age_hours: float | None = 24 * 30,
        fdv: float | None = None,
        chain: str = "solana",
        pair_address: str | None = None,
        name: str | None = None,
        quote: DexToken | None = None,
        as_quote: bool = False,
        image_url: str | None = None,
        header: str | None = None,
        open_graph: str | None = None,
    ) -> DexPair:
        token = DexToken(address=mint, symbol=symbol, name=name)
        other = quote or DexToken(
            address="So11111111111111111111111111111111111111111", symbol="SOL", name="Wrapped SOL"
        )
        base_token, quote_token = (other, token) if as_quote else (token, other)
        return DexPair(
            chain_id=chain,
            dex_id="raydium",
            url=f"https://dexscreener.com/{chain}/{(pair_address or mint).lower()}",
            pair_address=pair_address or f"Pair{mint[:12]}",
            base_token=base_token,
            quote_token=quote_token,
            liquidity_usd=liquidity,
            volume_24h_usd=volume,
            fdv=fdv,
            pair_created_at=int(NOW_MS - age_hours * HOUR_MS) if age_hours is not None else None,
            image_url=image_url,
            header=header,
            open_graph=open_graph,
        )

    return _make


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
