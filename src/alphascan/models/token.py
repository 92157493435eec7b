"""DexToken, DexPair, TokenTickerMatch, TokenTickerDiscovery - canonical DEX entities."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RiskLevel = Literal["canonical", "low", "medium", "high"]
DiscoveryMode = Literal["mint", "ticker"]


class DexToken(BaseModel):
    """One side (base or quote) of a trading pair."""

    model_config = ConfigDict(frozen=True)

    address: str | None = None
    symbol: str | None = None
    name: str | None = None


class DexPair(BaseModel):
    """Trading pool/listing between two tokens on one exchange."""

    model_config = ConfigDict(frozen=True)

    chain_id: str | None = None
    dex_id: str | None = None
    url: str | None = None
    pair_address: str | None = None
    base_token: DexToken | None = None
    quote_token: DexToken | None = None
    liquidity_usd: float | None = None
    volume_24h_usd: float | None = None
    price_usd: float | None = None
    fdv: float | None = None
    market_cap: float | None = None
    pair_created_at: int | None = None  # ms epoch
    image_url: str | None = None
    header: str | None = None
    open_graph: str | None = None


class TokenTickerMatch(BaseModel):
    """One distinct mint sharing the queried ticker, with its best pair and risk band."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    mint: str
    name: str | None = None
    image_uri: str | None = None
    image_uris: list[str] = Field(default_factory=list)
    dex_id: str | None = None
    pair_address: str | None = None
    url: str | None = None
    price_usd: float | None = None
    liquidity_usd: float | None = None
    volume_24h_usd: float | None = None
    fdv_usd: float | None = None
    market_cap_usd: float | None = None
    pair_created_at: int | None = None
    pair_count: int = 0
    is_exact_mint_match: bool = False
    risk: RiskLevel = "low"
    risk_reasons: list[str] = Field(default_factory=list)


class TokenTickerDiscovery(BaseModel):
    """Query envelope for a ticker discovery call."""

    model_config = ConfigDict(frozen=True)

    mode: DiscoveryMode
    query: str
    ticker: str
    canonical_mint: str | None = None
    raw_pair_count: int = 0
    matches: list[TokenTickerMatch] = Field(default_factory=list)
