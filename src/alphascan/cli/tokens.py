"""Tokens subcommand: find."""

from __future__ import annotations

import typer

from alphascan.ingestion.dexscreener.client import DexScreenerClient
from alphascan.tickers.engine import find_tokens_by_ticker

app = typer.Typer(help="Same-ticker token discovery and clone risk")


@app.command("find")
def find(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Ticker (e.g. BONK) or mint address"),
    mint: str | None = typer.Option(None, "--mint", help="Known canonical mint"),
    symbol: str | None = typer.Option(None, "--symbol", help="Fallback ticker symbol"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
) -> None:
    """List every mint sharing the ticker, canonical first, riskiest clones next."""
    settings = ctx.obj["settings"]
    source = DexScreenerClient(
        base_url=settings.dexscreener_api_base,
        timeout=settings.dexscreener_timeout_sec,
    )
    result = find_tokens_by_ticker(
        query,
        canonical_mint=mint,
        fallback_symbol=symbol,
        source=source,
        chain_id=settings.chain_id,
    )
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    typer.echo(f"Mode: {result.mode}  Ticker: {result.ticker or '-'}  Raw pairs: {result.raw_pair_count}")
    for m in result.matches:
        typer.echo(
            f"  {m.risk:<9}  {m.mint}  liq=${m.liquidity_usd or 0:,.0f}  "
            f"vol24h=${m.volume_24h_usd or 0:,.0f}  pairs={m.pair_count}  "
            f"{'; '.join(m.risk_reasons)}"
        )
    typer.echo(f"Total: {len(result.matches)} mints")
