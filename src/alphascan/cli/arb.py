"""Arb subcommand: scan."""

from __future__ import annotations

import json

import typer

from alphascan.arbitrage.engine import scan_venues

app = typer.Typer(help="Cross-venue prediction-market arbitrage")


@app.command("scan")
def scan(
    ctx: typer.Context,
    min_similarity: float | None = typer.Option(
        None, "--min-similarity", min=0, max=1, help="Question similarity floor (overrides config)"
    ),
    min_spread: float | None = typer.Option(
        None, "--min-spread", min=0, max=1, help="Spread/profit floor (overrides config)"
    ),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Max opportunities"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
) -> None:
    """Fetch trending Polymarket and Manifold markets and list arbitrage opportunities."""
    settings = ctx.obj["settings"]
    result = scan_venues(settings, min_similarity=min_similarity, min_spread=min_spread, limit=limit)
    if as_json:
        typer.echo(json.dumps([o.model_dump(mode="json") for o in result.opportunities], indent=2))
        return
    typer.echo(f"Markets: polymarket={result.markets_a}  manifold={result.markets_b}")
    for o in result.opportunities:
        profit = f"{o.implied_profit * 100:.1f}%" if o.implied_profit is not None else "-"
        typer.echo(
            f"  {o.composite_score:6.2f}  profit={profit:>6}  "
            f"YES@{o.best_yes_buy.market.platform.value} {o.best_yes_buy.price:.2f}  "
            f"NO@{o.best_no_buy.market.platform.value} {o.best_no_buy.price:.2f}  "
            f"{o.question[:60]}"
        )
    typer.echo(f"Total: {len(result.opportunities)} opportunities")
