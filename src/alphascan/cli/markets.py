"""Markets subcommand: trending, browse, search, get."""

from __future__ import annotations

import httpx
import typer

from alphascan.config import Settings
from alphascan.ingestion.manifold import client as manifold
from alphascan.ingestion.polymarket import gamma
from alphascan.models import Market

app = typer.Typer(help="Prediction-market listing per venue")

VENUES = ("polymarket", "manifold")


def _check_venue(venue: str) -> None:
    if venue not in VENUES:
        typer.echo(f"Unknown venue: {venue}. Choose from: {', '.join(VENUES)}")
        raise typer.Exit(1)


def _venue_kwargs(settings: Settings, venue: str) -> dict:
    base_url = settings.polymarket_api_base if venue == "polymarket" else settings.manifold_api_base
    return {"base_url": base_url, "timeout": settings.http_timeout_sec}


def _echo_markets(markets: list[Market]) -> None:
    for m in markets:
        typer.echo(f"  {m.id[:20]:<20}  YES {m.yes_price:.2f}  NO {m.no_price:.2f}  {m.question[:60]}")
    typer.echo(f"Total: {len(markets)} markets")


@app.command("trending")
def trending(
    ctx: typer.Context,
    venue: str = typer.Option("polymarket", "--venue", "-v", help="polymarket or manifold"),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Max markets to fetch"),
) -> None:
    """List trending markets for one venue."""
    _check_venue(venue)
    kwargs = _venue_kwargs(ctx.obj["settings"], venue)
    fetch = gamma.get_trending_markets if venue == "polymarket" else manifold.get_trending_markets
    try:
        markets = fetch(limit, **kwargs)
    except httpx.HTTPError as e:
        typer.echo(f"Fetch failed: {e}")
        raise typer.Exit(1)
    _echo_markets(markets)


@app.command("browse")
def browse(
    ctx: typer.Context,
    limit: int = typer.Option(100, "--limit", "-n", min=2, help="Markets across both pages"),
) -> None:
    """Fetch two Polymarket listing pages in parallel, deduplicated."""
    markets = gamma.fetch_market_pages(limit, **_venue_kwargs(ctx.obj["settings"], "polymarket"))
    _echo_markets(markets)


@app.command("search")
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Search text"),
    venue: str = typer.Option("polymarket", "--venue", "-v", help="polymarket or manifold"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Max markets to fetch"),
) -> None:
    """Search open markets on one venue."""
    _check_venue(venue)
    kwargs = _venue_kwargs(ctx.obj["settings"], venue)
    fetch = gamma.search_markets if venue == "polymarket" else manifold.search_markets
    try:
        markets = fetch(query, limit=limit, **kwargs)
    except httpx.HTTPError as e:
        typer.echo(f"Fetch failed: {e}")
        raise typer.Exit(1)
    _echo_markets(markets)


@app.command("get")
def get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Polymarket slug or Manifold market id"),
    venue: str = typer.Option("polymarket", "--venue", "-v", help="polymarket or manifold"),
) -> None:
    """Show one market by Polymarket slug or Manifold id."""
    _check_venue(venue)
    kwargs = _venue_kwargs(ctx.obj["settings"], venue)
    lookup = gamma.get_market_by_slug if venue == "polymarket" else manifold.get_market_by_id
    try:
        market = lookup(key, **kwargs)
    except (httpx.HTTPError, ValueError) as e:
        typer.echo(f"Fetch failed: {e}")
        raise typer.Exit(1)
    if market is None:
        typer.echo(f"Market not found: {key}")
        raise typer.Exit(1)
    typer.echo(market.model_dump_json(indent=2))
