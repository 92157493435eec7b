"""Per-match arbitrage metrics - cheapest legs, signed spreads, implied profit."""

from __future__ import annotations

from alphascan.models import ArbitrageLeg, ArbitrageOpportunity, Market

# Spreads below this on both sides are market noise.
NOISE_SPREAD = 0.01


def implied_profit(yes_price: float, no_price: float) -> float | None:
    """1 - (yes + no) when the two legs cost less than 1, else None."""
    total = yes_price + no_price
    return 1.0 - total if total < 1.0 else None


def compute_arb_for_pair(a: Market, b: Market, similarity: float = 1.0) -> ArbitrageOpportunity | None:
    """Cross-book candidate for venue-A market ``a`` and venue-B market ``b``.

    Buys YES on the cheaper venue and NO on the cheaper venue; on an exact
    price tie the venue-A market takes the leg. Returns None when there is no
    implied profit and both spreads are below NOISE_SPREAD.
    """
    yes_buy = a if a.yes_price <= b.yes_price else b
    no_buy = a if a.no_price <= b.no_price else b
    profit = implied_profit(yes_buy.yes_price, no_buy.no_price)

    yes_spread = a.yes_price - b.yes_price
    no_spread = a.no_price - b.no_price

    if profit is None and abs(yes_spread) < NOISE_SPREAD and abs(no_spread) < NOISE_SPREAD:
        return None

    return ArbitrageOpportunity(
        question=a.question if len(a.question) <= len(b.question) else b.question,
        markets=(a, b),
        yes_spread=yes_spread,
        no_spread=no_spread,
        best_yes_buy=ArbitrageLeg(market=yes_buy, side="YES", price=yes_buy.yes_price),
        best_no_buy=ArbitrageLeg(market=no_buy, side="NO", price=no_buy.no_price),
        implied_profit=profit,
        similarity=similarity,
    )
