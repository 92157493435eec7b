"""Same-ticker token discovery and clone risk."""

from alphascan.tickers.engine import find_tokens_by_ticker

__all__ = ["find_tokens_by_ticker"]
