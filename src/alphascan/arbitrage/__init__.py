"""Cross-venue arbitrage detection."""

from alphascan.arbitrage.engine import find_arbitrage_opportunities, scan_venues

__all__ = ["find_arbitrage_opportunities", "scan_venues"]
