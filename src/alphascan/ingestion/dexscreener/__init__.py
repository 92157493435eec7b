"""DexScreener API."""
