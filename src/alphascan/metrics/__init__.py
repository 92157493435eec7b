"""Per-match numeric signals."""
