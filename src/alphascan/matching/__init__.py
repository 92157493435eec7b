"""Grouping and pairing of canonical records across sources."""
