"""Dedup, thresholds and ordering."""
