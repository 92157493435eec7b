"""Polymarket Gamma API."""
