"""Manifold API."""
