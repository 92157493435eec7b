"""Heuristic scores and risk bands."""
