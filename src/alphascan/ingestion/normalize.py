"""Shared field coercion for raw venue / DEX payloads."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any


def as_float(value: Any) -> float | None:
    """Finite float from a number or numeric string; None for anything else."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        v = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            v = float(value)
        except ValueError:
            return None
    else:
        return None
    return v if math.isfinite(v) else None


def as_int(value: Any) -> int | None:
    v = as_float(value)
    return int(v) if v is not None else None


def as_str(value: Any) -> str | None:
    """Stripped non-empty string or None."""
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def parse_iso_datetime(value: Any) -> datetime | None:
    """ISO-8601 string -> aware UTC datetime. Naive values are assumed UTC."""
    s = as_str(value)
    if s is None:
        return None
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def ms_to_datetime(value: Any) -> datetime | None:
    ms = as_float(value)
    if ms is None:
        return None
    try:
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
