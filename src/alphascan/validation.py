"""Solana ID validation. Addresses/mints: 32-44 base58 chars; lookup ids up to 96."""

from __future__ import annotations

import re

# Base58 alphabet (no 0, O, I, l)
_BASE58_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]+$")


def is_valid_solana_address(value: str) -> bool:
    s = value.strip() if isinstance(value, str) else ""
    return 32 <= len(s) <= 44 and bool(_BASE58_RE.match(s))


def is_valid_lookup_id(value: str) -> bool:
    """Address, mint, or transaction signature."""
    s = value.strip() if isinstance(value, str) else ""
    return 32 <= len(s) <= 96 and bool(_BASE58_RE.match(s))
