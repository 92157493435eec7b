"""Cross-venue question matching - normalization, word-set Jaccard, exact-key buckets."""

from __future__ import annotations

import re
from typing import Iterator

from alphascan.models import Market

_RE_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_RE_MULTI_SPACE = re.compile(r"\s+")


def normalize_question(text: str) -> str:
    """Lower-case, punctuation to spaces, collapsed whitespace."""
    text = _RE_NON_ALNUM.sub(" ", text.lower())
    return _RE_MULTI_SPACE.sub(" ", text).strip()


def similarity(a: str, b: str) -> float:
    """Jaccard overlap of the word sets of two normalized questions."""
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    a_words = set(a.split(" "))
    b_words = set(b.split(" "))
    union = a_words | b_words
    return len(a_words & b_words) / len(union) if union else 0.0


def group_by_question(markets: list[Market]) -> dict[str, list[Market]]:
    """Bucket markets by normalized question, preserving input order within a bucket."""
    groups: dict[str, list[Market]] = {}
    for m in markets:
        groups.setdefault(normalize_question(m.question), []).append(m)
    return groups


def match_markets(
    markets_a: list[Market],
    markets_b: list[Market],
    min_similarity: float,
) -> Iterator[tuple[Market, Market, float]]:
    """Yield (a, b, similarity) for every cross-venue pair at or above ``min_similarity``.

    Similarity is computed once per (A bucket, B market); identical normalized
    questions always match.
    """
    b_list = [(m, normalize_question(m.question)) for m in markets_b]
    for key, group in group_by_question(markets_a).items():
        for b, b_norm in b_list:
            sim = similarity(key, b_norm)
            if sim < min_similarity and not (key and key == b_norm):
                continue
            for a in group:
                yield a, b, sim
