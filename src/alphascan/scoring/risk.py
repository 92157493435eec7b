"""Clone risk scoring for same-ticker mints."""

from __future__ import annotations

from dataclasses import dataclass, field

from alphascan.metrics.pairs import fdv_liquidity_ratio, pair_age_hours
from alphascan.models import DexPair
from alphascan.models.token import RiskLevel

VERY_LOW_LIQUIDITY_USD = 5_000
LOW_LIQUIDITY_USD = 25_000
VERY_LOW_VOLUME_USD = 1_000
LOW_VOLUME_USD = 10_000
RECENT_PAIR_HOURS = 24
NEW_PAIR_HOURS = 72
MAX_FDV_LIQUIDITY_RATIO = 250
MAX_PAIR_COUNT = 3

HIGH_RISK_SCORE = 4
MEDIUM_RISK_SCORE = 2

CANONICAL_REASON = "Exact mint match"
HEALTHY_REASON = "Healthy liquidity/volume profile"


@dataclass(frozen=True)
class RiskAssessment:
    risk: RiskLevel
    score: int = 0
    reasons: list[str] = field(default_factory=list)


def risk_points(pair: DexPair, pair_count: int, now_ms: int) -> tuple[int, list[str]]:
    """Additive risk score and the reasons that fired, in evaluation order."""
    score = 0
    reasons: list[str] = []

    liq = pair.liquidity_usd or 0.0
    if liq < VERY_LOW_LIQUIDITY_USD:
        score += 2
        reasons.append("Very low liquidity")
    elif liq < LOW_LIQUIDITY_USD:
        score += 1
        reasons.append("Low liquidity")

    vol = pair.volume_24h_usd or 0.0
    if vol < VERY_LOW_VOLUME_USD:
        score += 2
        reasons.append("Very low 24h volume")
    elif vol < LOW_VOLUME_USD:
        score += 1
        reasons.append("Low 24h volume")

    age = pair_age_hours(pair, now_ms)
    if age is not None:
        if age < RECENT_PAIR_HOURS:
            score += 2
            reasons.append("Recently created pair")
        elif age < NEW_PAIR_HOURS:
            score += 1
            reasons.append("New pair")

    ratio = fdv_liquidity_ratio(pair)
    if ratio is not None and ratio > MAX_FDV_LIQUIDITY_RATIO:
        score += 1
        reasons.append("FDV/liquidity imbalance")

    if pair_count > MAX_PAIR_COUNT:
        score += 1
        reasons.append("Many duplicate market pairs")

    return score, reasons


def score_risk(pair: DexPair, pair_count: int, is_exact_mint_match: bool, now_ms: int) -> RiskAssessment:
    if is_exact_mint_match:
        return RiskAssessment(risk="canonical", reasons=[CANONICAL_REASON])
    score, reasons = risk_points(pair, pair_count, now_ms)
    if score >= HIGH_RISK_SCORE:
        return RiskAssessment(risk="high", score=score, reasons=reasons)
    if score >= MEDIUM_RISK_SCORE:
        return RiskAssessment(risk="medium", score=score, reasons=reasons)
    return RiskAssessment(risk="low", score=score, reasons=reasons or [HEALTHY_REASON])
