"""Clone risk scoring."""

import itertools

from alphascan.metrics.pairs import fdv_liquidity_ratio, pair_age_hours
from alphascan.scoring.risk import HEALTHY_REASON, risk_points, score_risk

from conftest import MINT_FAKE_A, NOW_MS


def test_fresh_thin_pair_is_high_risk(make_pair):
    pair = make_pair(MINT_FAKE_A, liquidity=900, volume=20_000, age_hours=3)
    assessment = score_risk(pair, pair_count=1, is_exact_mint_match=False, now_ms=NOW_MS)
    assert assessment.risk == "high"
    assert assessment.reasons == ["Very low liquidity", "Recently created pair"]
    assert assessment.score == 4


def test_exact_mint_is_canonical_without_scoring(make_pair):
    pair = make_pair(MINT_FAKE_A, liquidity=0, volume=0, age_hours=1)
    assessment = score_risk(pair, pair_count=10, is_exact_mint_match=True, now_ms=NOW_MS)
    assert assessment.risk == "canonical"
    assert assessment.reasons == ["Exact mint match"]


def test_healthy_pair_is_low_with_default_reason(make_pair):
    pair = make_pair(MINT_FAKE_A, liquidity=500_000, volume=200_000, age_hours=24 * 100, fdv=10_000_000)
    assessment = score_risk(pair, pair_count=1, is_exact_mint_match=False, now_ms=NOW_MS)
    assert assessment.risk == "low"
    assert assessment.reasons == [HEALTHY_REASON]


def test_single_mild_signal_stays_low_with_its_reason(make_pair):
    pair = make_pair(MINT_FAKE_A, liquidity=10_000, volume=200_000, age_hours=24 * 100)
    assessment = score_risk(pair, pair_count=1, is_exact_mint_match=False, now_ms=NOW_MS)
    assert assessment.risk == "low"
    assert assessment.reasons == ["Low liquidity"]


def test_reasons_follow_evaluation_order(make_pair):
    pair = make_pair(MINT_FAKE_A, liquidity=10_000, volume=5_000, age_hours=48, fdv=5_000_000)
    score, reasons = risk_points(pair, pair_count=4, now_ms=NOW_MS)
    assert score == 5
    assert reasons == [
        "Low liquidity",
        "Low 24h volume",
        "New pair",
        "FDV/liquidity imbalance",
        "Many duplicate market pairs",
    ]


def test_missing_fields_do_not_abort_scoring(make_pair):
    pair = make_pair(MINT_FAKE_A, liquidity=None, volume=None, age_hours=None, fdv=1_000_000)
    assert pair_age_hours(pair, NOW_MS) is None
    assert fdv_liquidity_ratio(pair) is None
    assessment = score_risk(pair, pair_count=1, is_exact_mint_match=False, now_ms=NOW_MS)
    assert assessment.risk == "high"
    assert assessment.reasons == ["Very low liquidity", "Very low 24h volume"]


def test_medium_band(make_pair):
    pair = make_pair(MINT_FAKE_A, liquidity=30_000, volume=2_500, age_hours=36, fdv=9_000_000)
    assessment = score_risk(pair, pair_count=1, is_exact_mint_match=False, now_ms=NOW_MS)
    assert assessment.risk == "medium"
    assert assessment.score == 3


def test_lower_liquidity_never_lowers_risk(make_pair):
    for volume, age, fdv, count in itertools.product(
        [None, 500, 5_000, 50_000],
        [None, 2, 48, 24 * 30],
        [None, 1_000_000, 50_000_000],
        [1, 5],
    ):
        rich = make_pair(MINT_FAKE_A, liquidity=30_000, volume=volume, age_hours=age, fdv=fdv)
        thin = make_pair(MINT_FAKE_A, liquidity=1_000, volume=volume, age_hours=age, fdv=fdv)
        rich_score, _ = risk_points(rich, count, NOW_MS)
        thin_score, _ = risk_points(thin, count, NOW_MS)
        assert thin_score >= rich_score
