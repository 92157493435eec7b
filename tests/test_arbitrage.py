"""Question matching, arbitrage metrics, scoring and ranking."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from alphascan.arbitrage.engine import find_arbitrage_opportunities, scan_venues
from alphascan.config import Settings
from alphascan.matching.questions import match_markets, normalize_question, similarity
from alphascan.metrics.arbitrage import compute_arb_for_pair
from alphascan.ranking.arbitrage import dedupe_markets, rank_opportunities
from alphascan.scoring.arbitrage import ai_edge_score, composite_score, urgency_score

from conftest import NOW


def test_normalize_question():
    assert normalize_question("  Will BTC hit $100k, by June?!  ") == "will btc hit 100k by june"
    assert normalize_question("S&P 500 > 6000") == "s p 500 6000"
    assert normalize_question("") == ""


def test_similarity_bounds():
    assert similarity("", "will btc") == 0.0
    assert similarity("will btc", "") == 0.0
    assert similarity("will btc hit 100k", "will btc hit 100k") == 1.0
    assert abs(similarity("will btc hit 100k", "will btc hit 100k by june") - 4 / 6) < 1e-9
    assert similarity("alpha beta", "gamma delta") == 0.0


def test_identical_questions_match_regardless_of_threshold(make_market):
    a = make_market("a1", "polymarket", question="Will BTC hit 100k?")
    b = make_market("b1", "manifold", question="will btc hit 100K")
    pairs = list(match_markets([a], [b], min_similarity=1.5))
    assert len(pairs) == 1
    assert pairs[0][2] == 1.0


def test_match_markets_respects_threshold(make_market):
    a = make_market("a1", "polymarket", question="Will BTC hit 100k?")
    b = make_market("b1", "manifold", question="Will BTC hit 100k by June?")
    assert list(match_markets([a], [b], min_similarity=0.75)) == []
    assert len(list(match_markets([a], [b], min_similarity=0.6))) == 1


def test_match_markets_buckets_duplicate_questions(make_market):
    a1 = make_market("a1", "polymarket", question="Will BTC hit 100k?")
    a2 = make_market("a2", "polymarket", question="will btc hit 100k")
    b = make_market("b1", "manifold", question="Will BTC hit 100k?")
    matched = [(a.id, b.id) for a, b, _ in match_markets([a1, a2], [b], 0.75)]
    assert matched == [("a1", "b1"), ("a2", "b1")]


def test_implied_profit_scenario(make_market):
    a = make_market("a1", "polymarket", yes=0.40, no=0.55)
    b = make_market("b1", "manifold", yes=0.50, no=0.45)
    opp = compute_arb_for_pair(a, b)
    assert opp is not None
    assert opp.best_yes_buy.market.id == "a1"
    assert opp.best_yes_buy.price == 0.40
    assert opp.best_yes_buy.side == "YES"
    assert opp.best_no_buy.market.id == "b1"
    assert opp.best_no_buy.price == 0.45
    assert opp.best_no_buy.side == "NO"
    assert opp.implied_profit == pytest.approx(0.15)
    assert opp.yes_spread == pytest.approx(-0.10)
    assert opp.no_spread == pytest.approx(0.10)
    assert [m.id for m in opp.markets] == ["a1", "b1"]


def test_no_implied_profit_when_sum_at_least_one(make_market):
    a = make_market("a1", "polymarket", yes=0.60, no=0.45)
    b = make_market("b1", "manifold", yes=0.65, no=0.42)
    opp = compute_arb_for_pair(a, b)
    assert opp is not None
    assert opp.implied_profit is None
    assert opp.best_yes_buy.price + opp.best_no_buy.price >= 1


def test_noise_spreads_are_discarded(make_market):
    a = make_market("a1", "polymarket", yes=0.50, no=0.50)
    b = make_market("b1", "manifold", yes=0.505, no=0.505)
    assert compute_arb_for_pair(a, b) is None


def test_equal_prices_pick_venue_a(make_market):
    a = make_market("a1", "polymarket", yes=0.50, no=0.60)
    b = make_market("b1", "manifold", yes=0.50, no=0.40)
    opp = compute_arb_for_pair(a, b)
    assert opp.best_yes_buy.market.id == "a1"
    assert opp.best_no_buy.market.id == "b1"
    assert opp.implied_profit == pytest.approx(0.10)


def test_shorter_question_is_kept(make_market):
    a = make_market("a1", "polymarket", question="Will BTC hit 100k in 2026?", yes=0.4, no=0.55)
    b = make_market("b1", "manifold", question="BTC 100k in 2026?", yes=0.5, no=0.45)
    assert compute_arb_for_pair(a, b).question == "BTC 100k in 2026?"


def test_ai_edge_score():
    assert ai_edge_score("Will it rain in Paris tomorrow?") == 0.0
    assert ai_edge_score("Will BTC hit 100k?") == 0.3
    assert ai_edge_score("Will the NBA finals go to game 7?") == pytest.approx(0.5)
    # bitcoin, etf, presidential, election
    assert ai_edge_score("Bitcoin ETF approved before the presidential election?") == pytest.approx(0.9)
    assert ai_edge_score("Bitcoin and Ethereum ETF rally after Fed rate cut before the election?") == 1.0
    # whole words only
    assert ai_edge_score("Whether the weather holds") == 0.0


def test_urgency_bands(make_market):
    def urgency_in(delta):
        return urgency_score([make_market("m", end_date=NOW + delta)], now=NOW)

    assert urgency_in(timedelta(hours=12)) == 1.0
    assert urgency_in(timedelta(days=5)) == 0.8
    assert urgency_in(timedelta(days=20)) == 0.5
    assert urgency_in(timedelta(days=60)) == 0.3
    assert urgency_in(timedelta(days=200)) == 0.1
    assert urgency_in(timedelta(days=-2)) == 0.1
    assert urgency_score([make_market("m")], now=NOW) == 0.1


def test_urgency_uses_soonest_future_end_date(make_market):
    markets = [
        make_market("a", end_date=NOW - timedelta(days=1)),
        make_market("b", end_date=NOW + timedelta(days=5)),
        make_market("c", end_date=NOW + timedelta(days=60)),
    ]
    assert urgency_score(markets, now=NOW) == 0.8


def test_find_arbitrage_empty_inputs(make_market):
    assert find_arbitrage_opportunities([], []) == []
    assert find_arbitrage_opportunities([make_market("a1")], []) == []
    assert find_arbitrage_opportunities([], [make_market("b1", "manifold")]) == []


def test_find_arbitrage_scores_and_composite(make_market):
    a = make_market("a1", "polymarket", yes=0.40, no=0.55, end_date=NOW + timedelta(days=3))
    b = make_market("b1", "manifold", yes=0.50, no=0.45)
    [opp] = find_arbitrage_opportunities([a], [b], now=NOW)
    assert opp.similarity == 1.0
    assert opp.ai_edge_score == 0.3
    assert opp.urgency == 0.8
    assert opp.composite_score == pytest.approx(0.15 * 50 + 0.3 * 30 + 0.8 * 20)
    assert composite_score(opp) == pytest.approx(opp.composite_score)


def test_min_spread_filter(make_market):
    a = make_market("a1", "polymarket", yes=0.50, no=0.50)
    b = make_market("b1", "manifold", yes=0.52, no=0.48)
    assert len(find_arbitrage_opportunities([a], [b], now=NOW)) == 1
    assert find_arbitrage_opportunities([a], [b], min_spread=0.05, now=NOW) == []


def test_resolved_markets_are_skipped(make_market):
    a = make_market("a1", "polymarket", yes=0.40, no=0.55, is_resolved=True)
    b = make_market("b1", "manifold", yes=0.50, no=0.45)
    assert find_arbitrage_opportunities([a], [b], now=NOW) == []


def test_ranking_by_composite_and_limit(make_market):
    markets_a = [
        make_market("a1", "polymarket", question="Will it rain in Paris?", yes=0.45, no=0.50),
        make_market("a2", "polymarket", question="Will BTC hit 100k?", yes=0.30, no=0.60),
        make_market("a3", "polymarket", question="Will the Fed cut rates?", yes=0.48, no=0.50),
    ]
    markets_b = [
        make_market("b1", "manifold", question="Will it rain in Paris?", yes=0.50, no=0.50),
        make_market("b2", "manifold", question="Will BTC hit 100k?", yes=0.40, no=0.50),
        make_market("b3", "manifold", question="Will the Fed cut rates?", yes=0.50, no=0.50),
    ]
    ranked = find_arbitrage_opportunities(markets_a, markets_b, now=NOW)
    assert [o.markets[0].id for o in ranked] == ["a2", "a3", "a1"]
    scores = [o.composite_score for o in ranked]
    assert scores == sorted(scores, reverse=True)
    limited = find_arbitrage_opportunities(markets_a, markets_b, limit=2, now=NOW)
    assert [o.markets[0].id for o in limited] == ["a2", "a3"]


def test_reranking_is_idempotent(make_market):
    markets_a = [make_market(f"a{i}", "polymarket", question=f"Question number {i}", yes=0.40, no=0.55) for i in range(4)]
    markets_b = [make_market(f"b{i}", "manifold", question=f"Question number {i}", yes=0.50, no=0.45) for i in range(4)]
    ranked = find_arbitrage_opportunities(markets_a, markets_b, now=NOW)
    assert len(ranked) == 4
    assert rank_opportunities(ranked) == ranked
    assert rank_opportunities(rank_opportunities(ranked)) == ranked


def test_dedupe_markets_first_wins(make_market):
    first = make_market("1", "polymarket", question="first")
    dup = make_market("1", "polymarket", question="dup")
    other_venue = make_market("1", "manifold", question="other")
    assert dedupe_markets([first, dup, other_venue]) == [first, other_venue]


def test_scan_venues_degrades_failed_venue_to_empty(make_market):
    def failing():
        raise httpx.ConnectError("boom")

    a = make_market("a1", "polymarket", yes=0.40, no=0.55)
    result = scan_venues(Settings(), fetch_a=lambda: [a], fetch_b=failing)
    assert result.opportunities == []
    assert result.markets_a == 1
    assert result.markets_b == 0


def test_scan_venues_runs_engine(make_market):
    a = make_market("a1", "polymarket", yes=0.40, no=0.55)
    b = make_market("b1", "manifold", yes=0.50, no=0.45)
    result = scan_venues(Settings(), fetch_a=lambda: [a], fetch_b=lambda: [b])
    assert len(result.opportunities) == 1
    assert result.opportunities[0].implied_profit == pytest.approx(0.15)


def test_naive_end_dates_are_read_as_utc(make_market):
    naive = make_market("a1", "polymarket", yes=0.40, no=0.55, end_date=datetime(2026, 1, 3))
    assert naive.end_date == datetime(2026, 1, 3, tzinfo=timezone.utc)
    b = make_market("b1", "manifold", yes=0.50, no=0.45)
    [opp] = find_arbitrage_opportunities([naive], [b], now=NOW)
    assert opp.urgency == 0.8
    assert urgency_score([naive], now=datetime(2026, 1, 1)) == 0.8


def test_naive_end_date_with_default_clock(make_market):
    a = make_market("a1", "polymarket", yes=0.40, no=0.55, end_date=datetime(2100, 1, 1))
    b = make_market("b1", "manifold", yes=0.50, no=0.45)
    [opp] = find_arbitrage_opportunities([a], [b])
    assert opp.urgency == 0.1


def test_repeated_markets_yield_one_opportunity(make_market):
    a = make_market("a1", "polymarket", yes=0.40, no=0.55)
    b = make_market("b1", "manifold", yes=0.50, no=0.45)
    ranked = find_arbitrage_opportunities([a, a], [b, b], now=NOW)
    assert len(ranked) == 1
    assert ranked[0].implied_profit == pytest.approx(0.15)
