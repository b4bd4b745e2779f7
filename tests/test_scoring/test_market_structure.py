"""
Tests for market-structure sub-score derivation.
"""
import pytest

from ta_engine.scoring.market_structure import (
    analyze_market_structure,
    classify_sentiment,
    classify_volatility,
    fundamental_score,
    liquidity_score,
    sentiment_score,
    structure_score,
    sub_scores_from_market,
)
from ta_engine.shared.errors import InvalidInputError


class TestMarketStructure:
    """Test the qualitative market read."""

    def test_large_liquid_asset(self):
        structure = analyze_market_structure(
            market_cap=5e10, total_volume=1e10, price_change_pct_24h=12.5,
            sentiment_up_pct=72.0, market_cap_rank=3,
        )
        assert structure.liquidity_score == pytest.approx(0.2)
        assert structure.volatility_rating == "high"
        assert structure.institutional_interest == "high"
        assert structure.retail_sentiment == "bullish"
        assert structure.market_cap_rank == 3

    def test_small_asset(self):
        structure = analyze_market_structure(market_cap=5e8, total_volume=1e7)
        assert structure.liquidity_score == pytest.approx(0.02)
        assert structure.volatility_rating == "normal"
        assert structure.institutional_interest == "medium"
        assert structure.retail_sentiment == "neutral"

    def test_missing_market_cap(self):
        structure = analyze_market_structure(market_cap=None, total_volume=1e7)
        assert structure.liquidity_score is None
        assert structure.institutional_interest == "medium"

    def test_zero_market_cap_has_no_liquidity(self):
        assert liquidity_score(1e6, 0.0) is None

    def test_negative_volume_rejected(self):
        with pytest.raises(InvalidInputError):
            liquidity_score(-1.0, 1e9)

    @pytest.mark.parametrize("up_pct,label", [(61, "bullish"), (60, "neutral"), (40, "neutral"), (39, "bearish")])
    def test_sentiment_labels(self, up_pct, label):
        assert classify_sentiment(up_pct) == label

    def test_sentiment_out_of_range(self):
        with pytest.raises(InvalidInputError):
            classify_sentiment(120)

    def test_volatility_rating(self):
        assert classify_volatility(-10.5) == "high"
        assert classify_volatility(10.0) == "normal"
        assert classify_volatility(None) == "normal"


class TestSubScoreDerivation:
    """Test mapping of the market read to sub-scores."""

    def test_fundamental(self):
        assert fundamental_score(0.2) == 0.7
        assert fundamental_score(0.05) == 0.4
        assert fundamental_score(None) == 0.5

    def test_sentiment(self):
        assert sentiment_score(0.3) == 0.7
        assert sentiment_score(0.0) == 0.3
        assert sentiment_score(-0.8) == 0.3
        assert sentiment_score(None) == 0.5

    def test_sentiment_out_of_range(self):
        with pytest.raises(InvalidInputError):
            sentiment_score(2.0)

    def test_structure(self):
        assert structure_score("high") == 0.8
        assert structure_score("medium") == 0.5

    def test_sub_scores_from_market(self):
        structure = analyze_market_structure(market_cap=5e10, total_volume=1e10)
        scores = sub_scores_from_market(structure, news_sentiment=0.4)
        assert scores.fundamental == 0.7
        assert scores.sentiment == 0.7
        assert scores.structure == 0.8

    def test_sub_scores_without_news(self):
        structure = analyze_market_structure(market_cap=5e8, total_volume=1e7)
        scores = sub_scores_from_market(structure)
        assert scores.fundamental == 0.4
        assert scores.sentiment == 0.5
        assert scores.structure == 0.5
