"""
Tests for composite scoring and trading plan construction.
"""
import pytest

from ta_engine.scoring.composite import (
    CompositeScorer,
    build_trading_plan,
    classify_direction,
    classify_risk,
    confidence_from_score,
)
from ta_engine.scoring.config import ScoreWeights, SubScores
from ta_engine.shared.types import (
    BollingerSnapshot,
    Direction,
    RiskLevel,
    TrendLabel,
)


@pytest.fixture
def scorer():
    return CompositeScorer()


class TestScoreMapping:
    """Test direction, confidence and risk mapping."""

    @pytest.mark.parametrize("score,direction", [
        (0.61, Direction.BULLISH),
        (0.6, Direction.NEUTRAL),
        (0.5, Direction.NEUTRAL),
        (0.4, Direction.NEUTRAL),
        (0.39, Direction.BEARISH),
    ])
    def test_direction_thresholds(self, score, direction):
        assert classify_direction(score) == direction

    def test_confidence(self):
        assert confidence_from_score(0.5) == 0.0
        assert confidence_from_score(0.66) == pytest.approx(32.0)
        assert confidence_from_score(0.2) == pytest.approx(60.0)
        assert confidence_from_score(1.0) == 100.0
        assert confidence_from_score(0.0) == 100.0

    @pytest.mark.parametrize("score,risk", [
        (0.75, RiskLevel.HIGH),
        (0.25, RiskLevel.HIGH),
        (0.65, RiskLevel.MEDIUM),
        (0.35, RiskLevel.MEDIUM),
        (0.5, RiskLevel.LOW),
    ])
    def test_risk_levels(self, score, risk):
        assert classify_risk(score) == risk

    def test_volatility_raises_neutral_risk(self):
        """A neutral call on a volatile series is MEDIUM risk."""
        assert classify_risk(0.5, pct_volatility=6.0) == RiskLevel.MEDIUM
        assert classify_risk(0.5, pct_volatility=1.0) == RiskLevel.LOW
        assert classify_risk(0.5, pct_volatility=1.0, volatility_risk_pct=0.5) == RiskLevel.MEDIUM


class TestTechnicalScore:
    """Test technical sub-score."""

    def test_no_data_is_neutral(self, scorer):
        assert scorer.technical_score(None, 100.0, []) == 0.5

    def test_oversold_without_trend_leans_bullish(self, scorer):
        """RSI below 30 with mixed MAs reads as a bounce candidate."""
        score = scorer.technical_score(25.0, 100.0, [95.0, 105.0], TrendLabel.UNKNOWN)
        assert score == pytest.approx((0.8 + 0.5) / 2)

    def test_overbought_without_trend_leans_bearish(self, scorer):
        score = scorer.technical_score(80.0, 100.0, [95.0, 105.0], TrendLabel.UNKNOWN)
        assert score == pytest.approx((0.2 + 0.5) / 2)

    def test_overbought_in_confirmed_uptrend_confirms(self, scorer):
        """Price above every MA with a bullish impulse: high RSI is strength."""
        score = scorer.technical_score(100.0, 200.0, [150.0, 160.0, 170.0], TrendLabel.BULLISH_IMPULSE)
        assert score == pytest.approx(0.9)

    def test_overbought_above_all_averages_leans_bullish(self, scorer):
        """Without impulse confirmation, the trend component still outweighs high RSI."""
        score = scorer.technical_score(80.0, 200.0, [150.0, 160.0], TrendLabel.UNKNOWN)
        assert score == pytest.approx((0.2 + 1.0) / 2)
        assert score > 0.5

    def test_oversold_in_confirmed_downtrend_confirms(self, scorer):
        score = scorer.technical_score(0.0, 50.0, [60.0, 70.0], TrendLabel.BEARISH_IMPULSE)
        assert score == pytest.approx(0.1)

    def test_trend_component_is_fraction_above(self, scorer):
        score = scorer.technical_score(50.0, 100.0, [90.0, 95.0, 105.0, None])
        assert score == pytest.approx((0.5 + 2 / 3) / 2)


class TestPredict:
    """Test the combined prediction."""

    def test_weighted_combination(self, scorer):
        subs = SubScores(fundamental=1.0, sentiment=0.0, structure=1.0)
        assert scorer.combine(0.5, subs) == pytest.approx(0.2 + 0.3 + 0.0 + 0.1)

    def test_custom_weights(self):
        scorer = CompositeScorer(ScoreWeights(technical=1.0, fundamental=0.0, sentiment=0.0, structure=0.0))
        prediction = scorer.predict(0.9, SubScores(fundamental=0.0))
        assert prediction.score == pytest.approx(0.9)
        assert prediction.direction == Direction.BULLISH
        assert prediction.risk_level == RiskLevel.HIGH

    def test_uptrend_prediction(self, scorer):
        """Strong technicals with neutral sub-scores give a BULLISH call."""
        prediction = scorer.predict(0.9, SubScores())
        assert prediction.score == pytest.approx(0.66)
        assert prediction.direction == Direction.BULLISH
        assert prediction.confidence == pytest.approx(32.0)
        assert prediction.risk_level == RiskLevel.MEDIUM
        assert prediction.timeframe == "24h-7d"
        assert prediction.sub_scores == {
            "technical": 0.9, "fundamental": 0.5, "sentiment": 0.5, "structure": 0.5,
        }

    def test_targets_from_bollinger(self, scorer):
        bands = BollingerSnapshot(upper=110.0, middle=100.0, lower=90.0)
        prediction = scorer.predict(0.5, bollinger=bands)
        assert prediction.price_targets.support == 90.0
        assert prediction.price_targets.resistance == 110.0

    def test_targets_absent_without_bands(self, scorer):
        prediction = scorer.predict(0.5)
        assert prediction.price_targets.support is None
        assert prediction.price_targets.resistance is None


class TestTradingPlan:
    """Test trading plan construction."""

    def test_plan_uses_targets(self, scorer):
        bands = BollingerSnapshot(upper=110.0, middle=100.0, lower=90.0)
        plan = build_trading_plan(scorer.predict(0.5, bollinger=bands))
        assert plan.stop_loss == 90.0
        assert plan.take_profit == 110.0
        assert plan.entry_points.support == 90.0
        assert plan.position_size_pct == (0.03, 0.05)

    def test_high_risk_reduces_size(self):
        scorer = CompositeScorer(ScoreWeights(technical=1.0, fundamental=0.0, sentiment=0.0, structure=0.0))
        plan = build_trading_plan(scorer.predict(0.1))
        assert plan.position_size_pct == (0.01, 0.02)
        assert plan.stop_loss is None
