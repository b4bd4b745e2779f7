"""
Tests for trend-impulse and market-phase heuristics.
"""
import pytest
import numpy as np

from ta_engine.indicators.patterns import (
    classify_phase,
    classify_trend_impulse,
    impulse_confidence,
)
from ta_engine.shared.errors import InvalidInputError
from ta_engine.shared.types import (
    PhaseLabel,
    PriceVolumeRelationship,
    TrendLabel,
    VolumeTrend,
)


class TestTrendImpulse:
    """Test up/down move impulse labelling."""

    def test_uptrend_is_bullish(self):
        result = classify_trend_impulse([100.0 + i for i in range(50)], window=20)
        assert result.label == TrendLabel.BULLISH_IMPULSE
        assert result.up_moves == 19
        assert result.down_moves == 0
        assert result.confidence == 100.0

    def test_downtrend_is_bearish(self):
        result = classify_trend_impulse([100.0 - i for i in range(50)], window=20)
        assert result.label == TrendLabel.BEARISH_IMPULSE

    def test_balanced_moves_unknown(self):
        """Alternating moves give no impulse and zero confidence."""
        prices = [1.0, 2.0] * 10 + [1.0]
        result = classify_trend_impulse(prices, window=21)
        assert result.label == TrendLabel.UNKNOWN
        assert result.confidence == 0.0

    def test_ratio_threshold(self):
        """Up-moves must exceed ratio * down-moves."""
        # 3 up, 2 down: 3 > 2 * 1.5 is false
        prices = [1.0, 2.0, 1.0, 2.0, 1.0, 2.0]
        assert classify_trend_impulse(prices, window=6, ratio=1.5).label == TrendLabel.UNKNOWN
        assert classify_trend_impulse(prices, window=6, ratio=1.0).label == TrendLabel.BULLISH_IMPULSE

    def test_flat_steps_ignored(self):
        result = classify_trend_impulse([5.0] * 10, window=10)
        assert result.up_moves == 0
        assert result.down_moves == 0
        assert result.label == TrendLabel.UNKNOWN

    def test_deterministic(self):
        """Same input always gives the same label and confidence."""
        rng = np.random.default_rng(9)
        prices = 100 + np.cumsum(rng.normal(0, 1, 60))
        assert classify_trend_impulse(prices) == classify_trend_impulse(prices.copy())

    def test_confidence_monotonic_in_imbalance(self):
        assert impulse_confidence(0, 0) == 0.0
        assert impulse_confidence(5, 5) == 0.0
        assert impulse_confidence(6, 4) < impulse_confidence(8, 2) < impulse_confidence(10, 0)
        assert impulse_confidence(2, 8) == impulse_confidence(8, 2)

    def test_ratio_below_one_rejected(self):
        with pytest.raises(InvalidInputError):
            classify_trend_impulse([1.0, 2.0], ratio=0.5)


class TestMarketPhase:
    """Test range-based phase labelling."""

    def test_trending(self):
        """Range above 10% of the mean is trending."""
        result = classify_phase([100.0 + i for i in range(20)], window=20)
        assert result.label == PhaseLabel.TRENDING
        assert result.range_pct == pytest.approx(19 / 109.5)

    def test_consolidating(self):
        """Range below 2% of the mean is consolidating."""
        prices = [100.0, 100.5, 100.2, 100.8, 100.1] * 4
        assert classify_phase(prices, window=20).label == PhaseLabel.CONSOLIDATING

    def test_transitional(self):
        prices = [100.0, 105.0] * 10
        assert classify_phase(prices, window=20).label == PhaseLabel.TRANSITIONAL

    def test_without_volumes_neutral(self):
        result = classify_phase([100.0 + i for i in range(20)])
        assert result.volume_trend == VolumeTrend.NEUTRAL
        assert result.price_volume_relationship == PriceVolumeRelationship.NEUTRAL

    def test_rising_volume_confirms(self):
        prices = [100.0 + i for i in range(20)]
        volumes = [100.0] * 10 + [200.0] * 10
        result = classify_phase(prices, volumes, window=20)
        assert result.volume_trend == VolumeTrend.RISING
        assert result.price_volume_relationship == PriceVolumeRelationship.CONFIRMING

    def test_falling_volume_on_move_diverges(self):
        prices = [100.0 + i for i in range(20)]
        volumes = [200.0] * 10 + [100.0] * 10
        result = classify_phase(prices, volumes, window=20)
        assert result.volume_trend == VolumeTrend.FALLING
        assert result.price_volume_relationship == PriceVolumeRelationship.DIVERGING

    def test_flat_volume(self):
        result = classify_phase([100.0] * 20, [50.0] * 20, window=20)
        assert result.volume_trend == VolumeTrend.FLAT
        assert result.price_volume_relationship == PriceVolumeRelationship.NEUTRAL

    def test_thresholds_out_of_order_rejected(self):
        with pytest.raises(InvalidInputError):
            classify_phase([1.0, 2.0], trending_pct=0.01, consolidation_pct=0.05)

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputError):
            classify_phase([])
