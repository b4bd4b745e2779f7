"""
Tests for the analyze() entry point.
"""
import json

import pytest
import pandas as pd
import numpy as np

from ta_engine import (
    AnalysisParams,
    Direction,
    InvalidInputError,
    PhaseLabel,
    RiskLevel,
    SubScores,
    TimeSeries,
    TrendLabel,
    analyze,
)


@pytest.fixture
def uptrend():
    """100-sample linear uptrend 100 + i."""
    return TimeSeries(prices=[100.0 + i for i in range(100)])


@pytest.fixture
def sample_ohlcv():
    """Create sample OHLCV data."""
    dates = pd.date_range('2020-01-01', periods=120, freq='D')
    rng = np.random.default_rng(21)
    base = 100 + np.cumsum(rng.normal(0, 1, 120))
    noise = np.abs(rng.normal(0, 1, 120))
    return pd.DataFrame({
        'High': base + noise + 0.5,
        'Low': base - noise - 0.5,
        'Close': base,
        'Volume': rng.integers(1_000_000, 5_000_000, 120).astype(float),
    }, index=dates)


class TestUptrend:
    """A clean uptrend reads as bullish."""

    def test_rsi_saturates(self, uptrend):
        assert analyze(uptrend).momentum.rsi == 100.0

    def test_bullish_impulse_and_trending(self, uptrend):
        report = analyze(uptrend)
        assert report.pattern.trend_label == TrendLabel.BULLISH_IMPULSE
        assert report.pattern.trend_confidence == 100.0
        assert report.pattern.phase_label == PhaseLabel.TRENDING

    def test_bullish_with_neutral_sub_scores(self, uptrend):
        prediction = analyze(uptrend).prediction
        assert prediction.direction == Direction.BULLISH
        assert prediction.score == pytest.approx(0.66)
        assert prediction.confidence == pytest.approx(32.0)
        assert prediction.risk_level == RiskLevel.MEDIUM

    def test_bullish_with_positive_sub_scores(self, uptrend):
        report = analyze(uptrend, sub_scores=SubScores(fundamental=0.7, sentiment=0.7, structure=0.8))
        assert report.prediction.direction == Direction.BULLISH
        assert report.prediction.risk_level == RiskLevel.HIGH
        assert report.trading_plan.position_size_pct == (0.01, 0.02)

    def test_indicator_values(self, uptrend):
        report = analyze(uptrend)
        assert report.trend.sma[20] == pytest.approx(np.mean(np.arange(80, 100)) + 100)
        assert report.trend.sma[50] == pytest.approx(174.5)
        assert report.trend.macd is not None
        assert report.momentum.stochastic.k == pytest.approx(100.0)
        assert report.last_price == 199.0
        assert report.sample_count == 100

    def test_targets_from_bollinger(self, uptrend):
        report = analyze(uptrend)
        bands = report.volatility.bollinger
        assert bands.lower < bands.middle < bands.upper
        assert report.prediction.price_targets.support == bands.lower
        assert report.trading_plan.take_profit == bands.upper

    def test_no_levels_on_monotonic_series(self, uptrend):
        assert analyze(uptrend).levels == []


class TestInsufficientData:
    """Indicators without enough data are None; the report is still produced."""

    def test_sma_longer_than_series_is_none(self):
        series = TimeSeries(prices=[100.0 + i for i in range(19)])
        report = analyze(series, params=AnalysisParams(sma_periods=[20]))
        assert report.trend.sma == {20: None}

    def test_short_series(self):
        report = analyze(TimeSeries(prices=[100.0, 101.0, 99.0]))
        assert report.momentum.rsi is None
        assert report.momentum.stochastic is None
        assert report.volatility.bollinger is None
        assert report.volatility.atr is None
        assert report.trend.macd is None
        assert report.prediction.price_targets.support is None
        assert report.volatility.price_change_pct == pytest.approx(-200 / 101)
        assert report.degraded == []

    def test_single_sample(self):
        report = analyze(TimeSeries(prices=[50.0]))
        assert report.sample_count == 1
        assert report.volatility.pct_volatility is None
        assert report.prediction.direction == Direction.NEUTRAL


class TestInputs:
    """Test input handling and validation."""

    def test_empty_series_rejected(self):
        with pytest.raises(InvalidInputError):
            analyze(TimeSeries(prices=[]))

    @pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf")])
    def test_bad_price_rejected(self, bad):
        with pytest.raises(InvalidInputError):
            analyze(TimeSeries(prices=[100.0, bad, 101.0]))

    def test_invalid_params_rejected(self, uptrend):
        with pytest.raises(InvalidInputError):
            analyze(uptrend, params={"bb_k": 0})

    def test_invalid_sub_scores_rejected(self, uptrend):
        with pytest.raises(InvalidInputError):
            analyze(uptrend, sub_scores={"sentiment": 1.5})

    def test_dataframe_input_uses_measured_range(self, sample_ohlcv):
        report = analyze(sample_ohlcv)
        assert report.volatility.atr.approximated is False
        assert "atr_synthetic_high_low" not in report.degraded
        assert report.levels
        assert all(isinstance(lvl.timestamp, pd.Timestamp) for lvl in report.levels)

    def test_close_only_flags_synthetic_atr(self, sample_ohlcv):
        report = analyze(sample_ohlcv['Close'])
        assert report.volatility.atr.approximated is True
        assert report.volatility.atr.synthetic_spread == 0.02
        assert report.degraded == ["atr_synthetic_high_low"]

    def test_volumes_argument(self, sample_ohlcv):
        """Volumes passed separately feed the phase read."""
        close = sample_ohlcv['Close']
        without = analyze(close)
        with_volumes = analyze(close, volumes=[100.0] * 110 + [1000.0] * 10)
        assert without.pattern.volume_trend.value == "neutral"
        assert with_volumes.pattern.volume_trend.value == "rising"

    def test_pairs_input(self):
        pairs = [[1700000000000 + i * 3_600_000, 100.0 + i] for i in range(30)]
        report = analyze(TimeSeries.from_pairs(pairs))
        assert report.sample_count == 30
        assert report.last_price == 129.0

    def test_deterministic(self, sample_ohlcv):
        assert analyze(sample_ohlcv).to_dict() == analyze(sample_ohlcv).to_dict()


class TestReportSerialization:
    """Test JSON output."""

    def test_to_dict_is_json_serializable(self, sample_ohlcv):
        data = analyze(sample_ohlcv).to_dict()
        text = json.dumps(data)

        assert isinstance(text, str)
        assert data["prediction"]["direction"] in ("BULLISH", "BEARISH", "NEUTRAL")
        assert data["prediction"]["risk_level"] in ("LOW", "MEDIUM", "HIGH")
        assert set(data) == {
            "trend", "momentum", "volatility", "levels", "pattern",
            "prediction", "trading_plan", "last_price", "sample_count", "degraded",
        }
        assert isinstance(data["trading_plan"]["position_size_pct"], list)
        level = data["levels"][0]
        assert level["kind"] in ("support", "resistance")
        assert level["strength"] in ("weak", "medium", "strong")
        assert isinstance(level["timestamp"], str)

    def test_absent_values_are_none(self):
        data = analyze(TimeSeries(prices=[1.0, 2.0])).to_dict()
        assert data["momentum"]["rsi"] is None
        assert data["volatility"]["bollinger"] is None
