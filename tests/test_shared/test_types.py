"""
Tests for the TimeSeries input model.
"""
import pytest
import pandas as pd
import numpy as np

from ta_engine.shared.errors import InvalidInputError
from ta_engine.shared.types import TimeSeries


class TestTimeSeries:
    """TimeSeries construction and validation."""

    def test_default_timestamps_are_positions(self):
        series = TimeSeries(prices=[1.0, 2.0, 3.0])
        assert list(series.timestamps) == [0, 1, 2]
        assert len(series) == 3

    def test_immutable(self):
        series = TimeSeries(prices=[1.0, 2.0])
        with pytest.raises(ValueError):
            series.prices[0] = 5.0
        with pytest.raises(AttributeError):
            series.prices = np.array([3.0])

    def test_input_not_aliased(self):
        """Mutating the source array does not change the series."""
        source = np.array([1.0, 2.0, 3.0])
        series = TimeSeries(prices=source)
        source[0] = 99.0
        assert series.prices[0] == 1.0

    @pytest.mark.parametrize("prices", [[1.0, -1.0], [1.0, float("nan")], [float("inf")]])
    def test_invalid_prices(self, prices):
        with pytest.raises(InvalidInputError):
            TimeSeries(prices=prices)

    def test_two_dimensional_rejected(self):
        with pytest.raises(InvalidInputError, match="one-dimensional"):
            TimeSeries(prices=[[1.0, 2.0], [3.0, 4.0]])

    def test_length_mismatch(self):
        with pytest.raises(InvalidInputError, match="length"):
            TimeSeries(prices=[1.0, 2.0], volumes=[1.0])
        with pytest.raises(InvalidInputError, match="length"):
            TimeSeries(prices=[1.0, 2.0], timestamps=[1])

    def test_negative_volume_rejected(self):
        with pytest.raises(InvalidInputError):
            TimeSeries(prices=[1.0, 2.0], volumes=[1.0, -2.0])

    def test_highs_and_lows_together(self):
        with pytest.raises(InvalidInputError, match="together"):
            TimeSeries(prices=[1.0], highs=[2.0])

    def test_highs_below_lows_rejected(self):
        with pytest.raises(InvalidInputError, match="highs must be >= lows"):
            TimeSeries(prices=[1.0, 1.0], highs=[2.0, 0.5], lows=[0.5, 1.0])

    def test_duplicate_timestamps_allowed(self):
        series = TimeSeries(prices=[1.0, 2.0], timestamps=[5, 5])
        assert len(series.close) == 2

    def test_empty_allowed(self):
        assert len(TimeSeries(prices=[])) == 0

    def test_with_volumes(self):
        series = TimeSeries(prices=[1.0, 2.0])
        with_volumes = series.with_volumes([10.0, 20.0])
        assert series.volumes is None
        assert list(with_volumes.volume) == [10.0, 20.0]

    def test_from_pairs_with_volume_pairs(self):
        series = TimeSeries.from_pairs([[10, 1.0], [20, 2.0]], volumes=[[10, 5.0], [20, 6.0]])
        assert list(series.timestamps) == [10, 20]
        assert list(series.volumes) == [5.0, 6.0]

    def test_from_series(self):
        dates = pd.date_range('2024-01-01', periods=3, freq='D')
        series = TimeSeries.from_series(pd.Series([1.0, 2.0, 3.0], index=dates))
        assert isinstance(series.close.index, pd.DatetimeIndex)
        assert series.close.name == "Close"

    def test_from_dataframe_requires_close(self):
        with pytest.raises(InvalidInputError, match="Close"):
            TimeSeries.from_series(pd.DataFrame({"Price": [1.0]}))

    def test_from_unsupported_type(self):
        with pytest.raises(InvalidInputError):
            TimeSeries.from_series([1.0, 2.0])
