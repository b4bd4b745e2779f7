"""
Trend indicators: simple and exponential moving averages, MACD.

Each function returns a Series aligned to the tail of the input: a period-w
average over n prices has exactly n - w + 1 values, and is empty when fewer
than w prices are available.
"""
from typing import NamedTuple, Optional

import numpy as np
import pandas as pd

from ..shared.defaults import MACD_FAST, MACD_SLOW, MACD_SIGNAL
from ..shared.errors import InvalidInputError
from .rolling import PriceInput, as_series, check_window, rolling_mean, tail_aligned


class MACDResult(NamedTuple):
    line: pd.Series
    signal: pd.Series
    histogram: pd.Series


def sma(prices: PriceInput, period: int) -> pd.Series:
    """Simple Moving Average; first value at index period - 1."""
    series = as_series(prices)
    return tail_aligned(rolling_mean(series.values, period), series.index, name=f"sma_{period}")


def _ema_values(values: np.ndarray, period: int) -> np.ndarray:
    check_window(period, "period")
    n = len(values)
    if n < period:
        return np.empty(0)

    k = 2.0 / (period + 1)
    result = np.empty(n - period + 1)
    # Seed with the SMA of the first `period` values
    result[0] = np.mean(values[:period])
    for i in range(period, n):
        result[i - period + 1] = values[i] * k + result[i - period] * (1 - k)
    return result


def ema(prices: PriceInput, period: int) -> pd.Series:
    """
    Exponential Moving Average.

    Seeded with the simple average of the first `period` prices, then
    ema[i] = price[i] * k + ema[i-1] * (1 - k) with k = 2 / (period + 1).
    """
    series = as_series(prices)
    return tail_aligned(_ema_values(series.values, period), series.index, name=f"ema_{period}")


def macd(
    prices: PriceInput,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
    signal: int = MACD_SIGNAL,
) -> MACDResult:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    The MACD line starts where the slow EMA starts; the signal line is the
    EMA of the MACD line, and the histogram is aligned to the signal line.

    Returns:
        MACDResult of (line, signal, histogram), each possibly empty
    """
    if fast >= slow:
        raise InvalidInputError(f"MACD fast ({fast}) must be less than slow ({slow})")
    series = as_series(prices)
    fast_ema = _ema_values(series.values, fast)
    slow_ema = _ema_values(series.values, slow)
    line_values = fast_ema[len(fast_ema) - len(slow_ema):] - slow_ema
    signal_values = _ema_values(line_values, signal)
    hist_values = line_values[len(line_values) - len(signal_values):] - signal_values
    return MACDResult(
        line=tail_aligned(line_values, series.index, name="macd_line"),
        signal=tail_aligned(signal_values, series.index, name="macd_signal"),
        histogram=tail_aligned(hist_values, series.index, name="macd_histogram"),
    )


def latest(values: pd.Series) -> Optional[float]:
    """Last value of an indicator Series, or None when it is empty (insufficient data)."""
    if len(values) == 0:
        return None
    value = values.iloc[-1]
    return None if pd.isna(value) else float(value)
