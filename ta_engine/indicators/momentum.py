"""
Momentum oscillators: RSI and the stochastic oscillator.

RSI uses Wilder's smoothing for the whole series: the first average gain
and loss are plain means of the first `period` changes, every later value is
avg = (avg * (period - 1) + change) / period. Mixing smoothing methods within
one series changes values materially, so there is no alternative mode.
"""
from typing import NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

from ..shared.defaults import RSI_PERIOD, STOCH_K_PERIOD, STOCH_D_PERIOD
from ..shared.errors import InvalidInputError
from .rolling import (
    PriceInput, as_series, check_window, rolling_max, rolling_mean, rolling_min, tail_aligned,
)


class StochasticResult(NamedTuple):
    k: pd.Series
    d: pd.Series


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    # No loss in the window saturates RSI at exactly 100
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def rsi(prices: PriceInput, period: int = RSI_PERIOD) -> pd.Series:
    """
    Calculate Relative Strength Index (RSI).

    RSI = 100 - (100 / (1 + RS))
    RS = Average Gain / Average Loss

    Needs period + 1 prices; n prices yield n - period values, bounded in [0, 100].
    """
    check_window(period, "period")
    series = as_series(prices)
    values = series.values
    n = len(values)
    if n < period + 1:
        return tail_aligned(np.empty(0), series.index, name="rsi")

    deltas = np.diff(values)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))

    result = np.empty(n - period)
    result[0] = _rsi_value(avg_gain, avg_loss)
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i - period + 1] = _rsi_value(avg_gain, avg_loss)

    return tail_aligned(result, series.index, name="rsi")


def stochastic(
    prices: PriceInput,
    k_period: int = STOCH_K_PERIOD,
    d_period: int = STOCH_D_PERIOD,
    highs: Optional[Sequence[float]] = None,
    lows: Optional[Sequence[float]] = None,
) -> StochasticResult:
    """
    Calculate the stochastic oscillator.

    %K = 100 * (close - lowest low) / (highest high - lowest low) over k_period,
    50 when the window has no range. %D is the SMA of %K over d_period.
    Without measured highs/lows, the close itself bounds the range.

    Returns:
        StochasticResult of (k, d); %K has n - k_period + 1 values,
        %D has d_period - 1 fewer
    """
    check_window(k_period, "k_period")
    check_window(d_period, "d_period")
    series = as_series(prices)
    close = series.values
    high = close if highs is None else np.asarray(highs, dtype=float)
    low = close if lows is None else np.asarray(lows, dtype=float)
    if len(high) != len(close) or len(low) != len(close):
        raise InvalidInputError("highs and lows must have the same length as prices")

    highest = rolling_max(high, k_period).values
    lowest = rolling_min(low, k_period).values
    window_close = close[k_period - 1:] if len(highest) else np.empty(0)
    spread = highest - lowest
    k_values = np.full(len(spread), 50.0)
    np.divide(100.0 * (window_close - lowest), spread, out=k_values, where=spread > 0)

    d_values = rolling_mean(k_values, d_period)
    return StochasticResult(
        k=tail_aligned(k_values, series.index, name="stoch_k"),
        d=tail_aligned(d_values, series.index, name="stoch_d"),
    )
