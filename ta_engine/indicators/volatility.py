"""
Volatility measures: Bollinger Bands, Average True Range, return volatility.
"""
from typing import NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

from ..shared.defaults import BB_PERIOD, BB_K, ATR_PERIOD, ATR_SYNTHETIC_SPREAD
from ..shared.errors import InvalidInputError
from .rolling import PriceInput, as_series, check_window, rolling_mean, rolling_stats, tail_aligned


class BollingerResult(NamedTuple):
    upper: pd.Series
    middle: pd.Series
    lower: pd.Series


class ATRSeries(NamedTuple):
    """
    ATR values plus provenance.

    approximated is True when highs/lows were synthesized from the close as
    close * (1 +/- synthetic_spread) instead of measured.
    """
    values: pd.Series
    approximated: bool
    synthetic_spread: Optional[float]


def bollinger_bands(prices: PriceInput, period: int = BB_PERIOD, k: float = BB_K) -> BollingerResult:
    """
    Calculate Bollinger Bands.

    middle = SMA(period), upper/lower = middle +/- k * population std of the
    window. lower <= middle <= upper always holds; the three coincide for a
    constant window.
    """
    if not k > 0:
        raise InvalidInputError(f"Bollinger k must be > 0, got {k}")
    series = as_series(prices)
    stats = rolling_stats(series.values, period)
    width = k * stats.std
    return BollingerResult(
        upper=tail_aligned(stats.mean + width, series.index, name="bb_upper"),
        middle=tail_aligned(stats.mean, series.index, name="bb_middle"),
        lower=tail_aligned(stats.mean - width, series.index, name="bb_lower"),
    )


def true_range(
    close: np.ndarray,
    high: np.ndarray,
    low: np.ndarray,
) -> np.ndarray:
    """True range for positions 1..n-1: max(h - l, |h - prev close|, |l - prev close|)."""
    prev_close = close[:-1]
    h = high[1:]
    l = low[1:]
    return np.maximum.reduce([h - l, np.abs(h - prev_close), np.abs(l - prev_close)])


def average_true_range(
    prices: PriceInput,
    period: int = ATR_PERIOD,
    highs: Optional[Sequence[float]] = None,
    lows: Optional[Sequence[float]] = None,
    synthetic_spread: float = ATR_SYNTHETIC_SPREAD,
) -> ATRSeries:
    """
    Calculate ATR (Average True Range) as the mean of the last `period` true ranges.

    Uses measured highs/lows when given. Otherwise high and low are derived
    from the close with a fixed synthetic spread, and the result is flagged
    as approximated.

    Needs period + 1 prices; n prices yield n - period values.
    """
    check_window(period, "period")
    series = as_series(prices)
    close = series.values

    if highs is not None and lows is not None:
        high = np.asarray(highs, dtype=float)
        low = np.asarray(lows, dtype=float)
        if len(high) != len(close) or len(low) != len(close):
            raise InvalidInputError("highs and lows must have the same length as prices")
        approximated = False
        spread = None
    else:
        if not 0 <= synthetic_spread < 1:
            raise InvalidInputError(
                f"synthetic_spread must be in [0, 1), got {synthetic_spread}"
            )
        high = close * (1 + synthetic_spread)
        low = close * (1 - synthetic_spread)
        approximated = True
        spread = synthetic_spread

    if len(close) < period + 1:
        values = np.empty(0)
    else:
        values = rolling_mean(true_range(close, high, low), period)
    return ATRSeries(tail_aligned(values, series.index, name="atr"), approximated, spread)


def period_returns(prices: PriceInput) -> np.ndarray:
    """Period-over-period returns, skipping steps whose base price is zero."""
    values = as_series(prices).values
    if len(values) < 2:
        return np.empty(0)
    base = values[:-1]
    valid = base > 0
    return (values[1:][valid] - base[valid]) / base[valid]


def pct_volatility(prices: PriceInput, window: Optional[int] = None) -> Optional[float]:
    """
    Population standard deviation of returns, as a percentage.

    Computed over the full series unless a trailing `window` of returns is
    requested. Returns None when there are no returns (or fewer than `window`).
    """
    returns = period_returns(prices)
    if window is not None:
        check_window(window)
        if len(returns) < window:
            return None
        returns = returns[-window:]
    if len(returns) == 0:
        return None
    return float(np.std(returns) * 100)


def price_change_pct(prices: PriceInput) -> Optional[float]:
    """Percentage change of the last price over the previous one."""
    values = as_series(prices).values
    if len(values) < 2 or values[-2] == 0:
        return None
    return float((values[-1] - values[-2]) / values[-2] * 100)
