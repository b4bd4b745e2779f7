"""
Sliding-window primitives shared by every indicator.

All functions run in O(n) for a series of length n regardless of the window
size: window means and variances are updated incrementally (add the entering
element, remove the leaving one) and window extrema use a monotonic deque.

A window of size w over n values yields exactly n - w + 1 results, one per
valid window end position. w > n yields empty results (insufficient data).
"""
from collections import deque
from typing import NamedTuple, Sequence, Union

import numpy as np
import pandas as pd

from ..shared.errors import InvalidInputError

PriceInput = Union[pd.Series, np.ndarray, Sequence[float]]


class WindowStats(NamedTuple):
    """Per-window sum, mean and population variance (aligned arrays)."""
    sum: np.ndarray
    mean: np.ndarray
    variance: np.ndarray

    @property
    def std(self) -> np.ndarray:
        return np.sqrt(self.variance)


class WindowExtremes(NamedTuple):
    """Per-window extreme value and the position (in the input) holding it."""
    values: np.ndarray
    indices: np.ndarray


def as_series(prices: PriceInput) -> pd.Series:
    """Coerce any price input to a float Series (positional index for arrays)."""
    if isinstance(prices, pd.Series):
        return prices.astype(float)
    return pd.Series(np.asarray(prices, dtype=float))


def tail_aligned(values: np.ndarray, index: pd.Index, name: str = None) -> pd.Series:
    """Wrap window results as a Series aligned to the tail of the input index."""
    if len(values) == 0:
        return pd.Series([], index=index[:0], dtype=float, name=name)
    return pd.Series(values, index=index[len(index) - len(values):], name=name)


def check_window(window: int, name: str = "window") -> None:
    """Reject non-integer or < 1 windows (a parameter error, not insufficient data)."""
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)) or window < 1:
        raise InvalidInputError(f"{name} must be an integer >= 1, got {window!r}")


def rolling_stats(values: Sequence[float], window: int) -> WindowStats:
    """
    Sliding sum, mean and population variance in one incremental pass.

    Mean and the sum of squared deviations (M2) are updated Welford-style as
    one element enters and one leaves, so the variance never depends on how
    far prices have drifted from earlier samples. Every `window` steps the
    current window is recomputed exactly, which bounds accumulated rounding
    while keeping the pass O(n). Constant windows report exactly zero variance.

    Args:
        values: Input sequence
        window: Window size (>= 1)

    Returns:
        WindowStats with n - window + 1 entries (empty if window > n)
    """
    check_window(window)
    x = np.asarray(values, dtype=float)
    n = len(x)
    if window > n:
        empty = np.empty(0)
        return WindowStats(empty, empty.copy(), empty.copy())

    count = n - window + 1
    means = np.empty(count)
    m2s = np.empty(count)

    mean = 0.0
    m2 = 0.0
    for start in range(count):
        end = start + window
        if start % window == 0:
            block = x[start:end]
            mean = float(block.mean())
            m2 = float(((block - mean) ** 2).sum())
        else:
            leaving = x[start - 1]
            entering = x[end - 1]
            delta = entering - leaving
            old_mean = mean
            mean += delta / window
            m2 += delta * (entering - mean + leaving - old_mean)
        means[start] = mean
        m2s[start] = m2

    variance = np.maximum(m2s / window, 0.0)
    flat = rolling_max(x, window).values == rolling_min(x, window).values
    variance[flat] = 0.0
    means[flat] = x[window - 1:][flat]
    return WindowStats(means * window, means, variance)


def rolling_sum(values: Sequence[float], window: int) -> np.ndarray:
    return rolling_stats(values, window).sum


def rolling_mean(values: Sequence[float], window: int) -> np.ndarray:
    return rolling_stats(values, window).mean


def rolling_std(values: Sequence[float], window: int) -> np.ndarray:
    """Population standard deviation of each window."""
    return rolling_stats(values, window).std


def _rolling_extreme(values: Sequence[float], window: int, is_max: bool) -> WindowExtremes:
    check_window(window)
    x = np.asarray(values, dtype=float)
    n = len(x)
    if window > n:
        return WindowExtremes(np.empty(0), np.empty(0, dtype=int))

    out_values = np.empty(n - window + 1)
    out_indices = np.empty(n - window + 1, dtype=int)
    candidates = deque()  # Indices; values monotonic from front to back

    for i in range(n):
        # Strict comparison keeps the earliest index on ties
        if is_max:
            while candidates and x[candidates[-1]] < x[i]:
                candidates.pop()
        else:
            while candidates and x[candidates[-1]] > x[i]:
                candidates.pop()
        candidates.append(i)

        if candidates[0] <= i - window:
            candidates.popleft()

        if i >= window - 1:
            out_values[i - window + 1] = x[candidates[0]]
            out_indices[i - window + 1] = candidates[0]

    return WindowExtremes(out_values, out_indices)


def rolling_max(values: Sequence[float], window: int) -> WindowExtremes:
    """Sliding maximum; on ties the earliest index in the window wins."""
    return _rolling_extreme(values, window, is_max=True)


def rolling_min(values: Sequence[float], window: int) -> WindowExtremes:
    """Sliding minimum; on ties the earliest index in the window wins."""
    return _rolling_extreme(values, window, is_max=False)
