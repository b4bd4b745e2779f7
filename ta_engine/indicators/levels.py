"""
Support and resistance level detection from local price extrema.

A point i (lookback <= i < n - lookback) is a support when it holds the
minimum of the symmetric window [i - lookback, i + lookback] and is the first
index in that window to do so; resistance is the same test for the maximum.
Windows are scanned with monotonic-deque extrema, so detection is O(n) for
any lookback. Results are deterministic: identical input gives identical
levels.

Strength classification is pluggable: any callable matching StrengthScorer
can replace the default touch-count scorer.
"""
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..shared.defaults import (
    SR_LOOKBACK, SR_MAX_LEVELS, SR_TOUCH_TOLERANCE, SR_VOLUME_CONFIRMATION,
)
from ..shared.errors import InvalidInputError
from ..shared.types import Level, LevelKind, Strength
from .rolling import PriceInput, as_series, check_window, rolling_max, rolling_min

# (prices, pivot index, level kind, volumes or None) -> Strength
StrengthScorer = Callable[[np.ndarray, int, LevelKind, Optional[np.ndarray]], Strength]

_STRENGTH_ORDER = [Strength.WEAK, Strength.MEDIUM, Strength.STRONG]


class ConstantStrength:
    """Tags every level with the same strength."""

    def __init__(self, strength: Strength = Strength.MEDIUM):
        self.strength = strength

    def __call__(self, prices, index, kind, volumes) -> Strength:
        return self.strength


class TouchCountScorer:
    """
    Scores a level by how often price revisits it.

    A touch is any sample outside the pivot's own window whose price is within
    `tolerance` (relative) of the level. 0-1 touches is weak, 2-3 medium,
    4+ strong. When volumes are available and the pivot's volume is at least
    `volume_confirmation` times the mean volume, the level is upgraded one step.
    """

    def __init__(
        self,
        tolerance: float = SR_TOUCH_TOLERANCE,
        volume_confirmation: float = SR_VOLUME_CONFIRMATION,
        exclusion_radius: int = SR_LOOKBACK,
    ):
        self.tolerance = tolerance
        self.volume_confirmation = volume_confirmation
        self.exclusion_radius = exclusion_radius

    def count_touches(self, prices: np.ndarray, index: int) -> int:
        level = prices[index]
        near = np.abs(prices - level) <= self.tolerance * abs(level)
        lo = max(0, index - self.exclusion_radius)
        hi = min(len(prices), index + self.exclusion_radius + 1)
        near[lo:hi] = False
        return int(near.sum())

    def __call__(self, prices, index, kind, volumes) -> Strength:
        touches = self.count_touches(prices, index)
        if touches >= 4:
            rank = 2
        elif touches >= 2:
            rank = 1
        else:
            rank = 0

        if volumes is not None and len(volumes):
            mean_volume = float(np.mean(volumes))
            if mean_volume > 0 and volumes[index] >= self.volume_confirmation * mean_volume:
                rank = min(rank + 1, 2)

        return _STRENGTH_ORDER[rank]


def _plain_timestamp(value: Any) -> Any:
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value)
    if isinstance(value, np.generic):
        return value.item()
    return value


class SupportResistanceDetector:
    """Detects support/resistance levels at local extrema."""

    def __init__(
        self,
        lookback: int = SR_LOOKBACK,
        max_levels: int = SR_MAX_LEVELS,
        strength_scorer: Optional[StrengthScorer] = None,
    ):
        """
        Initialize the detector.

        Args:
            lookback: Radius of the symmetric window around each candidate (>= 1)
            max_levels: Number of most recent levels to return (>= 1)
            strength_scorer: Callable classifying each level (default: TouchCountScorer)
        """
        check_window(lookback, "lookback")
        check_window(max_levels, "max_levels")
        self.lookback = lookback
        self.max_levels = max_levels
        self.strength_scorer = strength_scorer or TouchCountScorer(exclusion_radius=lookback)

    def find_pivots(self, prices: PriceInput) -> List[tuple]:
        """
        Find every pivot in scan order.

        Returns:
            List of (index, LevelKind) tuples; support precedes resistance at
            the same index
        """
        values = as_series(prices).values
        window = 2 * self.lookback + 1
        lows = rolling_min(values, window).indices
        highs = rolling_max(values, window).indices

        pivots = []
        for start in range(len(lows)):
            centre = start + self.lookback
            if lows[start] == centre:
                pivots.append((centre, LevelKind.SUPPORT))
            if highs[start] == centre:
                pivots.append((centre, LevelKind.RESISTANCE))
        return pivots

    def detect(
        self,
        prices: PriceInput,
        volumes: Optional[Sequence[float]] = None,
    ) -> List[Level]:
        """
        Detect the most recent support/resistance levels.

        Args:
            prices: Price series (a Series index supplies level timestamps)
            volumes: Optional volume sequence aligned with prices

        Returns:
            Up to max_levels levels in chronological order of detection
        """
        series = as_series(prices)
        values = series.values
        volume_values = None
        if volumes is not None:
            volume_values = np.asarray(volumes, dtype=float)
            if len(volume_values) != len(values):
                raise InvalidInputError(
                    f"volumes length ({len(volume_values)}) must match prices length ({len(values)})"
                )

        pivots = self.find_pivots(values)[-self.max_levels:]
        return [
            Level(
                kind=kind,
                price=float(values[i]),
                strength=self.strength_scorer(values, i, kind, volume_values),
                index=i,
                timestamp=_plain_timestamp(series.index[i]),
            )
            for i, kind in pivots
        ]
