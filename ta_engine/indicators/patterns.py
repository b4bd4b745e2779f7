"""
Heuristic pattern labels over the trailing window of a price series.

- Trend impulse: an Elliott-Wave-flavoured label from counting up-moves vs
  down-moves. It is a proxy, not a wave count.
- Market phase: a Wyckoff-flavoured label from the trailing range relative to
  the mean price, plus a volume read when volumes are available.

Both are deterministic: the same input always yields the same labels and
confidence.
"""
from typing import NamedTuple, Optional, Sequence

import numpy as np

from ..shared.defaults import (
    PATTERN_WINDOW, IMPULSE_RATIO,
    TRENDING_RANGE_PCT, CONSOLIDATION_RANGE_PCT,
    VOLUME_RISING_RATIO, VOLUME_FALLING_RATIO,
)
from ..shared.errors import InvalidInputError
from ..shared.types import PhaseLabel, PriceVolumeRelationship, TrendLabel, VolumeTrend
from .rolling import PriceInput, as_series, check_window


class ImpulseResult(NamedTuple):
    label: TrendLabel
    confidence: float  # 0-100
    up_moves: int
    down_moves: int


class PhaseResult(NamedTuple):
    label: PhaseLabel
    range_pct: float  # (max - min) / mean over the window
    volume_trend: VolumeTrend
    price_volume_relationship: PriceVolumeRelationship


def impulse_confidence(up_moves: int, down_moves: int) -> float:
    """
    Confidence (0-100) from the move imbalance: 100 * |up - down| / (up + down).

    Monotonic in the imbalance; 0 when there are no moves or they balance.
    """
    total = up_moves + down_moves
    if total == 0:
        return 0.0
    return 100.0 * abs(up_moves - down_moves) / total


def classify_trend_impulse(
    prices: PriceInput,
    window: int = PATTERN_WINDOW,
    ratio: float = IMPULSE_RATIO,
) -> ImpulseResult:
    """
    Label the trailing window as a bullish/bearish impulse or unknown.

    bullish_impulse when up-moves > ratio * down-moves, bearish_impulse for
    the mirror case, unknown otherwise. Flat steps count as neither.
    """
    check_window(window)
    if ratio < 1:
        raise InvalidInputError(f"impulse ratio must be >= 1, got {ratio}")

    recent = as_series(prices).values[-window:]
    changes = np.diff(recent)
    up_moves = int(np.sum(changes > 0))
    down_moves = int(np.sum(changes < 0))

    if up_moves > down_moves * ratio:
        label = TrendLabel.BULLISH_IMPULSE
    elif down_moves > up_moves * ratio:
        label = TrendLabel.BEARISH_IMPULSE
    else:
        label = TrendLabel.UNKNOWN

    return ImpulseResult(label, impulse_confidence(up_moves, down_moves), up_moves, down_moves)


def _volume_trend(volumes: np.ndarray) -> VolumeTrend:
    if len(volumes) < 2:
        return VolumeTrend.NEUTRAL
    half = len(volumes) // 2
    earlier = float(np.mean(volumes[:half]))
    later = float(np.mean(volumes[half:]))
    if earlier == 0:
        return VolumeTrend.RISING if later > 0 else VolumeTrend.FLAT
    change = later / earlier
    if change > VOLUME_RISING_RATIO:
        return VolumeTrend.RISING
    if change < VOLUME_FALLING_RATIO:
        return VolumeTrend.FALLING
    return VolumeTrend.FLAT


def classify_phase(
    prices: PriceInput,
    volumes: Optional[Sequence[float]] = None,
    window: int = PATTERN_WINDOW,
    trending_pct: float = TRENDING_RANGE_PCT,
    consolidation_pct: float = CONSOLIDATION_RANGE_PCT,
) -> PhaseResult:
    """
    Label the trailing window's market phase.

    range > trending_pct * mean => trending, range < consolidation_pct * mean
    => consolidating, otherwise transitional. Without volumes the volume
    trend and price/volume relationship are neutral.
    """
    check_window(window)
    if not 0 <= consolidation_pct < trending_pct:
        raise InvalidInputError(
            f"consolidation threshold ({consolidation_pct}) must be >= 0 and below "
            f"trending threshold ({trending_pct})"
        )

    recent = as_series(prices).values[-window:]
    if len(recent) == 0:
        raise InvalidInputError("Cannot classify phase of an empty series")

    price_range = float(np.max(recent) - np.min(recent))
    mean_price = float(np.mean(recent))
    if mean_price > 0:
        range_pct = price_range / mean_price
    else:
        range_pct = 0.0 if price_range == 0 else float("inf")

    if range_pct > trending_pct:
        label = PhaseLabel.TRENDING
    elif range_pct < consolidation_pct:
        label = PhaseLabel.CONSOLIDATING
    else:
        label = PhaseLabel.TRANSITIONAL

    if volumes is None:
        return PhaseResult(label, range_pct, VolumeTrend.NEUTRAL, PriceVolumeRelationship.NEUTRAL)

    volume_values = np.asarray(volumes, dtype=float)[-window:]
    volume_trend = _volume_trend(volume_values)
    price_move = abs(recent[-1] / recent[0] - 1) if recent[0] > 0 else 0.0

    if volume_trend == VolumeTrend.RISING:
        relationship = PriceVolumeRelationship.CONFIRMING
    elif volume_trend == VolumeTrend.FALLING and price_move > consolidation_pct:
        relationship = PriceVolumeRelationship.DIVERGING
    else:
        relationship = PriceVolumeRelationship.NEUTRAL

    return PhaseResult(label, range_pct, volume_trend, relationship)
