"""
Shared types for the analysis engine.

This module consolidates the input TimeSeries, the enums used for labels,
and the immutable report dataclasses produced by analyze(), so that every
indicator module and the scorer agree on one set of types.
"""
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import InvalidInputError


class LevelKind(Enum):
    """Kind of price level."""
    SUPPORT = "support"
    RESISTANCE = "resistance"


class Strength(Enum):
    """Qualitative strength of a support/resistance level."""
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


class Direction(Enum):
    """Composite directional call."""
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class RiskLevel(Enum):
    """Risk label attached to a prediction."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TrendLabel(Enum):
    """Impulse label from the up/down move count (heuristic, not Elliott Wave proper)."""
    BULLISH_IMPULSE = "bullish_impulse"
    BEARISH_IMPULSE = "bearish_impulse"
    UNKNOWN = "unknown"


class PhaseLabel(Enum):
    """Market phase from trailing range vs mean price (heuristic, not Wyckoff proper)."""
    TRENDING = "trending"
    CONSOLIDATING = "consolidating"
    TRANSITIONAL = "transitional"


class VolumeTrend(Enum):
    RISING = "rising"
    FALLING = "falling"
    FLAT = "flat"
    NEUTRAL = "neutral"  # No volume data


class PriceVolumeRelationship(Enum):
    CONFIRMING = "confirming"
    DIVERGING = "diverging"
    NEUTRAL = "neutral"


def _as_readonly(values: Any, name: str, length: Optional[int] = None) -> np.ndarray:
    """Convert to a read-only 1-D float array, rejecting NaN/inf and negatives."""
    arr = np.array(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if length is not None and len(arr) != length:
        raise InvalidInputError(
            f"{name} length ({len(arr)}) must match prices length ({length})"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} must be finite (no NaN or inf)")
    if np.any(arr < 0):
        raise InvalidInputError(f"{name} must be non-negative")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class TimeSeries:
    """
    Ordered price series with optional parallel volume and high/low sequences.

    Immutable once built: every sequence is stored as a read-only numpy array.
    Timestamps are kept as given (epoch millis, datetimes, or any sortable
    label); duplicates are allowed and treated positionally.
    """
    prices: np.ndarray
    timestamps: Optional[np.ndarray] = None
    volumes: Optional[np.ndarray] = None
    highs: Optional[np.ndarray] = None
    lows: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        prices = _as_readonly(self.prices, "prices")
        n = len(prices)
        object.__setattr__(self, "prices", prices)

        if self.timestamps is None:
            timestamps = np.arange(n)
        else:
            timestamps = np.array(self.timestamps)
            if timestamps.ndim != 1 or len(timestamps) != n:
                raise InvalidInputError(
                    f"timestamps length ({len(timestamps)}) must match prices length ({n})"
                )
        timestamps.setflags(write=False)
        object.__setattr__(self, "timestamps", timestamps)

        for name in ("volumes", "highs", "lows"):
            values = getattr(self, name)
            if values is not None:
                object.__setattr__(self, name, _as_readonly(values, name, length=n))

        if (self.highs is None) != (self.lows is None):
            raise InvalidInputError("highs and lows must be provided together")
        if self.highs is not None and np.any(self.highs < self.lows):
            raise InvalidInputError("highs must be >= lows at every sample")

    def __len__(self) -> int:
        return len(self.prices)

    @property
    def close(self) -> pd.Series:
        """Prices as a Series indexed by timestamp."""
        return pd.Series(self.prices, index=pd.Index(self.timestamps), name="Close")

    @property
    def volume(self) -> Optional[pd.Series]:
        if self.volumes is None:
            return None
        return pd.Series(self.volumes, index=pd.Index(self.timestamps), name="Volume")

    @property
    def has_range(self) -> bool:
        """True when measured highs/lows are available."""
        return self.highs is not None

    def with_volumes(self, volumes: Sequence[float]) -> "TimeSeries":
        """Return a copy carrying the given volume sequence."""
        return replace(self, volumes=volumes)

    @classmethod
    def from_pairs(
        cls,
        pairs: Sequence[Sequence[Any]],
        volumes: Optional[Sequence[float]] = None,
    ) -> "TimeSeries":
        """
        Build from ``[[timestamp, price], ...]`` pairs as served by market-data APIs.

        Volume pairs in the same ``[timestamp, value]`` shape are accepted too.
        """
        timestamps = [p[0] for p in pairs]
        prices = [p[1] for p in pairs]
        if volumes is not None:
            volumes = [v[1] if isinstance(v, (list, tuple)) else v for v in volumes]
        return cls(prices=prices, timestamps=timestamps, volumes=volumes)

    @classmethod
    def from_series(cls, data: Any) -> "TimeSeries":
        """
        Build from a pandas Series of prices, or a DataFrame with a Close
        column and optional High/Low/Volume columns.
        """
        if isinstance(data, pd.Series):
            return cls(prices=data.values, timestamps=data.index.values)
        if isinstance(data, pd.DataFrame):
            if "Close" not in data.columns:
                raise InvalidInputError(
                    f"DataFrame needs a 'Close' column. Available: {list(data.columns)}"
                )
            has_range = "High" in data.columns and "Low" in data.columns
            return cls(
                prices=data["Close"].values,
                timestamps=data.index.values,
                volumes=data["Volume"].values if "Volume" in data.columns else None,
                highs=data["High"].values if has_range else None,
                lows=data["Low"].values if has_range else None,
            )
        raise InvalidInputError(f"Unsupported data type: {type(data).__name__}")


@dataclass(frozen=True)
class Level:
    """A detected support or resistance level."""
    kind: LevelKind
    price: float
    strength: Strength
    index: int  # Position in the input series
    timestamp: Any = None


@dataclass(frozen=True)
class PriceTargets:
    support: Optional[float] = None
    resistance: Optional[float] = None


@dataclass(frozen=True)
class MACDSnapshot:
    line: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class StochasticSnapshot:
    k: float
    d: Optional[float] = None  # Needs d_period %K values


@dataclass(frozen=True)
class BollingerSnapshot:
    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class ATRResult:
    """
    Latest average true range.

    When ``approximated`` is True the highs/lows were synthesized from the
    close as close * (1 +/- synthetic_spread); the value is not a measured ATR.
    """
    value: float
    approximated: bool
    synthetic_spread: Optional[float] = None


@dataclass(frozen=True)
class TrendReport:
    sma: Dict[int, Optional[float]]
    ema: Dict[int, Optional[float]]
    macd: Optional[MACDSnapshot] = None


@dataclass(frozen=True)
class MomentumReport:
    rsi: Optional[float] = None
    stochastic: Optional[StochasticSnapshot] = None


@dataclass(frozen=True)
class VolatilityReport:
    bollinger: Optional[BollingerSnapshot] = None
    atr: Optional[ATRResult] = None
    pct_volatility: Optional[float] = None
    price_change_pct: Optional[float] = None


@dataclass(frozen=True)
class PatternReport:
    trend_label: TrendLabel
    trend_confidence: float  # 0-100, from the up/down imbalance
    phase_label: PhaseLabel
    volume_trend: VolumeTrend = VolumeTrend.NEUTRAL
    price_volume_relationship: PriceVolumeRelationship = PriceVolumeRelationship.NEUTRAL


@dataclass(frozen=True)
class PredictionReport:
    """Composite directional forecast. Built once per analysis, never mutated."""
    direction: Direction
    confidence: float  # 0-100
    risk_level: RiskLevel
    price_targets: PriceTargets
    score: float  # Weighted composite score, 0-1
    sub_scores: Dict[str, float] = field(default_factory=dict)
    timeframe: str = "24h-7d"


@dataclass(frozen=True)
class TradingPlan:
    """Stop/target suggestion derived from the prediction's price targets."""
    entry_points: PriceTargets
    stop_loss: Optional[float]
    take_profit: Optional[float]
    position_size_pct: Tuple[float, float]


@dataclass(frozen=True)
class AnalysisReport:
    """Full output of analyze(). Every field is present; absent values are None."""
    trend: TrendReport
    momentum: MomentumReport
    volatility: VolatilityReport
    levels: List[Level]
    pattern: PatternReport
    prediction: PredictionReport
    trading_plan: TradingPlan
    last_price: float
    sample_count: int
    degraded: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict (enums become their values, tuples become lists)."""
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (pd.Timestamp, np.datetime64)):
        return pd.Timestamp(value).isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, np.generic):
        return value.item()
    return value
