"""
Analysis configuration: indicator parameters, score weights and sub-scores.

Config validation runs at construction time (fail fast with clear errors).
Every failure raises InvalidInputError, a ValueError subclass.
"""
import math
from dataclasses import dataclass, field, asdict
from typing import Dict, Optional, Tuple, Union

from ..shared.defaults import (
    SMA_PERIODS, EMA_PERIODS,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    STOCH_K_PERIOD, STOCH_D_PERIOD,
    BB_PERIOD, BB_K,
    ATR_PERIOD, ATR_SYNTHETIC_SPREAD,
    SR_LOOKBACK, SR_MAX_LEVELS,
    PATTERN_WINDOW, IMPULSE_RATIO, TRENDING_RANGE_PCT, CONSOLIDATION_RANGE_PCT,
    SCORE_WEIGHTS, WEIGHT_TOLERANCE, NEUTRAL_SUB_SCORE,
    VOLATILITY_RISK_PCT,
)
from ..shared.errors import InvalidInputError


@dataclass(frozen=True)
class ScoreWeights:
    """Weights of the four sub-scores. Each >= 0; together they must sum to 1.0."""
    technical: float = SCORE_WEIGHTS["technical"]
    fundamental: float = SCORE_WEIGHTS["fundamental"]
    sentiment: float = SCORE_WEIGHTS["sentiment"]
    structure: float = SCORE_WEIGHTS["structure"]

    def __post_init__(self) -> None:
        for name, value in self.as_dict().items():
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
                raise InvalidInputError(f"weight '{name}' must be a finite number >= 0, got {value!r}")
        total = sum(self.as_dict().values())
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise InvalidInputError(f"weights must sum to 1.0, got {total}")

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, weights: Dict[str, float]) -> "ScoreWeights":
        unknown = set(weights) - set(SCORE_WEIGHTS)
        if unknown:
            raise InvalidInputError(
                f"Unknown weight name(s): {sorted(unknown)}. Expected: {sorted(SCORE_WEIGHTS)}"
            )
        missing = set(SCORE_WEIGHTS) - set(weights)
        if missing:
            raise InvalidInputError(f"Missing weight(s): {sorted(missing)}")
        return cls(**weights)


@dataclass(frozen=True)
class SubScores:
    """
    Caller-supplied sub-scores in [0, 1] (0.5 = neutral).

    fundamental: market-structure / liquidity read
    sentiment: news or crowd sentiment
    structure: institutional interest
    """
    fundamental: float = NEUTRAL_SUB_SCORE
    sentiment: float = NEUTRAL_SUB_SCORE
    structure: float = NEUTRAL_SUB_SCORE

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            if not isinstance(value, (int, float)) or not 0 <= value <= 1:
                raise InvalidInputError(f"sub-score '{name}' must be in [0, 1], got {value!r}")


def _validate_params(params: "AnalysisParams") -> None:
    """Validate indicator and scoring parameters. Raises InvalidInputError on failure."""
    for name in ("sma_periods", "ema_periods"):
        periods = getattr(params, name)
        if not periods:
            continue
        for period in periods:
            if isinstance(period, bool) or not isinstance(period, int) or period < 1:
                raise InvalidInputError(f"{name} entries must be integers >= 1, got {period!r}")
        if len(set(periods)) != len(periods):
            raise InvalidInputError(f"{name} contains duplicates: {list(periods)}")

    for name in (
        "rsi_period", "bb_period", "atr_period", "stoch_k_period", "stoch_d_period",
        "macd_fast", "macd_slow", "macd_signal",
        "sr_lookback", "sr_max_levels", "pattern_window",
    ):
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidInputError(f"{name} must be an integer >= 1, got {value!r}")

    if params.macd_fast >= params.macd_slow:
        raise InvalidInputError(
            f"MACD fast ({params.macd_fast}) must be less than slow ({params.macd_slow})"
        )
    if not 0 <= params.rsi_oversold < params.rsi_overbought <= 100:
        raise InvalidInputError(
            f"RSI oversold ({params.rsi_oversold}) must be less than overbought "
            f"({params.rsi_overbought}), both within [0, 100]"
        )
    if not (isinstance(params.bb_k, (int, float)) and math.isfinite(params.bb_k) and params.bb_k > 0):
        raise InvalidInputError(f"bb_k must be > 0, got {params.bb_k!r}")
    if not 0 <= params.atr_synthetic_spread < 1:
        raise InvalidInputError(
            f"atr_synthetic_spread must be in [0, 1), got {params.atr_synthetic_spread}"
        )
    if params.impulse_ratio < 1:
        raise InvalidInputError(f"impulse_ratio must be >= 1, got {params.impulse_ratio}")
    if not 0 <= params.consolidation_range_pct < params.trending_range_pct:
        raise InvalidInputError(
            f"consolidation_range_pct ({params.consolidation_range_pct}) must be >= 0 and "
            f"less than trending_range_pct ({params.trending_range_pct})"
        )
    if params.volatility_risk_pct < 0:
        raise InvalidInputError(
            f"volatility_risk_pct must be >= 0, got {params.volatility_risk_pct}"
        )


@dataclass(frozen=True)
class AnalysisParams:
    """Parameters of one analyze() call. Defaults come from shared.defaults."""

    # Trend
    sma_periods: Tuple[int, ...] = SMA_PERIODS
    ema_periods: Tuple[int, ...] = EMA_PERIODS
    macd_fast: int = MACD_FAST
    macd_slow: int = MACD_SLOW
    macd_signal: int = MACD_SIGNAL

    # Momentum
    rsi_period: int = RSI_PERIOD
    rsi_oversold: float = RSI_OVERSOLD
    rsi_overbought: float = RSI_OVERBOUGHT
    stoch_k_period: int = STOCH_K_PERIOD
    stoch_d_period: int = STOCH_D_PERIOD

    # Volatility
    bb_period: int = BB_PERIOD
    bb_k: float = BB_K
    atr_period: int = ATR_PERIOD
    atr_synthetic_spread: float = ATR_SYNTHETIC_SPREAD

    # Levels
    sr_lookback: int = SR_LOOKBACK
    sr_max_levels: int = SR_MAX_LEVELS

    # Patterns
    pattern_window: int = PATTERN_WINDOW
    impulse_ratio: float = IMPULSE_RATIO
    trending_range_pct: float = TRENDING_RANGE_PCT
    consolidation_range_pct: float = CONSOLIDATION_RANGE_PCT

    # Scoring
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    volatility_risk_pct: float = VOLATILITY_RISK_PCT

    def __post_init__(self) -> None:
        # Accept lists and plain dicts (e.g. from YAML) and normalize them
        object.__setattr__(self, "sma_periods", tuple(self.sma_periods or ()))
        object.__setattr__(self, "ema_periods", tuple(self.ema_periods or ()))
        if isinstance(self.weights, dict):
            object.__setattr__(self, "weights", ScoreWeights.from_dict(self.weights))
        elif not isinstance(self.weights, ScoreWeights):
            raise InvalidInputError(f"weights must be a ScoreWeights or dict, got {self.weights!r}")
        _validate_params(self)

    def fingerprint_payload(self) -> Dict[str, object]:
        """Plain dict of every parameter (used for cache keys)."""
        return asdict(self)


DEFAULT_PARAMS = AnalysisParams()


def resolve_params(params: Optional[Union[AnalysisParams, Dict[str, object]]]) -> AnalysisParams:
    """Accept None (defaults), an AnalysisParams, or a dict of overrides."""
    if params is None:
        return DEFAULT_PARAMS
    if isinstance(params, AnalysisParams):
        return params
    if isinstance(params, dict):
        try:
            return AnalysisParams(**params)
        except TypeError as e:
            raise InvalidInputError(f"Invalid analysis parameters: {e}") from e
    raise InvalidInputError(f"params must be AnalysisParams or dict, got {type(params).__name__}")
