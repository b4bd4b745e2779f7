"""
Indicator calculation module.

Provides every indicator used by the analysis engine:
- Sliding-window statistics (O(n) sum/mean/variance/extrema)
- Trend indicators (SMA, EMA, MACD)
- Momentum oscillators (RSI, stochastic)
- Volatility measures (Bollinger Bands, ATR, return volatility)
- Support/resistance detection
- Heuristic trend-impulse and market-phase labels

All indicators are independent pure functions over the same input series.
"""
from .rolling import (
    WindowStats,
    WindowExtremes,
    rolling_stats,
    rolling_sum,
    rolling_mean,
    rolling_std,
    rolling_max,
    rolling_min,
)
from .trend import sma, ema, macd, latest, MACDResult
from .momentum import rsi, stochastic, StochasticResult
from .volatility import (
    bollinger_bands,
    average_true_range,
    pct_volatility,
    price_change_pct,
    BollingerResult,
    ATRSeries,
)
from .levels import (
    SupportResistanceDetector,
    TouchCountScorer,
    ConstantStrength,
    StrengthScorer,
)
from .patterns import (
    classify_trend_impulse,
    classify_phase,
    impulse_confidence,
    ImpulseResult,
    PhaseResult,
)

__all__ = [
    'WindowStats',
    'WindowExtremes',
    'rolling_stats',
    'rolling_sum',
    'rolling_mean',
    'rolling_std',
    'rolling_max',
    'rolling_min',
    'sma',
    'ema',
    'macd',
    'latest',
    'MACDResult',
    'rsi',
    'stochastic',
    'StochasticResult',
    'bollinger_bands',
    'average_true_range',
    'pct_volatility',
    'price_change_pct',
    'BollingerResult',
    'ATRSeries',
    'SupportResistanceDetector',
    'TouchCountScorer',
    'ConstantStrength',
    'StrengthScorer',
    'classify_trend_impulse',
    'classify_phase',
    'impulse_confidence',
    'ImpulseResult',
    'PhaseResult',
]
