"""
Technical indicator and composite scoring engine.

Turns a price series (with optional volumes and highs/lows) into trend,
momentum and volatility indicators, support/resistance levels, heuristic
pattern labels and a weighted directional prediction.

Typical use:
    from ta_engine import TimeSeries, analyze

    report = analyze(TimeSeries(prices=[...]))
    print(report.prediction.direction)
"""
from .analysis import analyze
from .cache import AnalysisCache, compute_fingerprint
from .scoring.config import AnalysisParams, ScoreWeights, SubScores, DEFAULT_PARAMS
from .scoring.market_structure import analyze_market_structure, sub_scores_from_market
from .shared.errors import InvalidInputError
from .shared.types import (
    AnalysisReport,
    Direction,
    Level,
    LevelKind,
    PhaseLabel,
    PredictionReport,
    RiskLevel,
    Strength,
    TimeSeries,
    TradingPlan,
    TrendLabel,
)

__version__ = "0.1.0"

__all__ = [
    'analyze',
    'AnalysisCache',
    'compute_fingerprint',
    'AnalysisParams',
    'ScoreWeights',
    'SubScores',
    'DEFAULT_PARAMS',
    'analyze_market_structure',
    'sub_scores_from_market',
    'InvalidInputError',
    'AnalysisReport',
    'Direction',
    'Level',
    'LevelKind',
    'PhaseLabel',
    'PredictionReport',
    'RiskLevel',
    'Strength',
    'TimeSeries',
    'TradingPlan',
    'TrendLabel',
]
