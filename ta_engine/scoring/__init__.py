"""
Composite scoring module.

Provides:
- AnalysisParams / ScoreWeights / SubScores configuration with validation
- YAML loading and saving of AnalysisParams
- Market-structure sub-score derivation from raw market data
- CompositeScorer and trading plan construction
"""
from .config import AnalysisParams, ScoreWeights, SubScores, DEFAULT_PARAMS, resolve_params
from .config_loader import load_params_from_yaml, save_params_to_yaml
from .market_structure import MarketStructure, analyze_market_structure, sub_scores_from_market
from .composite import (
    CompositeScorer,
    build_trading_plan,
    classify_direction,
    classify_risk,
    confidence_from_score,
)

__all__ = [
    'AnalysisParams',
    'ScoreWeights',
    'SubScores',
    'DEFAULT_PARAMS',
    'resolve_params',
    'load_params_from_yaml',
    'save_params_to_yaml',
    'MarketStructure',
    'analyze_market_structure',
    'sub_scores_from_market',
    'CompositeScorer',
    'build_trading_plan',
    'classify_direction',
    'classify_risk',
    'confidence_from_score',
]
