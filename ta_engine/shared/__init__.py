"""
Shared types, errors and defaults for the analysis engine.

This module provides:
- TimeSeries input model and Level / report dataclasses
- Label enums (direction, risk, trend, phase, strength)
- InvalidInputError
- Centralized default values for all indicator parameters (see defaults.py)
"""
from .errors import InvalidInputError
from .types import (
    TimeSeries,
    Level,
    LevelKind,
    Strength,
    Direction,
    RiskLevel,
    TrendLabel,
    PhaseLabel,
    VolumeTrend,
    PriceVolumeRelationship,
    PriceTargets,
    PredictionReport,
    TradingPlan,
    AnalysisReport,
)

__all__ = [
    'InvalidInputError',
    'TimeSeries',
    'Level',
    'LevelKind',
    'Strength',
    'Direction',
    'RiskLevel',
    'TrendLabel',
    'PhaseLabel',
    'VolumeTrend',
    'PriceVolumeRelationship',
    'PriceTargets',
    'PredictionReport',
    'TradingPlan',
    'AnalysisReport',
]
