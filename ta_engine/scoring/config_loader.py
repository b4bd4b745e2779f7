"""
YAML configuration loader for analysis parameters.

Loads AnalysisParams from YAML files, allowing parameter sets to be shared
and modified without code changes. Missing keys fall back to shared.defaults.

Example document:

    indicators:
      sma: {periods: [20, 50]}
      ema: {periods: [12, 26]}
      macd: {fast: 12, slow: 26, signal: 9}
      rsi: {period: 14, oversold: 30, overbought: 70}
      stochastic: {k_period: 14, d_period: 3}
      bollinger: {period: 20, k: 2.0}
      atr: {period: 14, synthetic_spread: 0.02}
    levels: {lookback: 10, max_levels: 10}
    patterns:
      window: 20
      impulse_ratio: 1.5
      trending_range_pct: 0.10
      consolidation_range_pct: 0.02
    scoring:
      weights: {technical: 0.4, fundamental: 0.3, sentiment: 0.2, structure: 0.1}
      volatility_risk_pct: 5.0
"""
import yaml
from pathlib import Path
from typing import Union

from .config import AnalysisParams
from ..shared.defaults import *


def load_params_from_yaml(yaml_path: Union[str, Path]) -> AnalysisParams:
    """
    Load analysis parameters from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        AnalysisParams object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty or holds invalid parameters
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")

    # Indicators
    indicators = config_dict.get('indicators', {})
    sma = indicators.get('sma', {})
    ema = indicators.get('ema', {})
    macd = indicators.get('macd', {})
    rsi = indicators.get('rsi', {})
    stochastic = indicators.get('stochastic', {})
    bollinger = indicators.get('bollinger', {})
    atr = indicators.get('atr', {})

    levels = config_dict.get('levels', {})
    patterns = config_dict.get('patterns', {})
    scoring = config_dict.get('scoring', {})

    return AnalysisParams(
        # Trend
        sma_periods=tuple(sma.get('periods', SMA_PERIODS)),
        ema_periods=tuple(ema.get('periods', EMA_PERIODS)),
        macd_fast=macd.get('fast', MACD_FAST),
        macd_slow=macd.get('slow', MACD_SLOW),
        macd_signal=macd.get('signal', MACD_SIGNAL),

        # Momentum
        rsi_period=rsi.get('period', RSI_PERIOD),
        rsi_oversold=rsi.get('oversold', RSI_OVERSOLD),
        rsi_overbought=rsi.get('overbought', RSI_OVERBOUGHT),
        stoch_k_period=stochastic.get('k_period', STOCH_K_PERIOD),
        stoch_d_period=stochastic.get('d_period', STOCH_D_PERIOD),

        # Volatility
        bb_period=bollinger.get('period', BB_PERIOD),
        bb_k=float(bollinger.get('k', BB_K)),
        atr_period=atr.get('period', ATR_PERIOD),
        atr_synthetic_spread=float(atr.get('synthetic_spread', ATR_SYNTHETIC_SPREAD)),

        # Levels
        sr_lookback=levels.get('lookback', SR_LOOKBACK),
        sr_max_levels=levels.get('max_levels', SR_MAX_LEVELS),

        # Patterns
        pattern_window=patterns.get('window', PATTERN_WINDOW),
        impulse_ratio=float(patterns.get('impulse_ratio', IMPULSE_RATIO)),
        trending_range_pct=float(patterns.get('trending_range_pct', TRENDING_RANGE_PCT)),
        consolidation_range_pct=float(
            patterns.get('consolidation_range_pct', CONSOLIDATION_RANGE_PCT)
        ),

        # Scoring
        weights=dict(scoring.get('weights', SCORE_WEIGHTS)),
        volatility_risk_pct=float(scoring.get('volatility_risk_pct', VOLATILITY_RISK_PCT)),
    )


def save_params_to_yaml(params: AnalysisParams, yaml_path: Union[str, Path]):
    """
    Save analysis parameters to YAML file.

    Args:
        params: AnalysisParams object to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)

    # Build nested structure
    config_dict = {
        'indicators': {
            'sma': {'periods': list(params.sma_periods)},
            'ema': {'periods': list(params.ema_periods)},
            'macd': {
                'fast': params.macd_fast,
                'slow': params.macd_slow,
                'signal': params.macd_signal,
            },
            'rsi': {
                'period': params.rsi_period,
                'oversold': params.rsi_oversold,
                'overbought': params.rsi_overbought,
            },
            'stochastic': {
                'k_period': params.stoch_k_period,
                'd_period': params.stoch_d_period,
            },
            'bollinger': {
                'period': params.bb_period,
                'k': params.bb_k,
            },
            'atr': {
                'period': params.atr_period,
                'synthetic_spread': params.atr_synthetic_spread,
            },
        },

        'levels': {
            'lookback': params.sr_lookback,
            'max_levels': params.sr_max_levels,
        },

        'patterns': {
            'window': params.pattern_window,
            'impulse_ratio': params.impulse_ratio,
            'trending_range_pct': params.trending_range_pct,
            'consolidation_range_pct': params.consolidation_range_pct,
        },

        'scoring': {
            'weights': params.weights.as_dict(),
            'volatility_risk_pct': params.volatility_risk_pct,
        },
    }

    # Ensure parent directory exists
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    # Write YAML
    with open(yaml_path, 'w') as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
