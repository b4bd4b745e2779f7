#!/usr/bin/env python3
"""
Parameter reference CLI.

Shows all configurable analysis parameters, their constraints, and defaults.
"""
import sys

from ta_engine.shared.defaults import (
    SMA_PERIODS, EMA_PERIODS, MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT, STOCH_K_PERIOD, STOCH_D_PERIOD,
    BB_PERIOD, BB_K, ATR_PERIOD, ATR_SYNTHETIC_SPREAD,
    SR_LOOKBACK, SR_MAX_LEVELS,
    PATTERN_WINDOW, IMPULSE_RATIO, TRENDING_RANGE_PCT, CONSOLIDATION_RANGE_PCT,
    SCORE_WEIGHTS, BULLISH_THRESHOLD, BEARISH_THRESHOLD,
    HIGH_RISK_UPPER, HIGH_RISK_LOWER, VOLATILITY_RISK_PCT,
    POSITION_SIZE_HIGH_RISK, POSITION_SIZE_DEFAULT,
)


def main():
    """Print all configurable parameters with their constraints and defaults."""

    print("=" * 80)
    print("ANALYSIS ENGINE PARAMETER REFERENCE")
    print("=" * 80)
    print()

    print("TREND (YAML: indicators.sma / indicators.ema / indicators.macd)")
    print("-" * 80)
    print(f"  sma.periods         {list(SMA_PERIODS)} (default), each >= 1")
    print(f"  ema.periods         {list(EMA_PERIODS)} (default), each >= 1")
    print("                      EMA is seeded with the SMA of its first window")
    print(f"  macd.fast           {MACD_FAST} (default)")
    print(f"  macd.slow           {MACD_SLOW} (default), must be > fast")
    print(f"  macd.signal         {MACD_SIGNAL} (default)")
    print()

    print("MOMENTUM (YAML: indicators.rsi / indicators.stochastic)")
    print("-" * 80)
    print(f"  rsi.period          {RSI_PERIOD} (default), Wilder smoothing")
    print(f"  rsi.oversold        {RSI_OVERSOLD} (default)")
    print(f"  rsi.overbought      {RSI_OVERBOUGHT} (default)")
    print("                      Requires 0 <= oversold < overbought <= 100")
    print(f"  stochastic.k_period {STOCH_K_PERIOD} (default)")
    print(f"  stochastic.d_period {STOCH_D_PERIOD} (default)")
    print()

    print("VOLATILITY (YAML: indicators.bollinger / indicators.atr)")
    print("-" * 80)
    print(f"  bollinger.period    {BB_PERIOD} (default)")
    print(f"  bollinger.k         {BB_K} (default), must be > 0")
    print(f"  atr.period          {ATR_PERIOD} (default)")
    print(f"  atr.synthetic_spread {ATR_SYNTHETIC_SPREAD} (default), in [0, 1)")
    print("                      Used only when no measured highs/lows are supplied;")
    print("                      the result is flagged approximated")
    print()

    print("SUPPORT / RESISTANCE (YAML: levels)")
    print("-" * 80)
    print(f"  lookback            {SR_LOOKBACK} (default), pivot radius in samples")
    print(f"  max_levels          {SR_MAX_LEVELS} (default), most recent levels kept")
    print()

    print("PATTERNS (YAML: patterns)")
    print("-" * 80)
    print(f"  window              {PATTERN_WINDOW} (default), trailing samples")
    print(f"  impulse_ratio       {IMPULSE_RATIO} (default), >= 1")
    print(f"  trending_range_pct  {TRENDING_RANGE_PCT} (default)")
    print(f"  consolidation_range_pct {CONSOLIDATION_RANGE_PCT} (default), must be < trending")
    print()

    print("SCORING (YAML: scoring)")
    print("-" * 80)
    for name, weight in SCORE_WEIGHTS.items():
        print(f"  weights.{name:<12}{weight} (default)")
    print("                      Each >= 0, must sum to 1.0")
    print(f"  volatility_risk_pct {VOLATILITY_RISK_PCT} (default)")
    print()
    print(f"  Direction: score > {BULLISH_THRESHOLD} BULLISH, < {BEARISH_THRESHOLD} BEARISH, else NEUTRAL")
    print(f"  Risk: HIGH when score > {HIGH_RISK_UPPER} or < {HIGH_RISK_LOWER}")
    print(f"  Position size: {POSITION_SIZE_HIGH_RISK} at HIGH risk, else {POSITION_SIZE_DEFAULT}")
    print()

    print("=" * 80)
    print()
    print("USAGE EXAMPLES:")
    print("-" * 80)
    print()
    print("  ta-analyze --data data/btc.csv")
    print("  ta-analyze --data data/btc.json --config params.yaml --chart btc.png")
    print()
    print("=" * 80)

    return 0


if __name__ == "__main__":
    sys.exit(main())
