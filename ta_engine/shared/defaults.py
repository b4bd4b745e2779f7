"""
Centralized default values for indicator and scoring parameters.

This is the SINGLE SOURCE OF TRUTH for all engine parameter defaults.
All modules should import from here to ensure consistency.

The default configuration covers the union of both historical engine
variants (SMA/RSI/Bollinger/levels plus stochastic and ATR).
"""

# Moving averages
SMA_PERIODS = (20, 50)
EMA_PERIODS = (12, 26)

# MACD (Moving Average Convergence Divergence) defaults
MACD_FAST = 12  # Standard default
MACD_SLOW = 26  # Standard default
MACD_SIGNAL = 9  # Standard default

# RSI (Relative Strength Index) defaults
RSI_PERIOD = 14
RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70

# Stochastic oscillator
STOCH_K_PERIOD = 14
STOCH_D_PERIOD = 3

# Bollinger Bands
BB_PERIOD = 20
BB_K = 2.0

# Average True Range
ATR_PERIOD = 14
# Close-only ATR synthesizes high/low as close * (1 +/- spread)
ATR_SYNTHETIC_SPREAD = 0.02

# Support / resistance detection
SR_LOOKBACK = 10
SR_MAX_LEVELS = 10
SR_TOUCH_TOLERANCE = 0.01  # Prices within 1% of a level count as a touch
SR_VOLUME_CONFIRMATION = 1.5  # Pivot volume >= 1.5x mean volume confirms a level

# Pattern heuristics (trailing window)
PATTERN_WINDOW = 20
IMPULSE_RATIO = 1.5
TRENDING_RANGE_PCT = 0.10  # range > 10% of mean price => trending
CONSOLIDATION_RANGE_PCT = 0.02  # range < 2% of mean price => consolidating
VOLUME_RISING_RATIO = 1.2
VOLUME_FALLING_RATIO = 0.8

# Composite scoring
SCORE_WEIGHTS = {
    "technical": 0.4,
    "fundamental": 0.3,
    "sentiment": 0.2,
    "structure": 0.1,
}
WEIGHT_TOLERANCE = 1e-9
NEUTRAL_SUB_SCORE = 0.5
BULLISH_THRESHOLD = 0.6
BEARISH_THRESHOLD = 0.4
HIGH_RISK_UPPER = 0.7
HIGH_RISK_LOWER = 0.3
VOLATILITY_RISK_PCT = 5.0  # pct_volatility at or above this => at least MEDIUM risk
PREDICTION_TIMEFRAME = "24h-7d"

# Market-structure derivation (raw market data -> sub-scores)
LIQUIDITY_THRESHOLD = 0.1  # volume / market cap
INSTITUTIONAL_MARKET_CAP = 1_000_000_000
HIGH_VOLATILITY_CHANGE_PCT = 10.0

# Trading plan position sizes (fraction of capital, low/high)
POSITION_SIZE_HIGH_RISK = (0.01, 0.02)
POSITION_SIZE_DEFAULT = (0.03, 0.05)
