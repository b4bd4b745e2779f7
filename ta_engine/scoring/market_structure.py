"""
Market-structure read and sub-score derivation from raw market data.

The surrounding service fetches market cap, traded volume, 24h change,
community up-vote share and a news sentiment score from external providers.
This module turns those raw numbers into the fundamental, sentiment and
structure sub-scores consumed by the composite scorer. It never performs
network calls itself.
"""
import math
from dataclasses import dataclass
from typing import Optional

from ..shared.defaults import (
    LIQUIDITY_THRESHOLD, INSTITUTIONAL_MARKET_CAP, HIGH_VOLATILITY_CHANGE_PCT,
    NEUTRAL_SUB_SCORE,
)
from ..shared.errors import InvalidInputError
from .config import SubScores


@dataclass(frozen=True)
class MarketStructure:
    """Qualitative market-structure snapshot for one asset."""
    liquidity_score: Optional[float]  # volume / market cap
    volatility_rating: str  # "high" or "normal"
    institutional_interest: str  # "high" or "medium"
    retail_sentiment: str  # "bullish", "bearish" or "neutral"
    market_cap_rank: Optional[int] = None


def _check_non_negative(name: str, value: Optional[float]) -> None:
    if value is not None and (not math.isfinite(value) or value < 0):
        raise InvalidInputError(f"{name} must be a finite number >= 0, got {value!r}")


def liquidity_score(total_volume: Optional[float], market_cap: Optional[float]) -> Optional[float]:
    """Liquidity ratio volume / market cap; None when either is missing or cap is 0."""
    _check_non_negative("total_volume", total_volume)
    _check_non_negative("market_cap", market_cap)
    if total_volume is None or not market_cap:
        return None
    return total_volume / market_cap


def classify_sentiment(up_percentage: float) -> str:
    """Retail sentiment from the community up-vote share (0-100)."""
    if not 0 <= up_percentage <= 100:
        raise InvalidInputError(f"up_percentage must be in [0, 100], got {up_percentage}")
    if up_percentage > 60:
        return "bullish"
    if up_percentage < 40:
        return "bearish"
    return "neutral"


def classify_volatility(price_change_pct_24h: Optional[float]) -> str:
    if price_change_pct_24h is not None and abs(price_change_pct_24h) > HIGH_VOLATILITY_CHANGE_PCT:
        return "high"
    return "normal"


def analyze_market_structure(
    market_cap: Optional[float],
    total_volume: Optional[float],
    price_change_pct_24h: Optional[float] = None,
    sentiment_up_pct: float = 50.0,
    market_cap_rank: Optional[int] = None,
) -> MarketStructure:
    """
    Build the market-structure snapshot from raw provider numbers.

    Args:
        market_cap: Market capitalization (quote currency)
        total_volume: Traded volume over the last 24h (quote currency)
        price_change_pct_24h: 24h price change in percent
        sentiment_up_pct: Community up-vote share, 0-100 (50 when unknown)
        market_cap_rank: Provider rank by market cap
    """
    institutional = (
        "high" if market_cap is not None and market_cap > INSTITUTIONAL_MARKET_CAP else "medium"
    )
    return MarketStructure(
        liquidity_score=liquidity_score(total_volume, market_cap),
        volatility_rating=classify_volatility(price_change_pct_24h),
        institutional_interest=institutional,
        retail_sentiment=classify_sentiment(sentiment_up_pct),
        market_cap_rank=market_cap_rank,
    )


def fundamental_score(liquidity: Optional[float]) -> float:
    if liquidity is None:
        return NEUTRAL_SUB_SCORE
    return 0.7 if liquidity > LIQUIDITY_THRESHOLD else 0.4


def sentiment_score(news_sentiment: Optional[float]) -> float:
    """Map a news sentiment score in [-1, 1] to a sub-score."""
    if news_sentiment is None:
        return NEUTRAL_SUB_SCORE
    if not -1 <= news_sentiment <= 1:
        raise InvalidInputError(f"news sentiment must be in [-1, 1], got {news_sentiment}")
    return 0.7 if news_sentiment > 0 else 0.3


def structure_score(institutional_interest: str) -> float:
    return 0.8 if institutional_interest == "high" else 0.5


def sub_scores_from_market(
    structure: MarketStructure,
    news_sentiment: Optional[float] = None,
) -> SubScores:
    """Derive the caller-side sub-scores from a market-structure snapshot."""
    return SubScores(
        fundamental=fundamental_score(structure.liquidity_score),
        sentiment=sentiment_score(news_sentiment),
        structure=structure_score(structure.institutional_interest),
    )
