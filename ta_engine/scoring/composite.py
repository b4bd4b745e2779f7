"""
Composite scoring: fuse technical, fundamental, sentiment and structure
sub-scores into one weighted directional prediction.

Score mapping (score in [0, 1]):
- score > 0.6 => BULLISH, score < 0.4 => BEARISH, else NEUTRAL
- confidence = |score - 0.5| * 200, clamped to [0, 100]
- risk: HIGH if score > 0.7 or score < 0.3; otherwise MEDIUM when the call is
  directional or return volatility is at/above the risk threshold; else LOW
"""
import logging
from typing import Optional, Sequence

from ..shared.defaults import (
    RSI_OVERSOLD, RSI_OVERBOUGHT,
    NEUTRAL_SUB_SCORE, BULLISH_THRESHOLD, BEARISH_THRESHOLD,
    HIGH_RISK_UPPER, HIGH_RISK_LOWER, VOLATILITY_RISK_PCT,
    PREDICTION_TIMEFRAME, POSITION_SIZE_HIGH_RISK, POSITION_SIZE_DEFAULT,
)
from ..shared.types import (
    BollingerSnapshot, Direction, PredictionReport, PriceTargets, RiskLevel,
    TradingPlan, TrendLabel,
)
from .config import ScoreWeights, SubScores

logger = logging.getLogger(__name__)


def classify_direction(score: float) -> Direction:
    if score > BULLISH_THRESHOLD:
        return Direction.BULLISH
    if score < BEARISH_THRESHOLD:
        return Direction.BEARISH
    return Direction.NEUTRAL


def confidence_from_score(score: float) -> float:
    """Distance from neutral (0.5) scaled to 0-100."""
    return min(100.0, max(0.0, abs(score - 0.5) * 200))


def classify_risk(
    score: float,
    pct_volatility: Optional[float] = None,
    volatility_risk_pct: float = VOLATILITY_RISK_PCT,
) -> RiskLevel:
    if score > HIGH_RISK_UPPER or score < HIGH_RISK_LOWER:
        return RiskLevel.HIGH
    if classify_direction(score) != Direction.NEUTRAL:
        return RiskLevel.MEDIUM
    if pct_volatility is not None and pct_volatility >= volatility_risk_pct:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class CompositeScorer:
    """Combines sub-scores into a PredictionReport using fixed, validated weights."""

    def __init__(
        self,
        weights: Optional[ScoreWeights] = None,
        rsi_oversold: float = RSI_OVERSOLD,
        rsi_overbought: float = RSI_OVERBOUGHT,
        volatility_risk_pct: float = VOLATILITY_RISK_PCT,
    ):
        """
        Initialize the scorer.

        Args:
            weights: Sub-score weights (default: technical 0.4, fundamental 0.3,
                     sentiment 0.2, structure 0.1)
            rsi_oversold: RSI below this leans bullish
            rsi_overbought: RSI above this leans bearish
            volatility_risk_pct: Return volatility (%) at which a neutral call is MEDIUM risk
        """
        self.weights = weights or ScoreWeights()
        self.rsi_oversold = rsi_oversold
        self.rsi_overbought = rsi_overbought
        self.volatility_risk_pct = volatility_risk_pct

    def technical_score(
        self,
        rsi: Optional[float],
        last_price: float,
        moving_averages: Sequence[Optional[float]] = (),
        trend_label: TrendLabel = TrendLabel.UNKNOWN,
    ) -> float:
        """
        Technical sub-score in [0, 1]: mean of a momentum and a trend component.

        Momentum reads the RSI position (oversold 0.8, overbought 0.2, else 0.5).
        In a confirmed trend, where the impulse label agrees with price sitting
        above (or below) every moving average, an extreme RSI in the trend's
        direction confirms the trend instead of signalling exhaustion.
        Trend is the fraction of moving averages the price is above.

        The result is therefore not the RSI-only 0.8/0.5/0.2 mapping. An
        overbought RSI with price above every moving average scores 0.6
        (no impulse confirmation) or 0.9 (bullish impulse), both a bullish
        lean. Callers wanting the plain RSI reading should use the report's
        `momentum.rsi` directly.
        """
        available = [ma for ma in moving_averages if ma is not None]
        if available:
            trend_component = sum(1 for ma in available if last_price > ma) / len(available)
        else:
            trend_component = NEUTRAL_SUB_SCORE

        bullish_trend = (
            bool(available) and trend_component == 1.0
            and trend_label == TrendLabel.BULLISH_IMPULSE
        )
        bearish_trend = (
            bool(available) and trend_component == 0.0
            and trend_label == TrendLabel.BEARISH_IMPULSE
        )

        if rsi is None:
            momentum = NEUTRAL_SUB_SCORE
        elif rsi < self.rsi_oversold:
            momentum = 0.2 if bearish_trend else 0.8
        elif rsi > self.rsi_overbought:
            momentum = 0.8 if bullish_trend else 0.2
        else:
            momentum = NEUTRAL_SUB_SCORE

        return (momentum + trend_component) / 2

    def combine(self, technical: float, sub_scores: SubScores) -> float:
        """Weighted sum of the four sub-scores."""
        w = self.weights
        return (
            technical * w.technical
            + sub_scores.fundamental * w.fundamental
            + sub_scores.sentiment * w.sentiment
            + sub_scores.structure * w.structure
        )

    def predict(
        self,
        technical: float,
        sub_scores: Optional[SubScores] = None,
        bollinger: Optional[BollingerSnapshot] = None,
        pct_volatility: Optional[float] = None,
    ) -> PredictionReport:
        """
        Build the prediction.

        Price targets come from the latest Bollinger lower/upper bands and are
        None when the bands are unavailable.
        """
        sub_scores = sub_scores or SubScores()
        score = self.combine(technical, sub_scores)
        targets = PriceTargets(
            support=bollinger.lower if bollinger else None,
            resistance=bollinger.upper if bollinger else None,
        )
        prediction = PredictionReport(
            direction=classify_direction(score),
            confidence=confidence_from_score(score),
            risk_level=classify_risk(score, pct_volatility, self.volatility_risk_pct),
            price_targets=targets,
            score=score,
            sub_scores={
                "technical": technical,
                "fundamental": sub_scores.fundamental,
                "sentiment": sub_scores.sentiment,
                "structure": sub_scores.structure,
            },
            timeframe=PREDICTION_TIMEFRAME,
        )
        logger.debug(
            f"Composite score {score:.3f} -> {prediction.direction.value} "
            f"(confidence={prediction.confidence:.1f}, risk={prediction.risk_level.value})"
        )
        return prediction


def build_trading_plan(prediction: PredictionReport) -> TradingPlan:
    """Stop at the support target, take profit at resistance, size by risk."""
    targets = prediction.price_targets
    size = POSITION_SIZE_HIGH_RISK if prediction.risk_level == RiskLevel.HIGH else POSITION_SIZE_DEFAULT
    return TradingPlan(
        entry_points=targets,
        stop_loss=targets.support,
        take_profit=targets.resistance,
        position_size_pct=size,
    )
