"""
Single entry point of the engine: analyze a price series into a report.

Each indicator is an independent pure function over the same input; this
module only composes them. Indicators without enough data are reported as
None and never fail the call. Invalid input or parameters raise
InvalidInputError for the whole call.
"""
import logging
from typing import Dict, Optional, Sequence, Union

import pandas as pd

from .indicators.levels import SupportResistanceDetector
from .indicators.momentum import rsi, stochastic
from .indicators.patterns import classify_phase, classify_trend_impulse
from .indicators.trend import ema, latest, macd, sma
from .indicators.volatility import (
    average_true_range, bollinger_bands, pct_volatility, price_change_pct,
)
from .scoring.composite import CompositeScorer, build_trading_plan
from .scoring.config import AnalysisParams, SubScores, resolve_params
from .shared.errors import InvalidInputError
from .shared.types import (
    AnalysisReport, ATRResult, BollingerSnapshot, MACDSnapshot, MomentumReport,
    PatternReport, StochasticSnapshot, TimeSeries, TrendReport, VolatilityReport,
)

logger = logging.getLogger(__name__)

SeriesInput = Union[TimeSeries, pd.Series, pd.DataFrame]


def _coerce_series(series: SeriesInput, volumes: Optional[Sequence[float]]) -> TimeSeries:
    if not isinstance(series, TimeSeries):
        series = TimeSeries.from_series(series)
    if volumes is not None:
        series = series.with_volumes(volumes)
    if len(series) == 0:
        raise InvalidInputError("Cannot analyze an empty series")
    return series


def _coerce_sub_scores(sub_scores: Optional[Union[SubScores, Dict[str, float]]]) -> SubScores:
    if sub_scores is None:
        return SubScores()
    if isinstance(sub_scores, SubScores):
        return sub_scores
    if isinstance(sub_scores, dict):
        try:
            return SubScores(**sub_scores)
        except TypeError as e:
            raise InvalidInputError(f"Invalid sub-scores: {e}") from e
    raise InvalidInputError(f"sub_scores must be SubScores or dict, got {type(sub_scores).__name__}")


def _moving_averages(close: pd.Series, periods: Sequence[int], func, name: str) -> Dict[int, Optional[float]]:
    values = {}
    for period in periods:
        values[period] = latest(func(close, period))
        if values[period] is None:
            logger.debug(f"{name}({period}): insufficient data ({len(close)} samples)")
    return values


def _trend_report(close: pd.Series, params: AnalysisParams) -> TrendReport:
    macd_result = macd(close, params.macd_fast, params.macd_slow, params.macd_signal)
    histogram = latest(macd_result.histogram)
    snapshot = None
    if histogram is not None:
        snapshot = MACDSnapshot(
            line=latest(macd_result.line),
            signal=latest(macd_result.signal),
            histogram=histogram,
        )
    return TrendReport(
        sma=_moving_averages(close, params.sma_periods, sma, "SMA"),
        ema=_moving_averages(close, params.ema_periods, ema, "EMA"),
        macd=snapshot,
    )


def _momentum_report(series: TimeSeries, close: pd.Series, params: AnalysisParams) -> MomentumReport:
    rsi_value = latest(rsi(close, params.rsi_period))
    if rsi_value is None:
        logger.debug(f"RSI({params.rsi_period}): insufficient data ({len(close)} samples)")

    stoch = stochastic(
        close, params.stoch_k_period, params.stoch_d_period,
        highs=series.highs, lows=series.lows,
    )
    k_value = latest(stoch.k)
    stoch_snapshot = StochasticSnapshot(k=k_value, d=latest(stoch.d)) if k_value is not None else None
    return MomentumReport(rsi=rsi_value, stochastic=stoch_snapshot)


def _volatility_report(
    series: TimeSeries,
    close: pd.Series,
    params: AnalysisParams,
    degraded: list,
) -> VolatilityReport:
    bands = bollinger_bands(close, params.bb_period, params.bb_k)
    middle = latest(bands.middle)
    bollinger = None
    if middle is not None:
        bollinger = BollingerSnapshot(
            upper=latest(bands.upper), middle=middle, lower=latest(bands.lower),
        )
    else:
        logger.debug(f"Bollinger({params.bb_period}): insufficient data ({len(close)} samples)")

    atr_series = average_true_range(
        close, params.atr_period,
        highs=series.highs, lows=series.lows,
        synthetic_spread=params.atr_synthetic_spread,
    )
    atr_value = latest(atr_series.values)
    atr = None
    if atr_value is not None:
        atr = ATRResult(
            value=atr_value,
            approximated=atr_series.approximated,
            synthetic_spread=atr_series.synthetic_spread,
        )
        if atr_series.approximated:
            degraded.append("atr_synthetic_high_low")
            logger.info(
                f"ATR approximated from close with a synthetic "
                f"+/-{atr_series.synthetic_spread:.1%} high/low spread"
            )

    return VolatilityReport(
        bollinger=bollinger,
        atr=atr,
        pct_volatility=pct_volatility(close),
        price_change_pct=price_change_pct(close),
    )


def analyze(
    series: SeriesInput,
    volumes: Optional[Sequence[float]] = None,
    params: Optional[Union[AnalysisParams, Dict[str, object]]] = None,
    sub_scores: Optional[Union[SubScores, Dict[str, float]]] = None,
) -> AnalysisReport:
    """
    Analyze a price series into trend, momentum, volatility, levels,
    pattern labels and a composite prediction.

    Args:
        series: TimeSeries (or a pandas Series/DataFrame convertible to one)
        volumes: Optional volume sequence; replaces the series' own volumes
        params: AnalysisParams, a dict of overrides, or None for defaults
        sub_scores: Caller-supplied fundamental/sentiment/structure sub-scores
                    (SubScores or dict); neutral 0.5 when omitted

    Returns:
        AnalysisReport with None for every indicator lacking data

    Raises:
        InvalidInputError: On invalid prices, empty series or bad parameters
    """
    series = _coerce_series(series, volumes)
    params = resolve_params(params)
    sub_scores = _coerce_sub_scores(sub_scores)

    close = series.close
    last_price = float(series.prices[-1])
    degraded = []

    trend = _trend_report(close, params)
    momentum = _momentum_report(series, close, params)
    volatility = _volatility_report(series, close, params, degraded)

    detector = SupportResistanceDetector(
        lookback=params.sr_lookback, max_levels=params.sr_max_levels,
    )
    levels = detector.detect(close, volumes=series.volumes)

    impulse = classify_trend_impulse(close, params.pattern_window, params.impulse_ratio)
    phase = classify_phase(
        close, series.volumes, params.pattern_window,
        params.trending_range_pct, params.consolidation_range_pct,
    )
    pattern = PatternReport(
        trend_label=impulse.label,
        trend_confidence=impulse.confidence,
        phase_label=phase.label,
        volume_trend=phase.volume_trend,
        price_volume_relationship=phase.price_volume_relationship,
    )

    scorer = CompositeScorer(
        weights=params.weights,
        rsi_oversold=params.rsi_oversold,
        rsi_overbought=params.rsi_overbought,
        volatility_risk_pct=params.volatility_risk_pct,
    )
    technical = scorer.technical_score(
        momentum.rsi,
        last_price,
        list(trend.sma.values()) + list(trend.ema.values()),
        impulse.label,
    )
    prediction = scorer.predict(
        technical, sub_scores, volatility.bollinger, volatility.pct_volatility,
    )

    logger.info(
        f"Analyzed {len(series)} samples: {prediction.direction.value} "
        f"(confidence={prediction.confidence:.1f}%, risk={prediction.risk_level.value}), "
        f"{len(levels)} levels, trend={impulse.label.value}, phase={phase.label.value}"
    )

    return AnalysisReport(
        trend=trend,
        momentum=momentum,
        volatility=volatility,
        levels=levels,
        pattern=pattern,
        prediction=prediction,
        trading_plan=build_trading_plan(prediction),
        last_price=last_price,
        sample_count=len(series),
        degraded=degraded,
    )
