"""
Pure sub-score functions, one per indicator.

Each maps an indicator result to a 0-100 score; a missing result scores
NEUTRAL_SCORE. INDICATOR_TABLE pairs every function with its weight.
"""

from typing import Callable, Dict, Optional, Tuple

from utils.numeric_utils import clamp
from signal_engine.technical_indicators.indicator_results import (
    RSIResult, MACDResult, EMAPairResult, BollingerResult, VolumeResult, SupportResistanceResult,
)
from .scoring_config import (
    INDICATOR_WEIGHTS, NEUTRAL_SCORE,
    RSI_SCORES, RSI_FLOOR_SCORE, MACD_SCORES, EMA_SCORES, BOLLINGER_SCORES,
    SUPPORT_RESISTANCE_SCORES, VOLUME_SCORES,
)


def score_rsi(result: Optional[RSIResult]) -> float:
    if result is None:
        return NEUTRAL_SCORE
    for threshold, score in RSI_SCORES:
        if result.value <= threshold:
            return score
    return RSI_FLOOR_SCORE


def score_macd(result: Optional[MACDResult]) -> float:
    if result is None:
        return NEUTRAL_SCORE
    if result.crossover == 'bullish':
        return MACD_SCORES['bullish_crossover']
    if result.crossover == 'bearish':
        return MACD_SCORES['bearish_crossover']
    if result.histogram > 0:
        return MACD_SCORES['positive_above_zero' if result.macd > 0 else 'positive_below_zero']
    if result.histogram < 0:
        return MACD_SCORES['negative_below_zero' if result.macd < 0 else 'negative_above_zero']
    return NEUTRAL_SCORE


def score_ema_pair(result: Optional[EMAPairResult]) -> float:
    if result is None:
        return NEUTRAL_SCORE
    if result.cross == 'golden_cross':
        return EMA_SCORES['golden_cross']
    if result.cross == 'death_cross':
        return EMA_SCORES['death_cross']
    base = EMA_SCORES['alignment'].get((result.alignment, result.strength), NEUTRAL_SCORE)
    return clamp(base + EMA_SCORES['position_adjustment'][result.price_position])


def score_bollinger(result: Optional[BollingerResult]) -> float:
    if result is None:
        return NEUTRAL_SCORE
    if result.signal == 'bullish_breakout':
        return BOLLINGER_SCORES['bullish_breakout']
    if result.signal == 'bearish_breakout':
        return BOLLINGER_SCORES['bearish_breakout']

    score = BOLLINGER_SCORES['above_upper']
    for threshold, band_score in BOLLINGER_SCORES['percent_b']:
        if result.percent_b <= threshold:
            score = band_score
            break

    if result.squeeze and 40 <= score <= 60:
        score = max(score, BOLLINGER_SCORES['squeeze_floor'])
    return score


def score_support_resistance(result: Optional[SupportResistanceResult]) -> float:
    if result is None:
        return NEUTRAL_SCORE
    cfg = SUPPORT_RESISTANCE_SCORES
    if result.signal == 'at_support':
        touches = min(result.support_touches, cfg['max_touches'])
        return clamp(cfg['at_support_base'] + cfg['per_touch'] * touches)
    if result.signal == 'at_resistance':
        return cfg['at_resistance']
    if result.signal == 'breakout':
        return cfg['breakout']
    return clamp(cfg['in_range_top'] - cfg['in_range_slope'] * result.position_in_range)


def score_volume(result: Optional[VolumeResult]) -> float:
    if result is None:
        return NEUTRAL_SCORE
    cfg = VOLUME_SCORES
    if result.signal == 'bullish':
        return cfg['bullish']
    if result.signal == 'bearish':
        return cfg['bearish']
    if result.spike:
        return cfg['spike']
    if result.ratio >= cfg['elevated_ratio']:
        return cfg['elevated']
    if result.ratio >= cfg['normal_ratio']:
        return cfg['normal']
    return cfg['low']


ScoreFunction = Callable[[Optional[object]], float]

# name -> (weight, scoring function); closed set over the IndicatorSet fields
INDICATOR_TABLE: Dict[str, Tuple[float, ScoreFunction]] = {
    'rsi': (INDICATOR_WEIGHTS['rsi'], score_rsi),
    'macd': (INDICATOR_WEIGHTS['macd'], score_macd),
    'ema_pair': (INDICATOR_WEIGHTS['ema_pair'], score_ema_pair),
    'bollinger': (INDICATOR_WEIGHTS['bollinger'], score_bollinger),
    'support_resistance': (INDICATOR_WEIGHTS['support_resistance'], score_support_resistance),
    'volume': (INDICATOR_WEIGHTS['volume'], score_volume),
}
