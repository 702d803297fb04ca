"""
Price Structure Indicators.
Implements swing-pivot support/resistance detection and range positioning.
"""

from typing import Iterable, List, Optional, Union
import pandas as pd

from signal_engine.models import PriceBar
from .indicator_config import SUPPORT_RESISTANCE_CONFIG
from .indicator_results import PriceLevel, SupportResistanceResult
from .price_frame import as_frame


def _find_pivots(recent: pd.DataFrame, window: int) -> tuple[List[float], List[float]]:
    """Swing highs and lows: bars that are the extreme of a symmetric window."""
    highs, lows = recent['high'], recent['low']
    swing_highs, swing_lows = [], []
    for i in range(window, len(recent) - window):
        if highs.iloc[i] >= highs.iloc[i - window:i + window + 1].max():
            swing_highs.append(float(highs.iloc[i]))
        if lows.iloc[i] <= lows.iloc[i - window:i + window + 1].min():
            swing_lows.append(float(lows.iloc[i]))
    return swing_highs, swing_lows


def _measure_level(level: float, recent: pd.DataFrame, avg_volume: float) -> tuple[int, float]:
    """Count bars touching `level` and weight each touch by relative volume."""
    tolerance = SUPPORT_RESISTANCE_CONFIG['touch_tolerance']
    touched = (
        ((recent['high'] - level).abs() / level <= tolerance)
        | ((recent['low'] - level).abs() / level <= tolerance)
    )
    touches = int(touched.sum())
    if avg_volume > 0:
        strength = float((recent.loc[touched, 'volume'] / avg_volume).sum())
    else:
        strength = float(touches)
    return touches, strength


def _deduplicate(levels: List[tuple[float, int, float]]) -> List[tuple[float, int, float]]:
    """Drop levels within the dedup tolerance of a stronger one."""
    tolerance = SUPPORT_RESISTANCE_CONFIG['dedup_tolerance']
    kept: List[tuple[float, int, float]] = []
    for price, touches, strength in sorted(levels, key=lambda lvl: (lvl[2], lvl[1]), reverse=True):
        if all(abs(price - other[0]) / other[0] > tolerance for other in kept):
            kept.append((price, touches, strength))
    return sorted(kept, key=lambda lvl: lvl[0])


def calculate_support_resistance(
    bars: Union[Iterable[PriceBar], pd.DataFrame],
    period: int = SUPPORT_RESISTANCE_CONFIG['period'],
) -> Optional[SupportResistanceResult]:
    """
    Detect support/resistance levels over the last `period` bars.

    Levels at or below the current price are support, levels above are
    resistance. Breakout means the price closed above every swing high in
    the window.

    Returns:
        SupportResistanceResult, or None with fewer than `period` bars
    """
    df = as_frame(bars)
    window = SUPPORT_RESISTANCE_CONFIG['swing_window']
    if len(df) < max(period, 2 * window + 1):
        return None

    recent = df.tail(period).reset_index(drop=True)
    recent = recent.astype({'high': float, 'low': float, 'close': float, 'volume': float})
    price = float(recent['close'].iloc[-1])
    avg_volume = float(recent['volume'].mean())

    swing_highs, swing_lows = _find_pivots(recent, window)
    measured = [
        (level, *_measure_level(level, recent, avg_volume))
        for level in swing_highs + swing_lows
        if level > 0
    ]
    levels = [
        PriceLevel(
            price=round(level, 4),
            level_type='support' if level <= price else 'resistance',
            touches=touches,
            strength=round(strength, 2),
        )
        for level, touches, strength in _deduplicate(measured)
    ]

    supports = [lvl for lvl in levels if lvl.level_type == 'support']
    resistances = [lvl for lvl in levels if lvl.level_type == 'resistance']
    support = max(supports, key=lambda lvl: lvl.price) if supports else None
    resistance = min(resistances, key=lambda lvl: lvl.price) if resistances else None

    range_low = support.price if support else float(recent['low'].min())
    range_high = resistance.price if resistance else float(recent['high'].max())
    if range_high > range_low:
        position = (price - range_low) / (range_high - range_low) * 100
    else:
        position = 50.0
    position = max(0.0, min(100.0, position))

    proximity = SUPPORT_RESISTANCE_CONFIG['proximity']
    support_gap = (price - support.price) / support.price if support else None
    resistance_gap = (resistance.price - price) / price if resistance else None

    if swing_highs and price > max(swing_highs):
        signal = 'breakout'
    elif support_gap is not None and support_gap <= proximity and (
        resistance_gap is None or support_gap <= resistance_gap
    ):
        signal = 'at_support'
    elif resistance_gap is not None and resistance_gap <= proximity:
        signal = 'at_resistance'
    else:
        signal = 'in_range'

    return SupportResistanceResult(
        price=price,
        nearest_support=support.price if support else None,
        nearest_resistance=resistance.price if resistance else None,
        support_touches=support.touches if support else 0,
        resistance_touches=resistance.touches if resistance else 0,
        support_strength=support.strength if support else 0.0,
        resistance_strength=resistance.strength if resistance else 0.0,
        position_in_range=round(position, 2),
        signal=signal,
        levels=levels,
    )
