"""
Volume Indicators.
Implements relative volume, spike detection and short-term volume trend.
"""

from typing import Iterable, Optional, Union
import pandas as pd

from signal_engine.models import PriceBar
from .indicator_config import VOLUME_CONFIG
from .indicator_results import VolumeResult
from .price_frame import as_frame


def calculate_volume(
    bars: Union[Iterable[PriceBar], pd.DataFrame],
    period: int = VOLUME_CONFIG['period'],
) -> Optional[VolumeResult]:
    """
    Compare the latest volume with its recent average.

    The trend splits the last `trend_window` bars in two and compares the
    average of the later half with the earlier half.

    Returns:
        VolumeResult, or None when there are fewer than `period` bars or
        the average volume is zero
    """
    df = as_frame(bars)
    window = VOLUME_CONFIG['trend_window']
    if period < 1 or len(df) < max(period, window):
        return None

    volume = df['volume'].astype(float).fillna(0.0)
    average = float(volume.tail(period).mean())
    if average <= 0:
        return None

    current = float(volume.iloc[-1])
    ratio = current / average
    spike = ratio >= VOLUME_CONFIG['spike_ratio']

    recent = volume.tail(window).reset_index(drop=True)
    half = len(recent) // 2
    first_half = float(recent.iloc[:half].mean())
    second_half = float(recent.iloc[half:].mean())
    if first_half > 0:
        trend_ratio = second_half / first_half
    else:
        trend_ratio = float('inf') if second_half > 0 else 1.0

    if trend_ratio > VOLUME_CONFIG['increasing_ratio']:
        trend = 'increasing'
    elif trend_ratio < VOLUME_CONFIG['decreasing_ratio']:
        trend = 'decreasing'
    else:
        trend = 'stable'

    if spike and trend == 'increasing':
        signal = 'bullish'
    elif ratio < VOLUME_CONFIG['low_ratio'] and trend == 'decreasing':
        signal = 'bearish'
    else:
        signal = 'neutral'

    return VolumeResult(
        current_volume=current,
        average_volume=round(average, 2),
        ratio=round(ratio, 4),
        spike=spike,
        trend=trend,
        signal=signal,
    )
