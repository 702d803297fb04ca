"""
Indicator Library entry point.
Computes the full IndicatorSet for one timeframe's bars.
"""

from typing import Iterable

from signal_engine.models import PriceBar
from .indicator_results import IndicatorSet
from .momentum_indicators import calculate_rsi, calculate_macd
from .trend_indicators import calculate_ema_pair
from .volatility_indicators import calculate_bollinger
from .volume_indicators import calculate_volume
from .price_structure_indicators import calculate_support_resistance
from .price_frame import bars_to_dataframe


def calculate_all_indicators(bars: Iterable[PriceBar]) -> IndicatorSet:
    """
    Run every indicator over one bar series.

    Indicators that need more history than is available come back as None.
    """
    df = bars_to_dataframe(bars)
    if df.empty:
        return IndicatorSet()

    close = df['close']
    return IndicatorSet(
        rsi=calculate_rsi(close),
        macd=calculate_macd(close),
        ema_pair=calculate_ema_pair(close),
        bollinger=calculate_bollinger(close),
        volume=calculate_volume(df),
        support_resistance=calculate_support_resistance(df),
    )
